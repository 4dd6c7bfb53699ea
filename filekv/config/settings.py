"""
filekv Configuration Settings

This module contains all configuration constants for the filekv server.
Network and logging values can be overridden through the environment;
the protocol ceilings are part of the wire contract and are fixed.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Server configuration settings."""

    # Network settings
    HOST: str = os.environ.get("FILEKV_HOST", "0.0.0.0")
    PORT: int = int(os.environ.get("FILEKV_PORT", "5000"))
    LISTEN_BACKLOG: int = 8

    # Storage settings
    DATA_DIR: str = os.environ.get("FILEKV_DATA_DIR", ".")

    # Protocol ceilings (bytes)
    BUFFER_SIZE: int = 1024
    MAX_COMMAND_LENGTH: int = 9
    MAX_KEY_LENGTH: int = 99

    # Connection settings
    ACCEPT_POLL_INTERVAL: float = 0.5  # Seconds between shutdown flag checks
    CONNECTION_TIMEOUT: float = 30.0  # Seconds before a silent client is dropped

    # Logging settings
    DEBUG: bool = os.environ.get("FILEKV_DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.environ.get("FILEKV_LOG_LEVEL", "INFO")

    @property
    def max_value_length(self) -> int:
        """Largest SET value accepted from a single read."""
        return self.BUFFER_SIZE - 1

    @property
    def max_content_length(self) -> int:
        """Largest stored content echoed back by GET ("OK\\n" + content + "\\n")."""
        return self.BUFFER_SIZE - 5


# Global settings instance
settings = Settings()
