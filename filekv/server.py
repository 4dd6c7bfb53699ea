#!/usr/bin/env python3
"""
filekv Server Entry Point

This is the main entry point for starting the filekv server.

Usage:
    python -m filekv.server                      # Default settings (0.0.0.0:5000)
    python -m filekv.server --port 8080          # Custom port
    python -m filekv.server --host 127.0.0.1     # Custom host
    python -m filekv.server --data-dir ./data    # Where key files live
    python -m filekv.server --debug              # Enable debug logging

Environment Variables:
    FILEKV_HOST       - Server bind address
    FILEKV_PORT       - Server port
    FILEKV_DATA_DIR   - Directory holding one file per key
    FILEKV_DEBUG      - Enable debug mode (true/false)
    FILEKV_LOG_LEVEL  - Log level when not in debug mode
"""

import argparse
import logging
import signal
import sys
from typing import List, Optional

from .config.settings import settings
from .network.tcp_server import KVServer
from .storage.filesystem import FileStorage


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="filekv: File-Backed Key-Value Store Server",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--host",
        type=str,
        default=settings.HOST,
        help="Host address to bind to",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=settings.PORT,
        help="Port number to listen on",
    )

    parser.add_argument(
        "--data-dir",
        type=str,
        default=settings.DATA_DIR,
        help="Directory holding one file per key",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        default=settings.DEBUG,
        help="Enable debug logging",
    )

    return parser.parse_args(argv)


def setup_logging(debug: bool = False) -> None:
    """Configure logging based on debug flag."""
    level = logging.DEBUG if debug else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
        ]
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the server."""
    args = parse_args(argv)

    setup_logging(debug=args.debug)
    logger = logging.getLogger(__name__)

    try:
        storage = FileStorage(args.data_dir)
    except OSError as e:
        logger.error(f"Failed to start server: {e}")
        return 1

    server = KVServer(host=args.host, port=args.port, storage=storage)

    def handle_signal(signum, frame) -> None:
        """Set the shutdown flag; the accept loop notices it on its next poll."""
        logger.info(f"Received signal {signal.Signals(signum).name}, initiating shutdown...")
        server.request_shutdown()

    # Installed before bind so an early interrupt still shuts down cleanly
    handled = [signal.SIGINT]
    if hasattr(signal, "SIGTERM"):
        handled.append(signal.SIGTERM)
    previous = {sig: signal.signal(sig, handle_signal) for sig in handled}

    try:
        try:
            server.bind()
        except OSError as e:
            logger.error(f"Failed to start server: {e}")
            return 1

        print(f"filekv listening on port {server.port} (data dir: {storage.root})", flush=True)
        logger.info(f"  Host: {args.host}")
        logger.info(f"  Data dir: {storage.root.resolve()}")
        logger.info(f"  Debug: {args.debug}")

        server.serve_forever()

        print("Server shut down cleanly.", flush=True)
        logger.info(f"Server shutdown complete: {server.get_stats()}")
        return 0
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


if __name__ == "__main__":
    sys.exit(main())
