#!/usr/bin/env python3
"""
Interactive Test Client for filekv

A simple command-line client for manually testing the filekv server.
The server answers one request per connection, so every command opens
a fresh connection.

Usage:
    python scripts/client.py                  # Connect to localhost:5000
    python scripts/client.py --host 1.2.3.4   # Connect to specific host
    python scripts/client.py --port 8080      # Connect to specific port
    python scripts/client.py GET greeting     # Send one command and exit

Commands:
    SET <key> <value...>  - Store a value (may contain spaces)
    GET <key>             - Retrieve a value
    DEL <key>             - Delete a key
    help                  - Show this help
    exit                  - Exit client
"""

import argparse
import socket
import sys

# Enable command history with arrow keys (works on Unix systems)
try:
    import readline  # noqa: F401
except ImportError:
    pass  # readline not available on Windows by default


class FileKVClient:
    """Simple one-shot TCP client for filekv."""

    def __init__(self, host: str, port: int, timeout: float = 5.0):
        self.host = host
        self.port = port
        self.timeout = timeout

    def send_command(self, command: str) -> str:
        """Send a single command on a new connection and return the reply."""
        if not command.endswith('\n'):
            command += '\n'

        try:
            with socket.create_connection((self.host, self.port), timeout=self.timeout) as sock:
                sock.sendall(command.encode('utf-8'))
                sock.shutdown(socket.SHUT_WR)

                response = b''
                while True:
                    chunk = sock.recv(4096)
                    if not chunk:
                        break
                    response += chunk
        except socket.timeout:
            return "ERROR: Request timed out"
        except OSError as e:
            return f"ERROR: {e}"

        if not response:
            return "ERROR: Connection closed by server"
        return response.decode('utf-8', errors='replace').rstrip('\n')


def print_help():
    """Print help message."""
    print("""
filekv Commands:
----------------
  SET <key> <value...>      Store a value; everything after the key is kept
  GET <key>                 Retrieve the value for a key
  DEL <key>                 Delete a key (always OK)

  Keys may not contain '/', '\\', '.' or spaces.

Client Commands:
----------------
  help                      Show this help message
  exit                      Exit the client

Examples:
---------
  SET greeting hello world  Store "hello world" under "greeting"
  GET greeting              Get value for "greeting"
  DEL greeting              Delete "greeting"
""")


def main():
    parser = argparse.ArgumentParser(
        description="Interactive test client for filekv"
    )
    parser.add_argument(
        "--host",
        type=str,
        default="localhost",
        help="Server host (default: localhost)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=5000,
        help="Server port (default: 5000)"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=5.0,
        help="Socket timeout in seconds (default: 5.0)"
    )
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Send this single command and exit"
    )

    args = parser.parse_args()
    client = FileKVClient(args.host, args.port, args.timeout)

    if args.command:
        response = client.send_command(" ".join(args.command))
        print(response)
        sys.exit(1 if response.startswith("ERROR") else 0)

    print(f"filekv Client ({args.host}:{args.port})")
    print("Type 'help' for commands.\n")

    try:
        while True:
            try:
                command = input(">>> ").strip()
            except EOFError:
                print("\nGoodbye!")
                break

            if not command:
                continue

            lower_cmd = command.lower()
            if lower_cmd == "help":
                print_help()
                continue
            if lower_cmd in ("exit", "quit"):
                print("Goodbye!")
                break

            print(client.send_command(command))

    except KeyboardInterrupt:
        print("\n\nInterrupted. Goodbye!")


if __name__ == "__main__":
    main()
