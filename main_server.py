#!/usr/bin/env python3
"""
Chat Server - Main Entry Point

Loads the credentials file and runs the line chat server.

Usage:
    python main_server.py users.csv

Optional arguments:
    --host HOST              Bind address (default: 0.0.0.0)
    --port PORT              TCP port (default: 12345)
    --max-clients N          Authenticated client capacity (default: 50)
    --max-line-length N      Protocol line cap in characters (default: 512)
    --log-level LEVEL        DEBUG, INFO, WARNING or ERROR (default: INFO)
    --log-file PATH          Also write the server log to PATH
"""

import argparse
import asyncio
import logging
import sys

from common.constants import DEFAULT_SERVER_HOST, DEFAULT_PORT, MAX_CLIENTS, MAX_LINE_LENGTH
from server.auth.credential_store import CredentialStore, CredentialsError
from server.main_server import ChatServer
from server.utils.config import ServerConfig
from server.utils.logger import logger


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Authenticated line chat server')
    parser.add_argument('users_file',
                        help='CSV file with username,password lines')
    parser.add_argument('--host', type=str, default=DEFAULT_SERVER_HOST,
                        help=f'Host to bind to (default: {DEFAULT_SERVER_HOST})')
    parser.add_argument('--port', type=int, default=DEFAULT_PORT,
                        help=f'TCP port (default: {DEFAULT_PORT})')
    parser.add_argument('--max-clients', type=int, default=MAX_CLIENTS,
                        help=f'Maximum authenticated clients (default: {MAX_CLIENTS})')
    parser.add_argument('--max-line-length', type=int, default=MAX_LINE_LENGTH,
                        help=f'Maximum characters per protocol line (default: {MAX_LINE_LENGTH})')
    parser.add_argument('--log-level', type=str, default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level (default: INFO)')
    parser.add_argument('--log-file', type=str, default=None,
                        help='Optional file to copy the server log to')
    return parser.parse_args(argv)


async def serve(config: ServerConfig, credentials: CredentialStore):
    """Build the server inside the running loop and serve until cancelled."""
    server = ChatServer(config, credentials)
    await server.start()


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    logger.configure(getattr(logging, args.log_level), args.log_file)

    try:
        config = ServerConfig(
            host=args.host,
            port=args.port,
            max_clients=args.max_clients,
            max_line_length=args.max_line_length,
            users_file=args.users_file,
            log_file=args.log_file
        )
        credentials = CredentialStore.load(config.users_file)
    except (ValueError, CredentialsError) as e:
        logger.error(f"Fatal server error: {e}")
        return 1

    try:
        asyncio.run(serve(config, credentials))
    except KeyboardInterrupt:
        logger.info("Server shutting down...")
    except OSError as e:
        logger.error(f"Server failed to start: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
