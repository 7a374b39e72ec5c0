#!/usr/bin/env python3
"""
Chat Client - Main Entry Point

Console client for the line chat server.

Usage:
    python main_client.py [--host HOST] [--port PORT] [--username NAME]

Anything not given on the command line is asked for interactively.
Type /quit to leave the chat.
"""

import argparse
import asyncio
import getpass
import logging
import sys

from common.constants import DEFAULT_HOST
from client.chat.chat_client import ChatClient
from client.utils.config import ClientConfig
from client.utils.logger import logger


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Line chat console client')
    parser.add_argument('--host', type=str, default=None,
                        help=f'Server host (default: ask, {DEFAULT_HOST} if blank)')
    parser.add_argument('--port', type=int, default=None,
                        help='Server port (default: ask)')
    parser.add_argument('--username', type=str, default=None,
                        help='Username (default: ask)')
    parser.add_argument('--verbose', action='store_true',
                        help='Show connection diagnostics')
    return parser.parse_args(argv)


def prompt_config(args: argparse.Namespace, ask=input, ask_secret=getpass.getpass) -> ClientConfig:
    """Fill in whatever the command line left out."""
    host = args.host
    if host is None:
        host = ask(f"Server host (default: {DEFAULT_HOST}): ").strip()

    port = args.port
    if port is None:
        port = int(ask("Server port (e.g. 12345): ").strip())

    username = args.username
    if username is None:
        username = ask("Username: ")

    password = ask_secret("Password: ")
    return ClientConfig(host=host, port=port, username=username, password=password)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    if args.verbose:
        logger.set_level(logging.INFO)

    try:
        config = prompt_config(args)
    except ValueError:
        print("Port must be a number.")
        return 1
    except (EOFError, KeyboardInterrupt):
        return 1

    if not config.has_credentials():
        print("Username and password cannot be empty.")
        return 1

    client = ChatClient(config)
    try:
        ok = asyncio.run(client.interactive_mode())
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 0

    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
