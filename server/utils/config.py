"""
Server configuration module.

This module handles server-side configuration settings.
"""

from typing import Optional

from common.constants import (
    DEFAULT_SERVER_HOST, DEFAULT_PORT, MAX_CLIENTS, MAX_LINE_LENGTH, STREAM_LIMIT
)


class ServerConfig:
    """Server configuration class."""

    def __init__(self, host: str = DEFAULT_SERVER_HOST, port: int = DEFAULT_PORT,
                 max_clients: int = MAX_CLIENTS, max_line_length: int = MAX_LINE_LENGTH,
                 users_file: Optional[str] = None, log_file: Optional[str] = None):
        if max_clients < 1:
            raise ValueError(f"max_clients must be positive, got {max_clients}")
        if max_line_length < 1:
            raise ValueError(f"max_line_length must be positive, got {max_line_length}")

        self.host = host
        self.port = port
        self.max_clients = max_clients
        self.max_line_length = max_line_length
        self.users_file = users_file

        # Logging configuration
        self.log_file = log_file

        # Reader buffer must hold at least one full protocol line
        self.stream_limit = max(STREAM_LIMIT, max_line_length * 4 + 2)
