"""
Server logging module.

This module handles server-side logging functionality.
"""

import logging
from pathlib import Path
from typing import Optional

from common.constants import LOG_FORMAT, LOG_DATE_FORMAT


class ServerLogger:
    """Server logging class."""

    def __init__(self, log_level: int = logging.INFO, log_file: Optional[str] = None):
        self.logger = logging.getLogger('chat_server')
        self._handlers = []
        self.configure(log_level, log_file)

    def configure(self, log_level: int = logging.INFO, log_file: Optional[str] = None):
        """(Re)build handlers. Called once at import and again at startup."""
        self.logger.setLevel(log_level)

        # Remove handlers from the previous configure() call
        for handler in self._handlers:
            self.logger.removeHandler(handler)
            handler.close()
        self._handlers = []

        formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)
        self._handlers.append(console_handler)

        self.log_file = None
        if log_file:
            self.log_file = Path(log_file)
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(self.log_file, encoding='utf-8')
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)
            self._handlers.append(file_handler)

    def info(self, message: str):
        """Log info message."""
        self.logger.info(message)

    def error(self, message: str):
        """Log error message."""
        self.logger.error(message)

    def warning(self, message: str):
        """Log warning message."""
        self.logger.warning(message)

    def debug(self, message: str):
        """Log debug message."""
        self.logger.debug(message)

    def log_startup(self, addr: str, max_clients: int, max_line_length: int):
        self.info(f"Chat server listening on {addr}")
        self.info(f"Max clients: {max_clients}, max line length: {max_line_length}")

    def log_connection(self, addr):
        """Log accepted connection."""
        self.info(f"Incoming connection from {addr}")

    def log_login(self, username: str, addr):
        """Log successful authentication."""
        self.info(f"{username} joined from {addr}")

    def log_auth_failure(self, addr, reason: str):
        self.warning(f"Authentication failed for {addr}: {reason}")

    def log_server_full(self, username: str, addr):
        self.warning(f"Rejected {username} from {addr}: server is full")

    def log_disconnect(self, username: Optional[str], addr):
        """Log session teardown."""
        if username is not None:
            self.info(f"{username} disconnected.")
        else:
            self.info(f"Client {addr} disconnected before successful AUTH.")

    def log_chat(self, username: str, message: str):
        """Log chat message."""
        self.debug(f"Chat from {username}: {message}")

    def log_delivery_failure(self, recipient: str, error: Exception):
        self.warning(f"Failed to deliver to {recipient}: {error}")

    def log_error(self, operation: str, error: Exception):
        """Log error with operation context."""
        self.error(f"Error in {operation}: {error}")


# Global logger instance
logger = ServerLogger()
