"""
Client configuration module.

This module handles client-side configuration settings.
"""

from common.constants import DEFAULT_HOST, DEFAULT_PORT


class ClientConfig:
    """Client configuration class."""

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT,
                 username: str = '', password: str = ''):
        self.host = host or DEFAULT_HOST
        self.port = port
        self.username = username.strip()
        self.password = password.strip()

    def has_credentials(self) -> bool:
        """Both username and password are non-empty."""
        return bool(self.username) and bool(self.password)
