"""
Credential store module.

Read-only username -> password lookup, loaded once at startup from a
text file of ``username,password`` lines.
"""

from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Union

from common.constants import CREDENTIALS_COMMENT_PREFIX, CREDENTIALS_SEPARATOR
from server.utils.logger import logger


class CredentialsError(Exception):
    """Credentials file missing or unreadable."""


class CredentialStore:
    """Immutable mapping of username to plaintext password."""

    def __init__(self, users: Optional[Mapping[str, str]] = None):
        self._users = MappingProxyType(dict(users or {}))

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'CredentialStore':
        """
        Load credentials from a file.

        Blank lines and lines starting with '#' are ignored. Each other line
        is split at its first comma; lines without a comma are skipped with a
        warning, as are lines with an empty username. A later line for the
        same username overrides an earlier one.

        Raises:
            CredentialsError: if the file cannot be read.
        """
        path = Path(path)
        try:
            text = path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise CredentialsError(f"Cannot read credentials file {path}: {e}") from e

        store = cls.from_lines(text.splitlines())
        logger.info(f"Loaded {len(store)} user(s) from {path}")
        return store

    @classmethod
    def from_lines(cls, lines) -> 'CredentialStore':
        """Parse credential lines; see load() for the format."""
        users: Dict[str, str] = {}
        for line in lines:
            line = line.strip()
            if not line or line.startswith(CREDENTIALS_COMMENT_PREFIX):
                continue

            username, sep, password = line.partition(CREDENTIALS_SEPARATOR)
            if not sep:
                logger.warning(f"Skipping malformed credentials line: {line}")
                continue

            username = username.strip()
            if not username:
                logger.warning(f"Skipping credentials line with empty username: {line}")
                continue
            users[username] = password.strip()

        return cls(users)

    def get_password(self, username: str) -> Optional[str]:
        return self._users.get(username)

    def verify(self, username: str, password: str) -> bool:
        """True when username is known and password matches exactly."""
        expected = self._users.get(username)
        return expected is not None and expected == password

    def __contains__(self, username: str) -> bool:
        return username in self._users

    def __len__(self) -> int:
        return len(self._users)
