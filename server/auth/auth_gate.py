"""
AUTH handshake module.

Validates the first line of a new connection against the credential store.
"""

from common.constants import Commands, Replies, MAX_LINE_LENGTH
from common.protocol_definitions import AuthRequest, LineTooLongError, create_error_line
from server.auth.credential_store import CredentialStore
from server.utils.logger import logger


class AuthError(Exception):
    """Failed AUTH handshake. ``reply`` is the text sent back to the client."""

    def __init__(self, reply: str):
        super().__init__(reply)
        self.reply = reply


class AuthGate:
    """Checks the AUTH line of each connection."""

    def __init__(self, credentials: CredentialStore, max_line_length: int = MAX_LINE_LENGTH):
        self.credentials = credentials
        self.max_line_length = max_line_length

    def parse(self, line: str) -> AuthRequest:
        """
        Parse an AUTH line without checking credentials.

        Raises:
            AuthError: on any syntax violation.
        """
        if not line.startswith(Commands.AUTH + ' '):
            raise AuthError(Replies.EXPECTED_AUTH)

        if len(line) > self.max_line_length:
            raise AuthError(Replies.AUTH_LINE_TOO_LONG)

        parts = line.split(' ', 2)
        if len(parts) != 3:
            raise AuthError(Replies.EXPECTED_AUTH)

        username = parts[1].strip()
        password = parts[2].strip()
        if not username or not password:
            raise AuthError(Replies.EMPTY_CREDENTIALS)

        # Passwords cannot carry whitespace: exactly three tokens
        if len(line.split()) != 3:
            raise AuthError(Replies.EXPECTED_AUTH)

        return AuthRequest(username=username, password=password)

    def check(self, line: str) -> str:
        """Validate an AUTH line and return the authenticated username."""
        request = self.parse(line)
        if not self.credentials.verify(request.username, request.password):
            raise AuthError(Replies.INVALID_CREDENTIALS)
        return request.username

    async def authenticate(self, session):
        """
        Run the handshake for a session.

        Reads exactly one line. On failure the ERROR reply is sent and None is
        returned; the caller must close the session without registering it.
        Duplicate logins are allowed: the username is not checked against
        sessions already registered.
        """
        try:
            line = await session.read_line()
        except LineTooLongError:
            await session.send(create_error_line(Replies.AUTH_LINE_TOO_LONG))
            logger.log_auth_failure(session.addr, "line too long")
            return None

        if line is None:
            logger.log_auth_failure(session.addr, "connection closed before AUTH")
            return None

        try:
            username = self.check(line)
        except AuthError as e:
            await session.send(create_error_line(e.reply))
            logger.log_auth_failure(session.addr, e.reply)
            return None

        return username
