"""
Chat session module.

One Session per accepted connection: AUTH handshake, registration, the
message loop and teardown.
"""

import asyncio
from enum import Enum
from typing import Optional

from common.constants import Commands, Replies, MAX_LINE_LENGTH, ENCODING, LINE_TERMINATOR
from common.protocol_definitions import (
    ChatMessage, LineTooLongError, decode_line, encode_line, split_command,
    create_error_line, create_welcome_line, create_goodbye_line,
    create_joined_notice, create_left_notice, create_echo_line
)
from server.auth.auth_gate import AuthGate
from server.chat.broadcaster import Broadcaster
from server.chat.registry import ClientRegistry
from server.utils.logger import logger


class SessionState(Enum):
    CONNECTED = 'connected'
    AUTHENTICATING = 'authenticating'
    AUTHENTICATED = 'authenticated'
    CLOSING = 'closing'
    CLOSED = 'closed'


LINE_SEPARATOR = LINE_TERMINATOR.encode(ENCODING)

# Errors that mean the peer is gone
CONNECTION_ERRORS = (ConnectionError, OSError, asyncio.IncompleteReadError)


class Session:
    """Per-connection state machine."""

    def __init__(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter,
                 registry: ClientRegistry, broadcaster: Broadcaster, auth_gate: AuthGate,
                 max_line_length: int = MAX_LINE_LENGTH):
        self.reader = reader
        self.writer = writer
        self.registry = registry
        self.broadcaster = broadcaster
        self.auth_gate = auth_gate
        self.max_line_length = max_line_length

        self.addr = writer.get_extra_info('peername')
        self.username: Optional[str] = None
        self.state = SessionState.CONNECTED
        self.was_authenticated = False
        self._send_lock = asyncio.Lock()

    @property
    def display_name(self) -> str:
        return self.username if self.username is not None else str(self.addr)

    async def read_line(self) -> Optional[str]:
        """
        Read one protocol line. Returns None at end of stream.

        Raises:
            LineTooLongError: if the line overflowed the stream buffer. The
                whole line, up to and including its newline, is consumed first.
        """
        try:
            data = await self.reader.readuntil(LINE_SEPARATOR)
        except asyncio.IncompleteReadError as e:
            # EOF; a final unterminated line still counts
            data = e.partial
        except asyncio.LimitOverrunError as e:
            await self._discard_line(e.consumed)
            raise LineTooLongError() from e

        if not data:
            return None
        return decode_line(data)

    async def _discard_line(self, consumed: int):
        """Drop the rest of an overflowing line, however many chunks it spans."""
        while True:
            await self.reader.readexactly(consumed)
            try:
                await self.reader.readuntil(LINE_SEPARATOR)
                return
            except asyncio.IncompleteReadError:
                return
            except asyncio.LimitOverrunError as e:
                consumed = e.consumed

    async def send(self, line: str):
        """Write one line to this connection. Raises on I/O failure."""
        # Broadcasts from other sessions share this writer; one drain at a time
        async with self._send_lock:
            if self.writer.is_closing():
                raise ConnectionResetError(f"Connection to {self.display_name} is closed")
            self.writer.write(encode_line(line))
            await self.writer.drain()

    async def run(self):
        """Drive the session from accept to close."""
        try:
            self.state = SessionState.AUTHENTICATING
            if await self._authenticate():
                await self._message_loop()
        except asyncio.CancelledError:
            logger.info(f"Session cancelled for {self.display_name}")
            raise
        except CONNECTION_ERRORS as e:
            logger.info(f"Connection error with {self.display_name}: {e}")
        except Exception as e:
            logger.log_error(f"session {self.display_name}", e)
        finally:
            await self.close()

    async def _authenticate(self) -> bool:
        username = await self.auth_gate.authenticate(self)
        if username is None:
            return False

        self.username = username
        if not await self.registry.try_register(self):
            logger.log_server_full(username, self.addr)
            await self.send(create_error_line(Replies.SERVER_FULL))
            return False

        self.state = SessionState.AUTHENTICATED
        self.was_authenticated = True

        # send() reaches writer.write before its first suspension, so the
        # welcome is buffered ahead of any broadcast to this session
        await self.send(create_welcome_line(username))
        await self.broadcaster.broadcast(create_joined_notice(username), exclude=self)
        logger.log_login(username, self.addr)
        return True

    async def _message_loop(self):
        while self.state == SessionState.AUTHENTICATED:
            try:
                line = await self.read_line()
            except LineTooLongError:
                await self._reply_line_too_long()
                continue

            if line is None:
                break

            await self.handle_line(line)

    async def handle_line(self, line: str):
        """Handle one line from an authenticated client."""
        if len(line) > self.max_line_length:
            await self._reply_line_too_long()
            return

        command, argument = split_command(line)
        if command == Commands.MSG and argument is not None:
            text = argument.strip()
            if not text:
                return
            logger.log_chat(self.username, text)
            message = ChatMessage(sender=self.username, text=text)
            await self.broadcaster.broadcast(message.render(), exclude=self)
            await self.send(create_echo_line(text))
        elif line == Commands.QUIT:
            await self.send(create_goodbye_line())
            self.state = SessionState.CLOSING
        else:
            await self.send(create_error_line(Replies.UNKNOWN_COMMAND))

    async def _reply_line_too_long(self):
        await self.send(create_error_line(
            Replies.LINE_TOO_LONG.format(max_length=self.max_line_length)))

    async def close(self):
        """Unregister, close the connection and announce the departure."""
        if self.state == SessionState.CLOSED:
            return
        self.state = SessionState.CLOSING

        await self.registry.unregister(self)

        try:
            self.writer.close()
            await self.writer.wait_closed()
        except CONNECTION_ERRORS:
            pass

        self.state = SessionState.CLOSED

        if self.was_authenticated:
            await self.broadcaster.broadcast(create_left_notice(self.username), exclude=self)
        logger.log_disconnect(self.username if self.was_authenticated else None, self.addr)
