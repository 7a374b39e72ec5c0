"""
Chat client module.

This module handles client-side chat messaging functionality: the AUTH
handshake, sending MSG/QUIT lines and printing whatever the server sends.
"""

import asyncio
import sys
from typing import Callable, Optional

from common.constants import Commands
from common.protocol_definitions import (
    create_auth_line, create_msg_line, create_quit_line,
    decode_line, encode_line, is_error_reply
)
from client.utils.config import ClientConfig
from client.utils.logger import logger

# How long to wait for the server to close after QUIT
QUIT_GRACE_SECONDS = 2.0


def translate_input(user_input: str) -> Optional[str]:
    """
    Turn a console line into a protocol line.

    '/quit' (any case) becomes QUIT, blank input becomes None, anything else
    is sent as a chat message.
    """
    text = user_input.rstrip('\r\n')
    if text.strip().lower() == Commands.CLIENT_QUIT:
        return create_quit_line()
    if not text.strip():
        return None
    return create_msg_line(text)


class ChatClient:
    """Client-side chat functionality."""

    def __init__(self, config: ClientConfig, message_handler: Optional[Callable[[str], None]] = None):
        self.config = config
        self.reader: Optional[asyncio.StreamReader] = None
        self.writer: Optional[asyncio.StreamWriter] = None
        self.running = False
        self.message_handler = message_handler or print

    async def connect(self) -> bool:
        """Open the TCP connection to the server."""
        try:
            self.reader, self.writer = await asyncio.open_connection(self.config.host, self.config.port)
        except OSError as e:
            self.message_handler(f"Could not connect to server: {e}")
            logger.log_connection(self.config.host, self.config.port, False)
            logger.log_error("connection", e)
            return False

        logger.log_connection(self.config.host, self.config.port, True)
        self.message_handler(f"Connected to server {self.config.host}:{self.config.port}")
        self.running = True
        return True

    async def send_line(self, line: str) -> bool:
        """Send one protocol line to the server."""
        if not self.writer:
            logger.error("Not connected to server")
            return False

        try:
            self.writer.write(encode_line(line))
            await self.writer.drain()
            return True
        except (ConnectionError, OSError) as e:
            logger.log_error("send", e)
            self.running = False
            return False

    async def read_line(self) -> Optional[str]:
        """Read one server line. Returns None when the server hangs up."""
        data = await self.reader.readline()
        if not data:
            return None
        return decode_line(data)

    async def authenticate(self) -> bool:
        """Send AUTH and report the server's reply. True when accepted."""
        if not await self.send_line(create_auth_line(self.config.username, self.config.password)):
            return False

        response = await self.read_line()
        if response is None:
            self.message_handler("Server closed connection.")
            return False

        self.message_handler(f"Server: {response}")
        accepted = not is_error_reply(response)
        logger.log_login(self.config.username, accepted)
        return accepted

    async def send_quit(self) -> bool:
        return await self.send_line(create_quit_line())

    async def handle_input(self, user_input: str) -> bool:
        """Forward one console line. Returns False once the user has quit."""
        line = translate_input(user_input)
        if line is None:
            return True
        if line == create_quit_line():
            await self.send_quit()
            return False
        logger.log_chat_sent(line)
        return await self.send_line(line)

    async def listen_for_messages(self):
        """Print server lines until the connection ends."""
        try:
            while self.running:
                line = await self.read_line()
                if line is None:
                    break
                self.message_handler(line)
        except asyncio.CancelledError:
            raise
        except (ConnectionError, OSError) as e:
            self.message_handler("Connection to server lost.")
            logger.log_error("listener", e)
        finally:
            self.running = False

    async def interactive_mode(self, input_reader: Optional[Callable[[], str]] = None):
        """
        Run the console chat.

        `input_reader` is a blocking callable returning one line ('' at EOF);
        it runs in the default executor so the listener keeps printing.
        """
        input_reader = input_reader or sys.stdin.readline

        if not await self.connect():
            return False

        try:
            if not await self.authenticate():
                return False

            listener_task = asyncio.create_task(self.listen_for_messages())
            self.message_handler("Type messages and press Enter to send.")
            self.message_handler(f"Type {Commands.CLIENT_QUIT} to exit.")

            loop = asyncio.get_running_loop()
            try:
                while self.running:
                    user_input = await loop.run_in_executor(None, input_reader)
                    if not user_input:
                        break
                    if not await self.handle_input(user_input):
                        # Let the listener print the goodbye before the server hangs up
                        await asyncio.wait({listener_task}, timeout=QUIT_GRACE_SECONDS)
                        break
            finally:
                listener_task.cancel()
                try:
                    await listener_task
                except asyncio.CancelledError:
                    pass

            self.message_handler("Client terminating...")
            return True
        finally:
            await self.close()

    async def close(self):
        self.running = False
        if self.writer:
            self.writer.close()
            try:
                await self.writer.wait_closed()
            except (ConnectionError, OSError):
                pass
            self.writer = None
