"""
Protocol definitions for the authenticated line chat.

This module defines the line formats used in communication between client
and server components, plus the small set of protocol exceptions.
"""

from typing import Optional, Tuple
from dataclasses import dataclass

from common.constants import Commands, Replies, ENCODING, LINE_TERMINATOR


class ProtocolError(Exception):
    """A line that violates the wire protocol."""


class LineTooLongError(ProtocolError):
    """A line longer than the configured maximum."""

    def __init__(self, length: Optional[int] = None, max_length: Optional[int] = None):
        self.length = length
        self.max_length = max_length
        if length is None:
            super().__init__("Line exceeds stream buffer limit")
        else:
            super().__init__(f"Line of {length} chars exceeds {max_length}")


@dataclass
class AuthRequest:
    """Parsed AUTH line."""
    username: str
    password: str


@dataclass
class ChatMessage:
    """A message on its way to the broadcaster. Never stored."""
    sender: Optional[str]
    text: str

    def render(self) -> str:
        """Render as a wire line; no sender means a server notice."""
        if self.sender is None:
            return create_server_notice(self.text)
        return create_chat_line(self.sender, self.text)


def encode_line(line: str) -> bytes:
    """Encode one protocol line for the socket."""
    return (line + LINE_TERMINATOR).encode(ENCODING)


def decode_line(data: bytes) -> str:
    """Decode raw bytes from readline(), dropping the line terminator."""
    return data.decode(ENCODING, errors='replace').rstrip('\r\n')


def split_command(line: str) -> Tuple[str, Optional[str]]:
    """
    Split a line into (command, argument).

    Only a single space separates the command from its argument. A line
    with no space has argument None, while "MSG " has argument "".
    """
    command, sep, argument = line.partition(' ')
    if not sep:
        return line, None
    return command, argument


# --- Client to Server ---

def create_auth_line(username: str, password: str) -> str:
    """Create an AUTH line."""
    return f"{Commands.AUTH} {username} {password}"


def create_msg_line(text: str) -> str:
    """Create a MSG line."""
    return f"{Commands.MSG} {text}"


def create_quit_line() -> str:
    """Create a QUIT line."""
    return Commands.QUIT


# --- Server to Client ---

def create_ok_line(text: str) -> str:
    """Create an OK reply."""
    return f"{Commands.OK} {text}"


def create_error_line(text: str) -> str:
    """Create an ERROR reply."""
    return f"{Commands.ERROR} {text}"


def create_welcome_line(username: str) -> str:
    return create_ok_line(Replies.WELCOME.format(username=username))


def create_goodbye_line() -> str:
    return create_ok_line(Replies.GOODBYE)


def create_server_notice(text: str) -> str:
    """Create a system notice shown to every member."""
    return f"{Commands.SERVER_TAG} {text}"


def create_joined_notice(username: str) -> str:
    return create_server_notice(Replies.JOINED.format(username=username))


def create_left_notice(username: str) -> str:
    return create_server_notice(Replies.LEFT.format(username=username))


def create_chat_line(username: str, text: str) -> str:
    """Create a chat line as seen by other members."""
    return f"{username}: {text}"


def create_echo_line(text: str) -> str:
    """Create the sender's own copy of a chat line."""
    return f"{Commands.ECHO_TAG} {text}"


def is_error_reply(line: str) -> bool:
    """Check whether a server line is an ERROR reply."""
    return line.startswith(Commands.ERROR)
