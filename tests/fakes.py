"""
In-memory stand-ins for asyncio streams and sessions used by the tests.
"""

import asyncio
import itertools
from unittest.mock import Mock

from common.constants import ENCODING


_ports = itertools.count(40000)


class FakeWriter:
    """Collects written lines instead of sending them."""

    def __init__(self, peername=None, fail_writes: bool = False):
        self.peername = peername or ('127.0.0.1', next(_ports))
        self.fail_writes = fail_writes
        self.buffer = b''
        self.closed = False
        self.transport = Mock()
        self.transport.abort.side_effect = self.close

    def get_extra_info(self, name, default=None):
        if name == 'peername':
            return self.peername
        return default

    def write(self, data: bytes):
        if self.fail_writes:
            raise ConnectionResetError("peer reset")
        self.buffer += data

    async def drain(self):
        if self.fail_writes:
            raise ConnectionResetError("peer reset")

    def is_closing(self) -> bool:
        return self.closed

    def close(self):
        self.closed = True

    async def wait_closed(self):
        return None

    @property
    def lines(self):
        return self.buffer.decode(ENCODING).splitlines()


def make_reader(*lines: str, eof: bool = True, limit: int = 2 ** 16) -> asyncio.StreamReader:
    """A StreamReader pre-loaded with lines. Must be called inside a running loop."""
    reader = asyncio.StreamReader(limit=limit)
    for line in lines:
        reader.feed_data((line + '\n').encode(ENCODING))
    if eof:
        reader.feed_eof()
    return reader


class FakeSession:
    """Registry member that records delivered lines."""

    def __init__(self, name: str, fail: bool = False):
        self.display_name = name
        self.fail = fail
        self.received = []

    async def send(self, line: str):
        if self.fail:
            raise ConnectionResetError(f"{self.display_name} is gone")
        self.received.append(line)


class ScriptedSession:
    """Minimal session for driving the auth gate: scripted reads, recorded sends."""

    def __init__(self, *lines, addr=('127.0.0.1', 50000)):
        self.addr = addr
        self._lines = list(lines)
        self.sent = []

    async def read_line(self):
        item = self._lines.pop(0) if self._lines else None
        if isinstance(item, Exception):
            raise item
        return item

    async def send(self, line: str):
        self.sent.append(line)
