#!/usr/bin/env python3
"""
Chat Server - Listener

Accepts TCP connections and runs one Session per connection. The registry,
broadcaster and auth gate are built once here and shared by every session.
"""

import asyncio
from typing import Optional, Set

from server.auth.auth_gate import AuthGate
from server.auth.credential_store import CredentialStore
from server.chat.broadcaster import Broadcaster
from server.chat.registry import ClientRegistry
from server.chat.session import Session
from server.utils.config import ServerConfig
from server.utils.logger import logger


class ChatServer:
    """Main server class that owns the shared chat state."""

    def __init__(self, config: ServerConfig, credentials: CredentialStore):
        self.config = config
        self.credentials = credentials

        # Shared by all sessions
        self.registry = ClientRegistry(config.max_clients)
        self.broadcaster = Broadcaster(self.registry)
        self.auth_gate = AuthGate(credentials, config.max_line_length)

        self.server: Optional[asyncio.AbstractServer] = None
        self.sessions: Set[Session] = set()  # every open connection, authenticated or not

    @property
    def bound_port(self) -> Optional[int]:
        """Actual listening port, useful when configured with port 0."""
        if not self.server or not self.server.sockets:
            return None
        return self.server.sockets[0].getsockname()[1]

    async def handle_client(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        """Handle individual client connection."""
        session = Session(
            reader, writer,
            registry=self.registry,
            broadcaster=self.broadcaster,
            auth_gate=self.auth_gate,
            max_line_length=self.config.max_line_length
        )
        logger.log_connection(session.addr)

        # Capacity is enforced at registration, not here
        self.sessions.add(session)
        try:
            await session.run()
        finally:
            self.sessions.discard(session)

    async def start_listening(self) -> asyncio.AbstractServer:
        """Bind the listening socket and start accepting."""
        self.server = await asyncio.start_server(
            self.handle_client,
            self.config.host,
            self.config.port,
            limit=self.config.stream_limit
        )

        addr = ', '.join(str(sock.getsockname()) for sock in self.server.sockets)
        logger.log_startup(addr, self.config.max_clients, self.config.max_line_length)
        return self.server

    async def start(self):
        """Start the server and serve until cancelled."""
        server = await self.start_listening()
        async with server:
            await server.serve_forever()

    async def close(self):
        """Stop accepting and drop open connections without draining them."""
        if self.server is None:
            return
        self.server.close()
        for session in list(self.sessions):
            session.writer.transport.abort()
        await self.server.wait_closed()
        logger.info("Server stopped accepting connections")
