"""
Client registry module.

The authoritative set of authenticated, connected sessions.
"""

import asyncio
from typing import List, Set

from common.constants import MAX_CLIENTS


class ClientRegistry:
    """Capacity-bounded set of live sessions."""

    def __init__(self, max_clients: int = MAX_CLIENTS):
        self.max_clients = max_clients
        self._sessions: Set = set()
        self.lock = asyncio.Lock()  # Protect membership

    async def try_register(self, session) -> bool:
        """
        Add a session if there is room.

        The capacity check and the insert happen under the same lock, so
        concurrent registrations can never push the size past max_clients.
        """
        async with self.lock:
            if len(self._sessions) >= self.max_clients:
                return False
            self._sessions.add(session)
            return True

    async def unregister(self, session):
        """Remove a session. Removing an absent session is a no-op."""
        async with self.lock:
            self._sessions.discard(session)

    async def snapshot(self) -> List:
        """Copy of the current membership, safe to iterate without the lock."""
        async with self.lock:
            return list(self._sessions)

    @property
    def size(self) -> int:
        return len(self._sessions)

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session) -> bool:
        return session in self._sessions
