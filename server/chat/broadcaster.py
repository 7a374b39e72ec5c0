"""
Broadcast module.

Fans one line out to every registered session.
"""

from server.chat.registry import ClientRegistry
from server.utils.logger import logger


class Broadcaster:
    """Delivers lines to the registry's current members."""

    def __init__(self, registry: ClientRegistry):
        self.registry = registry

    async def broadcast(self, line: str, exclude=None) -> int:
        """
        Send a line to all registered sessions except `exclude`.

        Membership is snapshotted under the registry lock and delivery runs
        outside it, so a slow peer never blocks registration. A failed
        delivery is logged and skipped; the affected peer notices its own
        disconnect on its next read. Returns the number of deliveries made.
        """
        recipients = await self.registry.snapshot()
        delivered = 0

        for session in recipients:
            if exclude is not None and session is exclude:
                continue
            try:
                await session.send(line)
                delivered += 1
            except Exception as e:
                logger.log_delivery_failure(session.display_name, e)

        logger.debug(f"[BROADCAST] {line!r} delivered to {delivered}/{len(recipients)} session(s)")
        return delivered
