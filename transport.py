import asyncio
from abc import ABC, abstractmethod
from typing import Dict
from registry import MembershipRegistry, membership_registry
from logging_config import get_logger

logger = get_logger(__name__)


class Transport(ABC):
    """Outbound side of the relay. Sends are fire-and-forget."""

    @abstractmethod
    def send_to(self, connection_id: str, event: str, payload: dict):
        """Deliver ``event`` to a single connection."""

    @abstractmethod
    def broadcast_to_room(self, room_id: str, exclude_id: str, event: str, payload: dict):
        """Deliver ``event`` to every member of ``room_id`` except ``exclude_id``."""


class WebSocketTransport(Transport):
    """Queues outgoing frames per live WebSocket connection.

    Each connection owns an unbounded outbox; the WebSocket endpoint drains
    it to the socket from its own task, so handlers never await I/O.
    """

    def __init__(self, registry: MembershipRegistry):
        self.registry = registry
        self.outboxes: Dict[str, asyncio.Queue] = {}

    def register(self, connection_id: str) -> asyncio.Queue:
        outbox = asyncio.Queue()
        self.outboxes[connection_id] = outbox
        logger.debug(f"Registered outbox for connection {connection_id} (live connections: {len(self.outboxes)})")
        return outbox

    def unregister(self, connection_id: str):
        self.outboxes.pop(connection_id, None)
        logger.debug(f"Unregistered outbox for connection {connection_id} (live connections: {len(self.outboxes)})")

    def connection_count(self) -> int:
        return len(self.outboxes)

    def send_to(self, connection_id: str, event: str, payload: dict):
        outbox = self.outboxes.get(connection_id)
        if outbox is None:
            logger.debug(f"Dropping {event} for unknown connection {connection_id}")
            return
        outbox.put_nowait({"type": event, **payload})

    def broadcast_to_room(self, room_id: str, exclude_id: str, event: str, payload: dict):
        recipients = [member for member in self.registry.members_of(room_id) if member != exclude_id]
        for member in recipients:
            self.send_to(member, event, payload)
        logger.debug(f"Broadcast {event} to {len(recipients)} peer(s) in room {room_id}")


websocket_transport = WebSocketTransport(membership_registry)
