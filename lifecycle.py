from registry import MembershipRegistry
from transport import Transport
from events import USER_CONNECTED, USER_DISCONNECTED
from logging_config import get_logger

logger = get_logger(__name__)


class ConnectionLifecycleHandler:
    """Handles peers joining and leaving rooms.

    A connection has no registry entry until it joins a room. Leaving and
    transport disconnects share the same path.
    """

    def __init__(self, registry: MembershipRegistry, transport: Transport):
        self.registry = registry
        self.transport = transport

    def on_join_room(self, connection_id: str, room_id: str, display_name: str):
        logger.info(f"{display_name} ({connection_id}) joining room: {room_id}")

        current = self.registry.get_peer(connection_id)
        if current is not None and current.room_id != room_id:
            logger.info(f"Connection {connection_id} switching from room {current.room_id} to {room_id}")
            self.on_leave_or_disconnect(connection_id)

        for existing_id in self.registry.members_of(room_id):
            if existing_id == connection_id:
                continue
            existing_peer = self.registry.get_peer(existing_id)
            if existing_peer is None:
                continue
            self.transport.send_to(connection_id, USER_CONNECTED, {
                "userId": existing_id,
                "username": existing_peer.display_name,
            })
            self.transport.send_to(existing_id, USER_CONNECTED, {
                "userId": connection_id,
                "username": display_name,
            })

        self.registry.add_peer(connection_id, display_name, room_id)
        logger.info(f"Room {room_id} now has {len(self.registry.members_of(room_id))} peer(s)")

    def on_leave_or_disconnect(self, connection_id: str):
        peer = self.registry.remove_peer(connection_id)
        if peer is None:
            logger.debug(f"Connection {connection_id} was not in a room, nothing to clean up")
            return

        self.transport.broadcast_to_room(peer.room_id, connection_id, USER_DISCONNECTED, {
            "userId": connection_id,
        })
        remaining = len(self.registry.members_of(peer.room_id))
        logger.info(f"{peer.display_name} left room {peer.room_id}. {remaining} peer(s) remaining")
