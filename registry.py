from typing import Dict, FrozenSet, Optional, Set
from schemas.signaling import Peer
from logging_config import get_logger

logger = get_logger(__name__)


class MembershipRegistry:
    """In-memory rooms and peers tables.

    ``_rooms`` maps room id -> set of connection ids, ``_peers`` maps
    connection id -> Peer. Both tables are only mutated through the methods
    below, so a connection id sits in exactly one room's member set iff it
    has a Peer record pointing at that room, and a room exists iff it has
    at least one member.
    """

    def __init__(self):
        self._rooms: Dict[str, Set[str]] = {}
        self._peers: Dict[str, Peer] = {}
        logger.info("Initializing in-memory MembershipRegistry")

    def add_peer(self, connection_id: str, display_name: str, room_id: str) -> Peer:
        """Insert or overwrite the peer and put it in ``room_id``'s member set."""
        previous = self._peers.get(connection_id)
        if previous is not None and previous.room_id != room_id:
            # keep the connection in a single room
            self._discard_member(previous.room_id, connection_id)

        peer = Peer(connection_id=connection_id, display_name=display_name, room_id=room_id)
        self._peers[connection_id] = peer
        members = self._rooms.setdefault(room_id, set())
        members.add(connection_id)
        logger.debug(f"Peer {connection_id} ({display_name}) added to room {room_id} ({len(members)} members)")
        return peer

    def remove_peer(self, connection_id: str) -> Optional[Peer]:
        """Remove the peer and return its prior record, or None if unknown."""
        peer = self._peers.pop(connection_id, None)
        if peer is None:
            logger.debug(f"Peer {connection_id} not registered, nothing to remove")
            return None
        self._discard_member(peer.room_id, connection_id)
        logger.debug(f"Peer {connection_id} removed from room {peer.room_id}")
        return peer

    def get_peer(self, connection_id: str) -> Optional[Peer]:
        return self._peers.get(connection_id)

    def members_of(self, room_id: str) -> FrozenSet[str]:
        """Snapshot of the connection ids currently in ``room_id``."""
        return frozenset(self._rooms.get(room_id, ()))

    def stats(self) -> dict:
        return {
            "room_count": len(self._rooms),
            "total_peer_count": sum(len(members) for members in self._rooms.values()),
        }

    def _discard_member(self, room_id: str, connection_id: str):
        members = self._rooms.get(room_id)
        if members is None:
            return
        members.discard(connection_id)
        if not members:
            del self._rooms[room_id]
            logger.info(f"Room {room_id} deleted (empty)")


membership_registry = MembershipRegistry()
