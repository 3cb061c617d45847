from typing import Any
from registry import MembershipRegistry
from transport import Transport
from events import (
    OFFER,
    ANSWER,
    ICE_CANDIDATE,
    SCREEN_SHARE_STARTED,
    SCREEN_SHARE_STOPPED,
)
from logging_config import get_logger

logger = get_logger(__name__)


class SignalRouter:
    """Forwards signaling messages and screen-share notices between peers.

    Targets (``to_id``/``room_id``) are taken as given by the sender and are
    not checked against the sender's room. Payloads are passed through
    untouched.
    """

    def __init__(self, registry: MembershipRegistry, transport: Transport):
        self.registry = registry
        self.transport = transport

    def relay_offer(self, from_id: str, to_id: str, offer: Any):
        self._relay_description(OFFER, from_id, to_id, offer)

    def relay_answer(self, from_id: str, to_id: str, answer: Any):
        self._relay_description(ANSWER, from_id, to_id, answer)

    def relay_ice_candidate(self, from_id: str, to_id: str, candidate: Any):
        logger.debug(f"ICE candidate from {from_id} to {to_id}")
        self.transport.send_to(to_id, ICE_CANDIDATE, {
            "candidate": candidate,
            "from": from_id,
        })

    def broadcast_screen_share_start(self, from_id: str, room_id: str):
        peer = self.registry.get_peer(from_id)
        if peer is None:
            logger.debug(f"Ignoring start-screen-share from unregistered connection {from_id}")
            return
        logger.info(f"{peer.display_name} started screen sharing in room {room_id}")
        self.transport.broadcast_to_room(room_id, from_id, SCREEN_SHARE_STARTED, {
            "userId": from_id,
            "username": peer.display_name,
        })

    def broadcast_screen_share_stop(self, from_id: str, room_id: str):
        peer = self.registry.get_peer(from_id)
        if peer is None:
            logger.debug(f"Ignoring stop-screen-share from unregistered connection {from_id}")
            return
        logger.info(f"{peer.display_name} stopped screen sharing in room {room_id}")
        self.transport.broadcast_to_room(room_id, from_id, SCREEN_SHARE_STOPPED, {
            "userId": from_id,
        })

    def _relay_description(self, event: str, from_id: str, to_id: str, description: Any):
        # offer and answer carry the sender's display name; drop if the sender already left
        peer = self.registry.get_peer(from_id)
        if peer is None:
            logger.debug(f"Dropping {event} from unregistered connection {from_id}")
            return
        logger.info(f"{event.capitalize()} from {peer.display_name} to {to_id}")
        self.transport.send_to(to_id, event, {
            event: description,
            "from": from_id,
            "username": peer.display_name,
        })
