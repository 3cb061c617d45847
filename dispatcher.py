import json
from typing import Callable, Dict, Optional, Tuple, Type
from pydantic import BaseModel, ValidationError
from lifecycle import ConnectionLifecycleHandler
from relay import SignalRouter
from schemas.signaling import (
    JoinRoomMessage,
    OfferMessage,
    AnswerMessage,
    IceCandidateMessage,
    ScreenShareMessage,
)
from events import (
    JOIN_ROOM,
    OFFER,
    ANSWER,
    ICE_CANDIDATE,
    START_SCREEN_SHARE,
    STOP_SCREEN_SHARE,
    LEAVE_ROOM,
)
from logging_config import get_logger

logger = get_logger(__name__)


class EventDispatcher:
    """Turns raw client frames into lifecycle and relay calls.

    Each frame is handled to completion before the next one; a failure while
    handling a frame is logged and never propagates to the connection loop.
    """

    def __init__(self, lifecycle: ConnectionLifecycleHandler, router: SignalRouter):
        self.lifecycle = lifecycle
        self.router = router
        # event type -> (payload schema, handler)
        self.handlers: Dict[str, Tuple[Optional[Type[BaseModel]], Callable]] = {
            JOIN_ROOM: (JoinRoomMessage, lambda cid, m: lifecycle.on_join_room(cid, m.room_id, m.username)),
            OFFER: (OfferMessage, lambda cid, m: router.relay_offer(cid, m.to, m.offer)),
            ANSWER: (AnswerMessage, lambda cid, m: router.relay_answer(cid, m.to, m.answer)),
            ICE_CANDIDATE: (IceCandidateMessage, lambda cid, m: router.relay_ice_candidate(cid, m.to, m.candidate)),
            START_SCREEN_SHARE: (ScreenShareMessage, lambda cid, m: router.broadcast_screen_share_start(cid, m.room_id)),
            STOP_SCREEN_SHARE: (ScreenShareMessage, lambda cid, m: router.broadcast_screen_share_stop(cid, m.room_id)),
            LEAVE_ROOM: (None, lambda cid, m: lifecycle.on_leave_or_disconnect(cid)),
        }

    def handle(self, connection_id: str, raw: str) -> bool:
        """Process one frame. Returns True if it reached a handler."""
        try:
            message = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Dropping non-JSON frame from connection {connection_id}")
            return False

        if not isinstance(message, dict):
            logger.warning(f"Dropping non-object frame from connection {connection_id}")
            return False

        event = message.get("type")
        entry = self.handlers.get(event)
        if entry is None:
            logger.warning(f"Dropping unknown event {event!r} from connection {connection_id}")
            return False

        schema, handler = entry
        try:
            payload = schema.model_validate(message) if schema else None
        except ValidationError as e:
            logger.warning(f"Dropping malformed {event} from connection {connection_id}: {e.error_count()} error(s)")
            return False

        try:
            handler(connection_id, payload)
        except Exception as e:
            logger.error(f"Error handling {event} from connection {connection_id}: {e}", exc_info=True)
            return False
        return True

    def handle_disconnect(self, connection_id: str):
        try:
            self.lifecycle.on_leave_or_disconnect(connection_id)
        except Exception as e:
            logger.error(f"Error cleaning up connection {connection_id}: {e}", exc_info=True)
