from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from routers.health import health_router
from registry import membership_registry
from transport import websocket_transport
from lifecycle import ConnectionLifecycleHandler
from relay import SignalRouter
from dispatcher import EventDispatcher
from events import CONNECTED
from constants import ALLOWED_ORIGINS, LOG_LEVEL, LOG_FILE
from logging_config import get_logger, setup_logging
import asyncio
import json
import uuid
from typing import Optional

# Setup logging
setup_logging(log_level=LOG_LEVEL, log_file=LOG_FILE)
logger = get_logger(__name__)

app = FastAPI(title="Signaling Relay")

# An empty ORIGIN allow-list means every origin is accepted
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS or ["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(health_router)

lifecycle = ConnectionLifecycleHandler(membership_registry, websocket_transport)
signal_router = SignalRouter(membership_registry, websocket_transport)
dispatcher = EventDispatcher(lifecycle, signal_router)

logger.info(f"FastAPI application initialized, CORS enabled for: {', '.join(ALLOWED_ORIGINS) if ALLOWED_ORIGINS else 'all origins'}")


def origin_allowed(origin: Optional[str]) -> bool:
    """Check a handshake Origin against the ORIGIN allow-list.

    An empty allow-list accepts everything. Handshakes without an Origin
    header come from non-browser clients and are accepted.
    """
    if not ALLOWED_ORIGINS or origin is None:
        return True
    return origin in ALLOWED_ORIGINS


async def pump_outbox(connection_id: str, websocket: WebSocket, outbox: asyncio.Queue):
    """Background task writing queued frames to one WebSocket."""
    try:
        while True:
            frame = await outbox.get()
            await websocket.send_text(json.dumps(frame))
    except asyncio.CancelledError:
        raise
    except Exception as e:
        # Later frames are dropped; the receive loop runs the room cleanup
        logger.warning(f"Stopped sending to connection {connection_id}: {e}")
        websocket_transport.unregister(connection_id)


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """Signaling WebSocket.

    Frames are JSON objects with a ``type`` field naming the event, e.g.
    ``{"type": "join-room", "roomId": "r1", "username": "Alice"}``. The first
    frame sent by the server is ``{"type": "connected", "userId": ...}``.
    """
    origin = websocket.headers.get("origin")
    if not origin_allowed(origin):
        logger.warning(f"WebSocket connection rejected: origin {origin} not allowed")
        await websocket.close(code=1008, reason="Origin not allowed")
        return

    connection_id = str(uuid.uuid4())
    await websocket.accept()

    outbox = websocket_transport.register(connection_id)
    logger.info(f"New connection: {connection_id} (live connections: {websocket_transport.connection_count()})")
    sender = asyncio.create_task(pump_outbox(connection_id, websocket, outbox))
    websocket_transport.send_to(connection_id, CONNECTED, {"userId": connection_id})

    try:
        while True:
            data = await websocket.receive_text()
            dispatcher.handle(connection_id, data)
    except WebSocketDisconnect:
        logger.info(f"Disconnection: {connection_id}")
    except Exception as e:
        logger.error(f"WebSocket error for connection {connection_id}: {e}", exc_info=True)
    finally:
        dispatcher.handle_disconnect(connection_id)
        websocket_transport.unregister(connection_id)
        logger.info(f"Connection {connection_id} closed (live connections: {websocket_transport.connection_count()})")
        sender.cancel()
        try:
            await sender
        except asyncio.CancelledError:
            pass
