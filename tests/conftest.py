import pytest
from registry import MembershipRegistry
from transport import WebSocketTransport
from lifecycle import ConnectionLifecycleHandler
from relay import SignalRouter
from dispatcher import EventDispatcher


@pytest.fixture
def registry():
    return MembershipRegistry()


@pytest.fixture
def transport(registry):
    return WebSocketTransport(registry)


@pytest.fixture
def lifecycle(registry, transport):
    return ConnectionLifecycleHandler(registry, transport)


@pytest.fixture
def router(registry, transport):
    return SignalRouter(registry, transport)


@pytest.fixture
def dispatcher(lifecycle, router):
    return EventDispatcher(lifecycle, router)


@pytest.fixture
def connect(transport):
    """Open outboxes for the given connection ids, as the WebSocket endpoint does."""
    def _connect(*connection_ids):
        for connection_id in connection_ids:
            transport.register(connection_id)
    return _connect


@pytest.fixture
def drain(transport):
    """Pop every frame queued for a connection."""
    def _drain(connection_id):
        outbox = transport.outboxes[connection_id]
        frames = []
        while not outbox.empty():
            frames.append(outbox.get_nowait())
        return frames
    return _drain


def assert_consistent(registry):
    """Rooms and peers tables agree and no room is empty."""
    for room_id, members in registry._rooms.items():
        assert members, f"room {room_id} is empty but still registered"
        for connection_id in members:
            assert registry.get_peer(connection_id).room_id == room_id
    for connection_id, peer in registry._peers.items():
        assert connection_id in registry.members_of(peer.room_id)
