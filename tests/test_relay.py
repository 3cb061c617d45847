def test_offer_carries_sender_identity(lifecycle, router, connect, drain):
    connect("a", "b")
    lifecycle.on_join_room("a", "r1", "Alice")
    lifecycle.on_join_room("b", "r1", "Bob")
    drain("b")

    router.relay_offer("a", "b", {"sdp": "x"})

    assert drain("b") == [{"type": "offer", "offer": {"sdp": "x"}, "from": "a", "username": "Alice"}]


def test_offer_from_unregistered_sender_is_dropped(router, connect, drain):
    connect("a", "b")

    router.relay_offer("a", "b", {"sdp": "x"})

    assert drain("b") == []


def test_answer_carries_sender_identity(lifecycle, router, connect, drain):
    connect("a", "b")
    lifecycle.on_join_room("a", "r1", "Alice")
    lifecycle.on_join_room("b", "r1", "Bob")
    drain("a")

    router.relay_answer("b", "a", {"type": "answer", "sdp": "y"})

    assert drain("a") == [
        {"type": "answer", "answer": {"type": "answer", "sdp": "y"}, "from": "b", "username": "Bob"}
    ]


def test_answer_from_unregistered_sender_is_dropped(router, connect, drain):
    connect("a")

    router.relay_answer("b", "a", {"sdp": "y"})

    assert drain("a") == []


def test_ice_candidate_is_forwarded_without_lookup(router, connect, drain):
    connect("a", "b")
    candidate = {"candidate": "candidate:1 1 udp 2122260223 10.0.0.1 5000 typ host", "sdpMid": "0"}

    router.relay_ice_candidate("a", "b", candidate)

    assert drain("b") == [{"type": "ice-candidate", "candidate": candidate, "from": "a"}]


def test_relay_to_unknown_target_is_dropped(lifecycle, router, connect, drain):
    connect("a")
    lifecycle.on_join_room("a", "r1", "Alice")

    router.relay_offer("a", "nobody", {"sdp": "x"})
    router.relay_ice_candidate("a", "nobody", {})

    assert drain("a") == []


def test_relay_crosses_rooms(lifecycle, router, connect, drain):
    connect("a", "b")
    lifecycle.on_join_room("a", "r1", "Alice")
    lifecycle.on_join_room("b", "r2", "Bob")

    router.relay_offer("a", "b", "opaque")

    assert drain("b") == [{"type": "offer", "offer": "opaque", "from": "a", "username": "Alice"}]


def test_screen_share_start_is_scoped_to_room(lifecycle, router, connect, drain):
    connect("a", "b", "c", "d")
    lifecycle.on_join_room("a", "r1", "Alice")
    lifecycle.on_join_room("b", "r1", "Bob")
    lifecycle.on_join_room("c", "r1", "Carol")
    lifecycle.on_join_room("d", "r2", "Dave")
    for connection_id in ("a", "b", "c", "d"):
        drain(connection_id)

    router.broadcast_screen_share_start("a", "r1")

    expected = [{"type": "screen-share-started", "userId": "a", "username": "Alice"}]
    assert drain("b") == expected
    assert drain("c") == expected
    assert drain("a") == []
    assert drain("d") == []


def test_screen_share_stop(lifecycle, router, connect, drain):
    connect("a", "b")
    lifecycle.on_join_room("a", "r1", "Alice")
    lifecycle.on_join_room("b", "r1", "Bob")
    drain("a")
    drain("b")

    router.broadcast_screen_share_stop("a", "r1")

    assert drain("b") == [{"type": "screen-share-stopped", "userId": "a"}]
    assert drain("a") == []


def test_screen_share_from_unregistered_sender_is_dropped(lifecycle, router, connect, drain):
    connect("a", "b")
    lifecycle.on_join_room("b", "r1", "Bob")

    router.broadcast_screen_share_start("a", "r1")
    router.broadcast_screen_share_stop("a", "r1")

    assert drain("b") == []


def test_screen_share_uses_requested_room(lifecycle, router, connect, drain):
    connect("a", "b")
    lifecycle.on_join_room("a", "r1", "Alice")
    lifecycle.on_join_room("b", "r2", "Bob")

    router.broadcast_screen_share_start("a", "r2")

    assert drain("b") == [{"type": "screen-share-started", "userId": "a", "username": "Alice"}]
