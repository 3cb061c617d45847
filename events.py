# Incoming events (client -> server)
JOIN_ROOM = "join-room"
OFFER = "offer"
ANSWER = "answer"
ICE_CANDIDATE = "ice-candidate"
START_SCREEN_SHARE = "start-screen-share"
STOP_SCREEN_SHARE = "stop-screen-share"
LEAVE_ROOM = "leave-room"

# Outgoing events (server -> client)
CONNECTED = "connected"  # {userId}, sent once on accept
USER_CONNECTED = "user-connected"  # {userId, username}
USER_DISCONNECTED = "user-disconnected"  # {userId}
SCREEN_SHARE_STARTED = "screen-share-started"  # {userId, username}
SCREEN_SHARE_STOPPED = "screen-share-stopped"  # {userId}
# offer / answer / ice-candidate keep their names on the way out
