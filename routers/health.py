from fastapi import APIRouter
from schemas.health import HealthResponse
from registry import membership_registry
from logging_config import get_logger

logger = get_logger(__name__)

health_router = APIRouter(tags=["health"])


@health_router.get("/health", response_model=HealthResponse)
async def health():
    """
    Server status and current statistics.

    Returns:
    - status: always "ok" while the process is serving
    - rooms: number of active (non-empty) rooms
    - totalPeers: number of peers across all rooms
    """
    stats = membership_registry.stats()
    logger.debug(f"Health check: {stats['room_count']} rooms, {stats['total_peer_count']} peers")
    return HealthResponse(rooms=stats["room_count"], total_peers=stats["total_peer_count"])
