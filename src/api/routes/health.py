"""Health check endpoint."""

from datetime import datetime, timezone
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from adapter.mongodb.connection import get_mongodb_client

router = APIRouter(prefix="/health", tags=["health"])


def _check_mongodb() -> dict:
    # get_mongodb_client() pings before returning a client
    if get_mongodb_client() is None:
        return {"status": "unhealthy", "message": "Connection failed or not configured"}
    return {"status": "healthy", "message": "Connection successful"}


@router.get("")
def health():
    """Report service status with the state of each backing store."""
    mongodb = _check_mongodb()
    overall_healthy = mongodb["status"] == "healthy"

    health_status = {
        "status": "healthy" if overall_healthy else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        "services": {"mongodb": mongodb},
    }
    status_code = status.HTTP_200_OK if overall_healthy else status.HTTP_503_SERVICE_UNAVAILABLE

    return JSONResponse(content=health_status, status_code=status_code)
