"""
handlers/health_handler.py
---------------------------
Liveness routes: the API banner and the database round-trip check.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse

from handlers.dependencies import get_health_service
from services.health_service import HealthService
from utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
def root() -> str:
    return "Kyper3D API is running correctly."


@router.get("/api/health")
def health(service: HealthService = Depends(get_health_service)):
    """Report whether the database answers a trivial query."""
    try:
        return service.check()
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return JSONResponse(status_code=500, content={"status": "error", "message": str(e)})
