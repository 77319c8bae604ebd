from fastapi import APIRouter, Depends

from src.dependencies import get_status_service
from src.services.status_service import StatusService

router = APIRouter()


@router.get("/")
async def root(status_service: StatusService = Depends(get_status_service)):
    """
    Liveness check, always returns 200 OK with JSON {'message': ..., 'timestamp': ...}
    """
    report = status_service.get_basic_status()
    return {"message": report.message, "timestamp": report.timestamp}
