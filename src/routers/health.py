from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from src.dependencies import get_status_service
from src.services.status_service import StatusService

router = APIRouter()


@router.get("/health")
async def health(status_service: StatusService = Depends(get_status_service)):
    """
    Probes all configured dependencies and returns the status report as JSON.

    * 200 OK if the status is ok or degraded
    * 503 SERVICE UNAVAILABLE if any critical dependency is unhealthy
    """
    report = await status_service.get_health_status()
    return JSONResponse(
        status_code=200 if report.is_available() else 503,
        content=report.model_dump(mode='json', exclude_none=True)
    )
