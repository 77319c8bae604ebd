import os
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
import sentry_sdk
import structlog
from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from src.config.health_config import get_health_config
from src.config.logging_config import configure_logging
from src.dependencies import build_dependencies
from src.models.exceptions.reporter_failure import ReporterFailure
from src.services.status_service import StatusService

from src.routers.health import router as health
from src.routers.root import router as root

sentry_dsn = os.environ.get('SENTRY_DSN')

if sentry_dsn:
    sentry_sdk.init(
        dsn=sentry_dsn,
        integrations=[
            StarletteIntegration(transaction_style="endpoint", failed_request_status_codes=set(range(500, 600))),
            FastApiIntegration(transaction_style="endpoint", failed_request_status_codes=set(range(500, 600))),
        ]
    )

configure_logging()
logger = structlog.get_logger()

config = get_health_config()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Creates the clients the health probes use, and closes them again on shutdown.
    The StatusService itself never opens or closes connections.
    """
    http_client = httpx.AsyncClient(timeout=config.probe_timeout)
    app.state.status_service = StatusService(
        dependencies=build_dependencies(config, http_client=http_client),
        timeout=config.probe_timeout
    )
    logger.info(f"Started with {len(app.state.status_service.dependencies)} health dependencies")
    try:
        yield
    finally:
        app.state.status_service = None
        await http_client.aclose()
        logger.info("Shut down")


app = FastAPI(
    title='Status Reporting API',
    version='1.0.0',
    lifespan=lifespan
)


@app.exception_handler(ReporterFailure)
async def reporter_failure_handler(request: Request, exc: ReporterFailure) -> JSONResponse:
    logger.error(f"Status report failed for {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=500,
        content={"detail": exc.message}
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_allow_origins,
    allow_methods=['GET'],
)
app.add_middleware(CorrelationIdMiddleware)

app.include_router(health, prefix=config.api_prefix)
app.include_router(root, prefix=config.api_prefix)
