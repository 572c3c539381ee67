import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from warehouse.config import Settings, get_settings
from warehouse.core.constants import API_PREFIX
from warehouse.core.errors import WarehouseError
from warehouse.core.logging import setup_logging
from warehouse.database import create_schema
from warehouse.routers import (
    auth_router,
    health_router,
    locations_router,
    products_router,
    stock_router,
)

logger = logging.getLogger(__name__)

setup_logging()
settings: Settings = get_settings()


@asynccontextmanager
async def lifespan(_app: FastAPI):
    create_schema()
    logger.info("%s started (environment=%s)", settings.APP_NAME, settings.ENVIRONMENT)
    yield


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        logger.exception(
            "%s %s failed",
            request.method,
            request.url.path,
            extra={"method": request.method, "path": request.url.path},
        )
        raise
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        "%s %s %s %.1fms",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round(elapsed_ms, 1),
        },
    )
    return response


@app.exception_handler(WarehouseError)
async def warehouse_error_handler(_request: Request, exc: WarehouseError):
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "message": exc.message,
            "error": type(exc).__name__,
        },
    )


app.include_router(health_router)
app.include_router(auth_router, prefix=API_PREFIX)
app.include_router(products_router, prefix=API_PREFIX)
app.include_router(locations_router, prefix=API_PREFIX)
app.include_router(stock_router, prefix=API_PREFIX)


__all__ = ["app"]
