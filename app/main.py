import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.api.v1.router import api_router
from app.core.config import get_settings
from app.core.errors import (
    Forbidden,
    InvalidRange,
    ResourceNotFound,
    Unauthenticated,
    UnknownRoleError,
)

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Patriot Scheduler Backend",
)


@app.exception_handler(Unauthenticated)
async def unauthenticated_handler(request: Request, exc: Unauthenticated) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"ok": False, "error": exc.message},
        headers={"WWW-Authenticate": "Bearer"},
    )


@app.exception_handler(Forbidden)
async def forbidden_handler(request: Request, exc: Forbidden) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN,
        content={
            "ok": False,
            "error": "Forbidden",
            "required_permission": exc.required_permission,
            "your_role": exc.role,
        },
    )


@app.exception_handler(InvalidRange)
async def invalid_range_handler(request: Request, exc: InvalidRange) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"ok": False, "error": str(exc)},
    )


@app.exception_handler(ResourceNotFound)
async def resource_not_found_handler(request: Request, exc: ResourceNotFound) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"ok": False, "error": str(exc)},
    )


@app.exception_handler(UnknownRoleError)
async def unknown_role_handler(request: Request, exc: UnknownRoleError) -> JSONResponse:
    logger.error("Capability lookup for unknown role: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"ok": False, "error": "Server role configuration error"},
    )


@app.get("/health", tags=["health"])
async def root_health() -> dict:
    """
    Global health check endpoint.
    """
    return {"ok": True, "status": "ok", "message": "Patriot Scheduler backend is alive"}


# Mount versioned API router
app.include_router(api_router, prefix=settings.api_v1_prefix)
