"""FastAPI application entrypoint."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from secure import Secure
from asgi_correlation_id import CorrelationIdMiddleware

from hostel.api import api_router
from hostel.api.v1.functions import CORS_HEADERS
from hostel.core.config import get_settings
from hostel.db.session import dispose_engine
from hostel.security.logging_filters import SensitiveFilter
from hostel.services.bootstrap_service import (
    ensure_default_admin,
    ensure_default_inventory,
)

logger = logging.getLogger(__name__)

settings = get_settings()

_ALLOWED_ORIGINS = [origin for origin in settings.cors_allow_origins if origin]
if not _ALLOWED_ORIGINS:
    _ALLOWED_ORIGINS = ["http://localhost:5173"]

_FUNCTIONS_PREFIX = f"{settings.api_v1_prefix}/functions/"


@asynccontextmanager
async def lifespan(_: FastAPI):
    try:
        await ensure_default_admin()
    except Exception:  # pragma: no cover - best effort bootstrap
        logger.exception("Failed to ensure default admin account")
    try:
        await ensure_default_inventory()
    except Exception:  # pragma: no cover - best effort bootstrap
        logger.exception("Failed to seed default room inventory")
    try:
        yield
    finally:
        await dispose_engine()


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_ALLOWED_ORIGINS,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    expose_headers=["X-Request-ID"],
)


@app.middleware("http")
async def _open_function_preflight(request: Request, call_next):
    # The automation functions accept any origin, unlike the operator API.
    if request.method == "OPTIONS" and request.url.path.startswith(_FUNCTIONS_PREFIX):
        return Response(status_code=200, headers=CORS_HEADERS)
    return await call_next(request)


app.add_middleware(CorrelationIdMiddleware, header_name="X-Request-ID")

_secure_headers = Secure()


@app.middleware("http")
async def _apply_security_headers(request, call_next):
    response = await call_next(request)
    _secure_headers.set_headers(response)
    correlation_id = getattr(request.state, "correlation_id", None)
    if correlation_id:
        response.headers.setdefault("X-Request-ID", str(correlation_id))
    return response


for _logger_name in ("uvicorn", "uvicorn.access", "uvicorn.error", "hostel", ""):
    _logger = logging.getLogger(_logger_name)
    if not any(isinstance(flt, SensitiveFilter) for flt in _logger.filters):
        _logger.addFilter(SensitiveFilter())

app.include_router(api_router)


@app.get("/", include_in_schema=False)
async def root() -> dict[str, str]:
    """Return a simple welcome message."""
    return {"message": settings.app_name}
