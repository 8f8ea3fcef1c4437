"""
ThemeVote — FastAPI application entry-point.

Run with:
    uvicorn app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from app.config import settings
from app.database import Base, engine
from app import models  # noqa: F401  (registers every table on Base.metadata)
from app.errors import AppError, Internal, ValidationError
from app.services.themes import ThemeRepository
from app.utils.cache import TimedCache

# ── Import routers ──
from app.routers import auth, forms, themes, votes

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# ── Lifespan: create tables on startup ──
@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    description="Create voting forms, share the link, collect capped votes.",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=("*",))

# ── Shared theme list cache ──
app.state.theme_repository = ThemeRepository(
    TimedCache(ttl=settings.THEME_CACHE_TTL_SECONDS)
)


# ── Error responses ──
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid request body."
    if errors:
        first = errors[0]
        # Integer parts are list indexes or JSON offsets, not field names.
        field = ".".join(
            str(part) for part in first.get("loc", ())[1:] if not isinstance(part, int)
        )
        message = f"{field}: {first.get('msg')}" if field else first.get("msg", message)
    return JSONResponse(status_code=400, content=ValidationError(message).to_dict())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return JSONResponse(status_code=500, content=Internal().to_dict())


# ── Register API routers ──
app.include_router(auth.router)
app.include_router(forms.router)
app.include_router(themes.router)
app.include_router(votes.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
