"""htcode: FastAPI gateway for product codes.

Turns product identifiers into short codes for labels and back.
The codec is built once at startup; a bad configuration stops the
process rather than failing per request.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from htcode.auth import make_api_key_checker
from htcode.codec import ProductCodec
from htcode.config import HtcodeConfig, load_config
from htcode.errors import (
    CodecError,
    ConfigurationError,
    FormatError,
    InvalidCharacterError,
    InvalidLengthError,
    OutOfDomainError,
)
from htcode.routes import codes, meta

logger = logging.getLogger("htcode")
audit_logger = logging.getLogger("htcode.audit")


def configure_logging(level: str = "INFO") -> None:
    """Send htcode log records to stderr at the given level."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ConfigurationError(f"Unknown log level {level!r}")
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.setLevel(numeric)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: build the codec from config."""
    config: HtcodeConfig = app.state.config
    logger.info("Building codec (profile: %s, shape: %s)", config.profile, config.shape)
    app.state.codec = ProductCodec.from_config(config)
    logger.info("htcode gateway ready")
    yield
    logger.info("htcode gateway shut down")


def create_app(config: HtcodeConfig | None = None) -> FastAPI:
    """Application factory."""
    if config is None:
        config = load_config()

    app = FastAPI(
        title="htcode",
        description="Reversible short codes for product identifiers",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.config = config

    check_key = make_api_key_checker(config.api_key)

    # ── Exception handlers ────────────────────────────────────

    @app.exception_handler(FormatError)
    async def format_handler(request: Request, exc: FormatError):
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(InvalidCharacterError)
    async def invalid_character_handler(request: Request, exc: InvalidCharacterError):
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(InvalidLengthError)
    async def invalid_length_handler(request: Request, exc: InvalidLengthError):
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(OutOfDomainError)
    async def out_of_domain_handler(request: Request, exc: OutOfDomainError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(CodecError)
    async def codec_handler(request: Request, exc: CodecError):
        logger.error("Codec failure on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    # ── Audit middleware ──────────────────────────────────────

    @app.middleware("http")
    async def audit_log(request: Request, call_next):
        start = time.monotonic()
        response = await call_next(request)
        elapsed = time.monotonic() - start
        audit_logger.info(
            "%s %s %d %.3fs",
            request.method,
            request.url.path,
            response.status_code,
            elapsed,
        )
        return response

    # ── Routers ───────────────────────────────────────────────

    app.include_router(meta.router, dependencies=[Depends(check_key)])
    app.include_router(codes.router, dependencies=[Depends(check_key)])

    return app
