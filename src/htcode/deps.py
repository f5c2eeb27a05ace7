"""FastAPI dependencies for htcode routes."""

from __future__ import annotations

from fastapi import Request

from htcode.codec import ProductCodec
from htcode.config import HtcodeConfig


def get_codec(request: Request) -> ProductCodec:
    """Get the codec built at startup."""
    return request.app.state.codec


def get_config(request: Request) -> HtcodeConfig:
    return request.app.state.config
