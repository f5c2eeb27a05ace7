"""Encode/decode endpoints.

This is the human-facing edge: input is trimmed and upper-cased here,
and the display prefix is added on the way out and stripped on the way in.
The codec itself only ever sees canonical strings.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from htcode.codec import ProductCodec
from htcode.config import HtcodeConfig
from htcode.deps import get_codec, get_config

router = APIRouter(prefix="/api/v1", tags=["codes"])


class EncodeRequest(BaseModel):
    identifier: str


class DecodeRequest(BaseModel):
    code: str


def normalize_code(raw: str, prefix: str) -> str:
    code = raw.strip().upper()
    if prefix and code.startswith(prefix.upper()):
        code = code[len(prefix) :]
    return code


def _decode(raw: str, codec: ProductCodec, config: HtcodeConfig) -> dict:
    code = normalize_code(raw, config.code_prefix)
    return {"code": code, "identifier": codec.decode(code)}


@router.post("/encode")
def encode(
    request: EncodeRequest,
    codec: ProductCodec = Depends(get_codec),
    config: HtcodeConfig = Depends(get_config),
):
    identifier = request.identifier.strip().upper()
    code = codec.encode(identifier)
    return {
        "identifier": identifier,
        "code": code,
        "display": f"{config.code_prefix}{code}",
    }


@router.post("/decode")
def decode(
    request: DecodeRequest,
    codec: ProductCodec = Depends(get_codec),
    config: HtcodeConfig = Depends(get_config),
):
    return _decode(request.code, codec, config)


@router.get("/codes/{code}")
def get_code(
    code: str,
    codec: ProductCodec = Depends(get_codec),
    config: HtcodeConfig = Depends(get_config),
):
    return _decode(code, codec, config)
