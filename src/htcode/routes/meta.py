"""Meta endpoints: health, version, codec domain."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from htcode.codec import ProductCodec
from htcode.config import HtcodeConfig
from htcode.deps import get_codec, get_config

router = APIRouter(prefix="/api/v1", tags=["meta"])


@router.get("/health")
def health():
    return {"status": "ok", "service": "htcode"}


@router.get("/version")
def version(config: HtcodeConfig = Depends(get_config)):
    return {
        "gateway": "0.1.0",
        "profile": config.profile,
    }


@router.get("/domain")
def domain(
    codec: ProductCodec = Depends(get_codec),
    config: HtcodeConfig = Depends(get_config),
):
    return {
        "profile": config.profile,
        "identifier_shape": codec.shape.template,
        "domain_size": codec.domain_size,
        "code_space": codec.alphabet.capacity,
        "alphabet": codec.alphabet.symbols,
        "code_length": codec.alphabet.length,
        "rounds": codec.walker.permutation.rounds,
    }
