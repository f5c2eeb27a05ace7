"""Configuration for htcode.

Reads from config/htcode.ini if present, environment variables override.
A named profile fills in the codec parameters that are left at their
defaults; any value set in the file or environment wins over the profile.
"""

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass, fields
from pathlib import Path

from htcode.alphabet import UNAMBIGUOUS
from htcode.errors import ConfigurationError

_CONFIG_FILE = Path(__file__).resolve().parent.parent.parent / "config" / "htcode.ini"

PROFILES: dict[str, dict] = {
    "default": {},
    # 8-digit numeric identifiers, 10^4 x 10^4 halves, codes issued least
    # significant symbol first.
    "adm": {
        "shape": "99999999",
        "left_range": 10000,
        "right_range": 10000,
        "little_endian": True,
    },
}


@dataclass(frozen=True)
class HtcodeConfig:
    """Codec and gateway configuration. Immutable once loaded."""

    profile: str = "default"
    seed: str = "ht1416"
    shape: str = "99AA9999"
    alphabet: str = UNAMBIGUOUS
    code_length: int = 6
    rounds: int = 4
    max_walk: int = 1000
    left_range: int = 0
    right_range: int = 0
    little_endian: bool = False
    code_prefix: str = "HT-"
    api_key: str = ""
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"

    def __post_init__(self):
        # Profile values fill in any codec field still at its class default.
        if self.profile not in PROFILES:
            raise ConfigurationError(
                f"Unknown profile {self.profile!r}; expected one of {', '.join(sorted(PROFILES))}"
            )
        defaults = {f.name: f.default for f in fields(self)}
        for key, value in PROFILES[self.profile].items():
            if getattr(self, key) == defaults[key]:
                object.__setattr__(self, key, value)


_INT_KEYS = {"code_length", "rounds", "max_walk", "left_range", "right_range", "port"}
_BOOL_KEYS = {"little_endian"}
_CODEC_KEYS = (
    "profile",
    "seed",
    "shape",
    "alphabet",
    "code_length",
    "rounds",
    "max_walk",
    "left_range",
    "right_range",
    "little_endian",
    "code_prefix",
)
_GATEWAY_KEYS = ("api_key", "host", "port", "log_level")


def _coerce(key: str, raw: str):
    if key in _INT_KEYS:
        try:
            return int(raw)
        except ValueError:
            raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from None
    if key in _BOOL_KEYS:
        lowered = raw.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off"):
            return False
        raise ConfigurationError(f"{key} must be a boolean, got {raw!r}")
    return raw


def load_config(config_path: Path | None = None) -> HtcodeConfig:
    """Load config from INI file, then override with environment variables."""
    path = config_path or _CONFIG_FILE
    overrides: dict = {}

    if path.exists():
        parser = configparser.ConfigParser(interpolation=None)
        parser.read(path)
        for section, keys in (("codec", _CODEC_KEYS), ("gateway", _GATEWAY_KEYS)):
            if not parser.has_section(section):
                continue
            for key in keys:
                val = parser.get(section, key, fallback=None)
                if val is not None:
                    overrides[key] = _coerce(key, val)

    known = {f.name for f in fields(HtcodeConfig)}
    for key in known:
        val = os.getenv(f"HTCODE_{key.upper()}")
        if val is not None:
            overrides[key] = _coerce(key, val)

    return HtcodeConfig(**overrides)
