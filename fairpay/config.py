"""Configuration helpers for the FairPay service."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}
_warned_invalid: set[str] = set()

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


def _env(name: str) -> Optional[str]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return raw.strip()


def _ignore_invalid(name: str, raw: str, kind: str) -> None:
    if name in _warned_invalid:
        return
    _warned_invalid.add(name)
    logger.warning("[config] Ignoring invalid %s for %s: %s", kind, name, raw)


def _parse_bool(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    if raw.lower() in _TRUE_VALUES:
        return True
    if raw.lower() in _FALSE_VALUES:
        return False
    _ignore_invalid(name, raw, "boolean")
    return default


def _parse_float(name: str, default: float) -> float:
    """Positive float from the environment; anything else falls back to ``default``."""
    raw = _env(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        value = 0.0
    if value <= 0:
        _ignore_invalid(name, raw, "number")
        return default
    return value


def analysis_provider() -> str:
    """Which analysis adapter to bind: ``mock`` (default) or ``real``."""
    return (_env("FAIRPAY_ANALYSIS_PROVIDER") or "mock").lower()


def gemini_api_key() -> Optional[str]:
    return _env("GEMINI_API_KEY") or _env("API_KEY")


def gemini_model() -> str:
    return _env("FAIRPAY_GEMINI_MODEL") or DEFAULT_GEMINI_MODEL


def gemini_base_url() -> str:
    return (_env("FAIRPAY_GEMINI_BASE_URL") or DEFAULT_GEMINI_BASE_URL).rstrip("/")


def analysis_timeout() -> float:
    return _parse_float("FAIRPAY_ANALYSIS_TIMEOUT", 30.0)


def seed_enabled() -> bool:
    return _parse_bool("FAIRPAY_SEED_ENABLED", True)


def seed_awards_path() -> Optional[Path]:
    """Optional override for the seed awards JSON file."""
    configured = _env("FAIRPAY_SEED_AWARDS")
    if configured:
        return Path(configured).expanduser().resolve()
    return None
