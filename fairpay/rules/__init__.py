"""Static award data shipped with the package.

The JSON files alongside this module hold the standard penalty table, the
seed awards loaded at process start and the popular-award library metadata.
"""

from __future__ import annotations

import json
import os
from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

RULES_DIR = Path(__file__).resolve().parent


class RuleNotFoundError(FileNotFoundError):
    """Raised when a bundled rules file cannot be located."""


def _load_rules_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise RuleNotFoundError(f"Award rules file not found: {path}")
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


@lru_cache(maxsize=1)
def standard_penalty_table() -> Dict[str, Any]:
    return _load_rules_file(RULES_DIR / "standard_penalties.json")


def superannuation_rate() -> Decimal:
    return Decimal(str(standard_penalty_table()["superannuationRate"]))


def load_seed_payloads(path: Optional[os.PathLike[str] | str] = None) -> List[Dict[str, Any]]:
    """Return the raw seed award payloads, optionally from an override file."""

    target = Path(path).expanduser().resolve() if path else RULES_DIR / "seed_awards.json"
    data = _load_rules_file(target)
    if isinstance(data, list):
        return list(data)
    return list(data.get("awards", []))


@lru_cache(maxsize=1)
def library_payloads() -> List[Dict[str, Any]]:
    return list(_load_rules_file(RULES_DIR / "award_library.json").get("documents", []))


__all__ = [
    "RULES_DIR",
    "RuleNotFoundError",
    "standard_penalty_table",
    "superannuation_rate",
    "load_seed_payloads",
    "library_payloads",
]
