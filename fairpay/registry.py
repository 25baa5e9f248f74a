"""In-memory award registry.

The registry is an explicitly owned store: the service builds one instance at
start-up and hands it to whichever component needs lookups. Awards are kept
in insertion order (seed awards first, then ingested ones). Upserting an
existing code replaces the whole record in its original position.

Upsert listeners run after the record is stored. A listener that raises is
logged and skipped; the remaining listeners still run.
"""

from __future__ import annotations

import logging
import os
from dataclasses import replace
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from .models import Award, AwardValidationError
from .rules import load_seed_payloads

LOGGER = logging.getLogger("fairpay.registry")

UpsertListener = Callable[[Award], None]


class AwardNotFoundError(LookupError):
    """Raised when an award code is not present in the registry."""


def parse_award(payload: Mapping[str, Any]) -> Award:
    """Convert an ingested JSON payload into a typed :class:`Award`.

    Only the shape is checked. An award with no classifications or with odd
    rates is returned as-is and shows up later as an unusable selection.
    """

    return Award.from_dict(payload)


class AwardRegistry:
    def __init__(self, awards: Optional[Iterable[Award]] = None) -> None:
        self._awards: Dict[str, Award] = {}
        self._listeners: List[UpsertListener] = []
        for award in awards or ():
            self.upsert(award)

    @classmethod
    def from_seed(cls, path: Optional[os.PathLike[str] | str] = None) -> "AwardRegistry":
        awards = [parse_award(item) for item in load_seed_payloads(path)]
        LOGGER.info("loaded %d seed awards", len(awards))
        return cls(awards)

    def subscribe(self, listener: UpsertListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: UpsertListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def upsert(self, award: Award) -> Award:
        code = (award.code or "").strip()
        if not code:
            raise AwardValidationError("award requires a non-empty 'code'")
        if code != award.code:
            award = replace(award, code=code)
        replaced = code in self._awards
        self._awards[code] = award
        LOGGER.info(
            "%s award %s (%d classifications)",
            "replaced" if replaced else "added",
            code,
            len(award.classifications),
        )
        for listener in list(self._listeners):
            try:
                listener(award)
            except Exception:
                LOGGER.exception("upsert listener failed for award %s", code)
        return award

    def find(self, code: Optional[str]) -> Optional[Award]:
        if code is None:
            return None
        return self._awards.get(code)

    def get(self, code: str) -> Award:
        award = self.find(code)
        if award is None:
            raise AwardNotFoundError(f"No award registered for code {code!r}")
        return award

    def list_all(self) -> List[Award]:
        return list(self._awards.values())

    def codes(self) -> List[str]:
        return list(self._awards.keys())

    def first(self) -> Optional[Award]:
        return next(iter(self._awards.values()), None)

    def __contains__(self, code: object) -> bool:
        return code in self._awards

    def __len__(self) -> int:
        return len(self._awards)


__all__ = ["AwardNotFoundError", "AwardRegistry", "parse_award"]
