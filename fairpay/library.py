"""Award document library built from the bundled popular-award metadata."""

from __future__ import annotations

from typing import Iterable, List, Optional

from .models import AwardDocument
from .registry import AwardRegistry
from .rules import library_payloads


def load_library() -> List[AwardDocument]:
    return [AwardDocument.from_dict(item, source="static") for item in library_payloads()]


def filter_documents(documents: Iterable[AwardDocument], term: Optional[str]) -> List[AwardDocument]:
    """Case-insensitive match on title, award code or industry."""

    needle = (term or "").strip().lower()
    if not needle:
        return list(documents)
    return [
        doc
        for doc in documents
        if needle in doc.title.lower()
        or needle in (doc.award_code or "").lower()
        or needle in (doc.industry or "").lower()
    ]


def is_ingested(code: Optional[str], registry: AwardRegistry) -> bool:
    if not code:
        return False
    return code in registry


__all__ = ["load_library", "filter_documents", "is_ingested"]
