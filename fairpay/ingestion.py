"""Award ingestion: collaborator output -> typed award -> registry upsert.

A failed ingestion never touches the registry; the award is only upserted
once the collaborator has answered and the payload has parsed.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from .analysis import AnalysisError, AwardAnalysisPort
from .models import Award, AwardValidationError
from .registry import AwardRegistry, parse_award

LOGGER = logging.getLogger("fairpay.ingestion")


class IngestionError(RuntimeError):
    """Raised when an award could not be ingested; the registry is unchanged."""


class IngestionService:
    def __init__(self, registry: AwardRegistry, analysis: AwardAnalysisPort) -> None:
        self._registry = registry
        self._analysis = analysis

    def ingest_document(self, content: str, mime_type: str = "text/plain") -> Award:
        """Ask the collaborator to extract an award from a pay guide and upsert it."""

        try:
            award = self._analysis.ingest_award(content, mime_type)
        except AnalysisError as exc:
            LOGGER.warning("award ingestion failed (%s): %s", mime_type, exc)
            raise IngestionError(str(exc)) from exc
        return self._store(award)

    def ingest_payload(self, payload: Mapping[str, Any]) -> Award:
        """Upsert an award supplied as structured JSON."""

        try:
            award = parse_award(payload)
        except AwardValidationError as exc:
            LOGGER.warning("rejected award payload: %s", exc)
            raise
        return self._store(award)

    def _store(self, award: Award) -> Award:
        if not award.classifications:
            LOGGER.warning("award %s has no classifications; it cannot be used for calculations", award.code)
        stored = self._registry.upsert(award)
        LOGGER.info("%s successfully ingested into knowledge base", award.name)
        return stored


__all__ = ["IngestionError", "IngestionService"]
