"""Active award / classification selection for the pay calculator.

The selected classification always belongs to the selected award. Whenever
the active award changes (picked by code, or replaced in the registry by an
ingestion) the classification is re-derived as the award's first one.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Tuple

from .engine import MissingSelectionError, calculate_for_award, effective_penalty_rates
from .models import Award, Classification, PayBreakdown, PenaltyRates, Shift
from .registry import AwardNotFoundError, AwardRegistry

LOGGER = logging.getLogger("fairpay.selection")


class ClassificationNotFoundError(LookupError):
    """Raised when a classification id does not belong to the active award."""


def default_classification(award: Optional[Award]) -> Optional[Classification]:
    if award is None or not award.classifications:
        return None
    return award.classifications[0]


def resolve_classification(award: Optional[Award], class_id: Optional[str]) -> Optional[Classification]:
    """Return the named classification, falling back to the award's first."""

    if award is None:
        return None
    return award.classification(class_id) or default_classification(award)


class CalculatorSelection:
    def __init__(self, registry: AwardRegistry, award_code: Optional[str] = None) -> None:
        self._registry = registry
        self._award_code: Optional[str] = None
        self._classification_id: Optional[str] = None
        registry.subscribe(self._on_award_upserted)

        initial = registry.find(award_code) if award_code else None
        if initial is None:
            initial = registry.first()
        if initial is not None:
            self._activate(initial)

    @property
    def award_code(self) -> Optional[str]:
        return self._award_code

    @property
    def classification_id(self) -> Optional[str]:
        return self._classification_id

    @property
    def award(self) -> Optional[Award]:
        return self._registry.find(self._award_code)

    @property
    def classification(self) -> Optional[Classification]:
        award = self.award
        if award is None:
            return None
        return award.classification(self._classification_id)

    @property
    def penalty_rates(self) -> PenaltyRates:
        return effective_penalty_rates(self.award)

    def select_award(self, code: str) -> Award:
        return self.select(code)[0]

    def select(self, code: str, class_id: Optional[str] = None) -> Tuple[Award, Optional[Classification]]:
        """Switch award and, optionally, classification in one step.

        Both are checked before anything changes, so a rejected request leaves
        the current selection in place.
        """
        award = self._registry.find(code)
        if award is None:
            raise AwardNotFoundError(f"No award registered for code {code!r}")
        chosen = award.classification(class_id) if class_id else default_classification(award)
        if class_id and chosen is None:
            raise ClassificationNotFoundError(f"Classification {class_id!r} is not part of award {code!r}")
        self._activate(award)
        if chosen is not None:
            self._classification_id = chosen.id
        return award, chosen

    def select_classification(self, class_id: str) -> Classification:
        award = self.award
        classification = award.classification(class_id) if award else None
        if classification is None:
            raise ClassificationNotFoundError(
                f"Classification {class_id!r} is not part of award {self._award_code!r}"
            )
        self._classification_id = classification.id
        return classification

    def resolve(self) -> Tuple[Award, Classification]:
        award = self.award
        if award is None:
            raise MissingSelectionError("No award selected; ingest or select an award first")
        classification = self.classification
        if classification is None:
            raise MissingSelectionError(f"Award {award.code} has no classification to calculate against")
        return award, classification

    def calculate(self, shifts: Iterable[Shift]) -> PayBreakdown:
        award, classification = self.resolve()
        return calculate_for_award(award, classification, shifts)

    def close(self) -> None:
        self._registry.unsubscribe(self._on_award_upserted)

    def _activate(self, award: Award) -> None:
        first = default_classification(award)
        self._award_code = award.code
        self._classification_id = first.id if first else None
        LOGGER.debug("active award %s, classification %s", award.code, self._classification_id)

    def _on_award_upserted(self, award: Award) -> None:
        if self._award_code is None or award.code == self._award_code:
            self._activate(award)


__all__ = [
    "CalculatorSelection",
    "ClassificationNotFoundError",
    "default_classification",
    "resolve_classification",
]
