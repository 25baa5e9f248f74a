"""FairPay: Australian Modern Award pay calculator.

Holds a registry of awards, computes weekly pay breakdowns against a chosen
classification and exposes both over a small FastAPI service.
"""

from .engine import MissingSelectionError, calculate_breakdown, calculate_for_award, effective_penalty_rates
from .models import Award, AwardValidationError, Classification, PayBreakdown, PenaltyRates, Shift, standard_week
from .registry import AwardNotFoundError, AwardRegistry, parse_award
from .selection import CalculatorSelection

__all__ = [
    "Award",
    "AwardNotFoundError",
    "AwardRegistry",
    "AwardValidationError",
    "CalculatorSelection",
    "Classification",
    "MissingSelectionError",
    "PayBreakdown",
    "PenaltyRates",
    "Shift",
    "calculate_breakdown",
    "calculate_for_award",
    "effective_penalty_rates",
    "parse_award",
    "standard_week",
]
