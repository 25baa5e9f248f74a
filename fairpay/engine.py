"""Weekly pay breakdown engine.

Given an award's penalty table, one classification and the shifts for a week,
compute base pay, penalty pay, casual loading, allowances, gross and
superannuation. The engine never mutates its inputs and keeps no state, so it
can be called repeatedly and from several callers at once.

Pay policy:

* penalty pay is only the portion above base (``multiplier - 1``) and only
  when the multiplier is greater than 1.0; lower multipliers are ignored
  rather than reducing pay;
* casual loading applies on top of any penalty;
* the standard penalty table is used only when the award has no table at
  all. A partial table is never merged with the defaults, and an unset field
  behaves like 1.0.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Optional

from .models import Award, Classification, PayBreakdown, PenaltyRates, Shift, to_decimal
from .rules import standard_penalty_table, superannuation_rate

_DECIMAL_ZERO = Decimal("0")
_ONE = Decimal("1")


class MissingSelectionError(LookupError):
    """Raised when no award or classification can be resolved for a calculation."""


def standard_penalty_rates() -> PenaltyRates:
    return PenaltyRates.from_dict(standard_penalty_table()["penaltyRates"])


def effective_penalty_rates(award: Optional[Award]) -> PenaltyRates:
    """Resolve the penalty table for a calculation, once per calculation."""

    if award is not None and award.penalty_rates is not None:
        return award.penalty_rates
    return standard_penalty_rates()


def penalty_multiplier(rates: PenaltyRates, penalty_type: str) -> Decimal:
    multiplier = rates.multiplier_for(penalty_type)
    return _ONE if multiplier is None else multiplier


def calculate_breakdown(
    classification: Optional[Classification],
    shifts: Iterable[Shift],
    penalty_rates: PenaltyRates,
) -> PayBreakdown:
    if classification is None:
        raise MissingSelectionError("No classification selected")

    base_rate = to_decimal(classification.base_rate)
    casual_loading = to_decimal(classification.casual_loading)

    base_pay = _DECIMAL_ZERO
    penalty_pay = _DECIMAL_ZERO
    casual_loading_pay = _DECIMAL_ZERO
    allowances = _DECIMAL_ZERO

    for shift in shifts:
        hours = to_decimal(shift.hours)
        multiplier = penalty_multiplier(penalty_rates, shift.penalty_type)

        base_pay += hours * base_rate
        if multiplier > _ONE:
            penalty_pay += hours * base_rate * (multiplier - _ONE)
        if shift.is_casual:
            casual_loading_pay += hours * base_rate * casual_loading
        allowances += to_decimal(shift.allowances)

    total_gross = base_pay + penalty_pay + casual_loading_pay + allowances
    return PayBreakdown(
        base_pay=base_pay,
        penalty_pay=penalty_pay,
        casual_loading_pay=casual_loading_pay,
        allowances=allowances,
        total_gross=total_gross,
        superannuation=total_gross * superannuation_rate(),
    )


def calculate_for_award(
    award: Optional[Award],
    classification: Optional[Classification],
    shifts: Iterable[Shift],
) -> PayBreakdown:
    """Calculate using the award's own penalty table (or the standard one)."""

    if award is None:
        raise MissingSelectionError("No award selected")
    if classification is None:
        raise MissingSelectionError(f"Award {award.code} has no classification to calculate against")
    return calculate_breakdown(classification, shifts, effective_penalty_rates(award))


__all__ = [
    "MissingSelectionError",
    "standard_penalty_rates",
    "effective_penalty_rates",
    "penalty_multiplier",
    "calculate_breakdown",
    "calculate_for_award",
]
