from __future__ import annotations

from decimal import Decimal

import pytest

from fairpay.engine import (
    MissingSelectionError,
    calculate_breakdown,
    calculate_for_award,
    effective_penalty_rates,
    penalty_multiplier,
    standard_penalty_rates,
)
from fairpay.models import PenaltyRates, Shift, standard_week
from fairpay.registry import parse_award


def _shift(hours, penalty_type="None", is_casual=False, allowances=0, idx=0) -> Shift:
    return Shift(
        id=f"shift-{idx}",
        day="Monday",
        hours=Decimal(str(hours)),
        is_casual=is_casual,
        penalty_type=penalty_type,
        allowances=Decimal(str(allowances)),
    )


def test_ordinary_shift_breakdown(retail_level_one):
    result = calculate_breakdown(retail_level_one, [_shift(8)], standard_penalty_rates())

    assert result.base_pay == Decimal("202.16")
    assert result.penalty_pay == 0
    assert result.casual_loading_pay == 0
    assert result.allowances == 0
    assert result.total_gross == Decimal("202.16")
    assert result.superannuation == Decimal("23.2484")


def test_casual_sunday_shift_with_allowance(retail_level_one):
    shift = _shift(8, penalty_type="Sunday", is_casual=True, allowances=10)
    result = calculate_breakdown(retail_level_one, [shift], standard_penalty_rates())

    assert result.base_pay == Decimal("202.16")
    assert result.penalty_pay == Decimal("101.08")
    assert result.casual_loading_pay == Decimal("50.54")
    assert result.allowances == Decimal("10")
    assert result.total_gross == Decimal("363.78")
    assert result.superannuation == result.total_gross * Decimal("0.115")


def test_award_without_penalty_table_uses_standard_rates(bare_award):
    assert effective_penalty_rates(bare_award) == standard_penalty_rates()

    result = calculate_for_award(bare_award, bare_award.classifications[0], [_shift(5, "PublicHoliday")])

    assert result.base_pay == Decimal("100")
    assert result.penalty_pay == Decimal("125")


def test_penalty_and_casual_loading_are_additive(retail_level_one):
    rates = standard_penalty_rates()
    both = calculate_breakdown(retail_level_one, [_shift(6, "Saturday", is_casual=True)], rates)
    penalty_only = calculate_breakdown(retail_level_one, [_shift(6, "Saturday")], rates)
    casual_only = calculate_breakdown(retail_level_one, [_shift(6, is_casual=True)], rates)

    assert both.penalty_pay == penalty_only.penalty_pay > 0
    assert both.casual_loading_pay == casual_only.casual_loading_pay > 0
    assert both.total_gross == both.base_pay + penalty_only.penalty_pay + casual_only.casual_loading_pay


def test_empty_week_is_all_zero(retail_level_one):
    result = calculate_breakdown(retail_level_one, standard_week(), standard_penalty_rates())

    assert result.total_gross == 0
    assert result.superannuation == 0
    assert result.components() == []


def test_zero_hours_still_counts_allowances(retail_level_one):
    result = calculate_breakdown(
        retail_level_one, [_shift(0, "Sunday", is_casual=True, allowances="12.5")], standard_penalty_rates()
    )

    assert result.base_pay == result.penalty_pay == result.casual_loading_pay == 0
    assert result.total_gross == Decimal("12.5")
    assert result.components() == [("Allowances", Decimal("12.5"))]


def test_multiplier_below_one_never_reduces_pay(retail_level_one):
    rates = PenaltyRates(
        saturday=Decimal("0.8"),
        sunday=Decimal("1"),
        public_holiday=Decimal("2.25"),
        overtime=Decimal("1.5"),
        night_shift=Decimal("1.15"),
    )
    result = calculate_breakdown(retail_level_one, [_shift(8, "Saturday"), _shift(8, "Sunday", idx=1)], rates)

    assert result.penalty_pay == 0
    assert result.base_pay == Decimal("404.32")


def test_partial_table_is_not_back_filled():
    award = parse_award(
        {
            "code": "MA999002",
            "name": "Partial",
            "industry": "Testing",
            "penaltyRates": {"saturday": 1.5},
            "classifications": [{"id": "P1", "title": "P", "baseRate": 30, "casualLoading": 0.25}],
        }
    )
    rates = effective_penalty_rates(award)

    assert rates.saturday == Decimal("1.5")
    assert rates.sunday is None
    assert penalty_multiplier(rates, "Sunday") == 1

    shifts = [_shift(4, "Saturday"), _shift(4, "Sunday", idx=1)]
    result = calculate_for_award(award, award.classifications[0], shifts)
    assert result.penalty_pay == Decimal("60")


def test_night_shift_uses_award_specific_rate(retail_award):
    classification = retail_award.classification("R1")
    result = calculate_for_award(retail_award, classification, [_shift(10, "NightShift")])

    assert result.penalty_pay == Decimal("10") * Decimal("25.27") * Decimal("0.3")


def test_calculation_is_repeatable_and_leaves_inputs_untouched(retail_level_one):
    shifts = [_shift(7.5, "Overtime", is_casual=True, allowances=3)]
    before = [shift.to_dict() for shift in shifts]
    first = calculate_breakdown(retail_level_one, shifts, standard_penalty_rates())
    second = calculate_breakdown(retail_level_one, shifts, standard_penalty_rates())

    assert first == second
    assert [shift.to_dict() for shift in shifts] == before


def test_totals_are_consistent_across_a_full_week(retail_level_one):
    shifts = standard_week()
    penalties = ["None", "None", "Overtime", "NightShift", "PublicHoliday", "Saturday", "Sunday"]
    for idx, shift in enumerate(shifts):
        shift.hours = Decimal("7.6")
        shift.penalty_type = penalties[idx]
        shift.is_casual = idx % 2 == 0
        shift.allowances = Decimal(idx)

    result = calculate_breakdown(retail_level_one, shifts, standard_penalty_rates())

    assert result.base_pay == Decimal("7.6") * 7 * Decimal("25.27")
    assert result.allowances == Decimal("21")
    assert result.total_gross == result.base_pay + result.penalty_pay + result.casual_loading_pay + result.allowances
    assert result.total_package == result.total_gross + result.superannuation
    assert float(result.superannuation) == pytest.approx(float(result.total_gross) * 0.115)


def test_missing_classification_signals_missing_selection(bare_award):
    with pytest.raises(MissingSelectionError):
        calculate_breakdown(None, [_shift(8)], standard_penalty_rates())
    with pytest.raises(MissingSelectionError):
        calculate_for_award(bare_award, None, [_shift(8)])
    with pytest.raises(MissingSelectionError):
        calculate_for_award(None, bare_award.classifications[0], [_shift(8)])


def test_breakdown_serialises_with_camel_case_keys(retail_level_one):
    result = calculate_breakdown(retail_level_one, [_shift(8)], standard_penalty_rates())
    payload = result.to_dict()

    assert payload["basePay"] == pytest.approx(202.16)
    assert payload["superannuation"] == pytest.approx(23.2484)
    assert payload["totalPackage"] == pytest.approx(225.4084)
    assert set(payload) == {
        "basePay",
        "penaltyPay",
        "casualLoadingPay",
        "allowances",
        "totalGross",
        "superannuation",
        "totalPackage",
    }
