from __future__ import annotations

from decimal import Decimal

import pytest

from fairpay.engine import MissingSelectionError
from fairpay.models import Award, Classification, Shift
from fairpay.registry import AwardNotFoundError, AwardRegistry, parse_award
from fairpay.selection import (
    CalculatorSelection,
    ClassificationNotFoundError,
    default_classification,
    resolve_classification,
)


def test_starts_on_first_award_and_classification(registry: AwardRegistry):
    selection = CalculatorSelection(registry)

    assert selection.award_code == "MA000004"
    assert selection.classification_id == "R1"


def test_selecting_an_award_resets_the_classification(registry: AwardRegistry):
    selection = CalculatorSelection(registry, "MA000004")
    selection.select_classification("R4")
    selection.select_award("MA000009")

    assert selection.classification_id == "H2"
    assert selection.classification.base_rate == Decimal("24.08")

    selection.select_award("MA000004")
    assert selection.classification_id == "R1"


def test_unknown_award_code_leaves_selection_alone(registry: AwardRegistry):
    selection = CalculatorSelection(registry)
    with pytest.raises(AwardNotFoundError):
        selection.select_award("MA000999")

    assert selection.award_code == "MA000004"


def test_classification_from_another_award_is_rejected(registry: AwardRegistry):
    selection = CalculatorSelection(registry, "MA000004")
    with pytest.raises(ClassificationNotFoundError):
        selection.select_classification("H2")

    assert selection.classification_id == "R1"


def test_award_without_classifications_cannot_be_calculated(registry: AwardRegistry):
    registry.upsert(parse_award({"code": "MA000100", "name": "Empty", "industry": "", "classifications": []}))
    selection = CalculatorSelection(registry)
    selection.select_award("MA000100")

    assert selection.classification_id is None
    with pytest.raises(MissingSelectionError):
        selection.calculate([Shift(id="shift-0", day="Monday", hours=Decimal("8"))])


def test_empty_registry_has_no_selection():
    selection = CalculatorSelection(AwardRegistry())

    assert selection.award is None
    with pytest.raises(MissingSelectionError):
        selection.resolve()


def test_reingesting_the_active_award_rederives_the_classification(registry: AwardRegistry):
    selection = CalculatorSelection(registry, "MA000004")
    selection.select_classification("R4")

    registry.upsert(
        parse_award(
            {
                "code": "MA000004",
                "name": "General Retail Industry Award",
                "industry": "Retail",
                "classifications": [{"id": "RX", "title": "New level", "baseRate": 26, "casualLoading": 0.25}],
            }
        )
    )

    assert selection.classification_id == "RX"
    assert selection.penalty_rates.saturday == Decimal("1.25")


def test_upserting_another_award_keeps_the_selection(registry: AwardRegistry):
    selection = CalculatorSelection(registry, "MA000004")
    selection.select_classification("R4")
    registry.upsert(parse_award({"code": "MA000002", "name": "Clerks", "industry": "Admin", "classifications": []}))

    assert (selection.award_code, selection.classification_id) == ("MA000004", "R4")


def test_first_ingested_award_becomes_active():
    registry = AwardRegistry()
    selection = CalculatorSelection(registry)
    registry.upsert(
        parse_award(
            {
                "code": "MA000002",
                "name": "Clerks",
                "industry": "Admin",
                "classifications": [{"id": "C1", "title": "Clerk", "baseRate": 24, "casualLoading": 0.25}],
            }
        )
    )

    assert selection.award_code == "MA000002"
    assert selection.classification_id == "C1"


def test_closed_selection_stops_following_the_registry(registry: AwardRegistry):
    selection = CalculatorSelection(registry, "MA000004")
    selection.select_classification("R4")
    selection.close()
    registry.upsert(registry.get("MA000004"))

    assert selection.classification_id == "R4"


def test_resolve_classification_falls_back_to_first(retail_award):
    assert resolve_classification(retail_award, "R4").id == "R4"
    assert resolve_classification(retail_award, "H2").id == "R1"
    assert resolve_classification(retail_award, None).id == "R1"
    assert resolve_classification(None, "R1") is None
    assert default_classification(None) is None


def test_select_checks_award_and_classification_before_switching(registry: AwardRegistry):
    selection = CalculatorSelection(registry, "MA000009")
    selection.select_classification("H3")

    with pytest.raises(ClassificationNotFoundError):
        selection.select("MA000004", "H3")
    with pytest.raises(AwardNotFoundError):
        selection.select("MA000999", "H3")
    assert (selection.award_code, selection.classification_id) == ("MA000009", "H3")

    award, classification = selection.select("MA000004", "R4")
    assert (award.code, classification.id) == ("MA000004", "R4")
    assert selection.select("MA000010")[1].id == "C10"


def test_padded_award_code_is_selectable():
    registry = AwardRegistry()
    selection = CalculatorSelection(registry)
    registry.upsert(
        Award(
            code=" MA000002 ",
            name="Clerks",
            industry="Admin",
            classifications=(Classification(id="C1", title="Clerk", base_rate=Decimal("24"), casual_loading=Decimal("0.25")),),
        )
    )

    assert selection.award_code == "MA000002"
    assert selection.award is not None
    assert selection.classification.id == "C1"
