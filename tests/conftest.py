from __future__ import annotations

from decimal import Decimal
from typing import List

import pytest

from fairpay.models import Award, Classification, Shift, standard_week
from fairpay.registry import AwardRegistry, parse_award


@pytest.fixture()
def registry() -> AwardRegistry:
    return AwardRegistry.from_seed()


@pytest.fixture()
def retail_award(registry: AwardRegistry) -> Award:
    return registry.get("MA000004")


@pytest.fixture()
def retail_level_one() -> Classification:
    return Classification(
        id="R1",
        title="Retail Employee Level 1",
        base_rate=Decimal("25.27"),
        casual_loading=Decimal("0.25"),
    )


@pytest.fixture()
def week() -> List[Shift]:
    return standard_week()


@pytest.fixture()
def bare_award() -> Award:
    """An award without its own penalty table."""
    return parse_award(
        {
            "code": "MA999001",
            "name": "Test Award",
            "industry": "Testing",
            "classifications": [{"id": "T1", "title": "Tester", "baseRate": 20, "casualLoading": 0.25}],
        }
    )
