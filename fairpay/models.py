"""Award, classification and shift data shapes.

All JSON conversion uses the camelCase field names the award ingestion
collaborator produces (``baseRate``, ``penaltyRates`` and so on). Monetary
values and multipliers are held as :class:`~decimal.Decimal` so that the pay
engine can sum them without drift.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple

PenaltyType = Literal["None", "Saturday", "Sunday", "PublicHoliday", "Overtime", "NightShift"]

PENALTY_TYPES: Tuple[str, ...] = ("None", "Saturday", "Sunday", "PublicHoliday", "Overtime", "NightShift")

# Penalty type -> PenaltyRates attribute. "None" has no table entry.
PENALTY_FIELDS: Dict[str, Optional[str]] = {
    "None": None,
    "Saturday": "saturday",
    "Sunday": "sunday",
    "PublicHoliday": "public_holiday",
    "Overtime": "overtime",
    "NightShift": "night_shift",
}

DAYS_OF_WEEK: Tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

_DECIMAL_ZERO = Decimal("0")


class AwardValidationError(ValueError):
    """Raised when an award payload does not have the expected shape."""


def to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if value is None:
        return _DECIMAL_ZERO
    if isinstance(value, bool):
        raise AwardValidationError(f"Expected a number, got {value!r}")
    if isinstance(value, (int, float)):
        return Decimal(str(value))
    try:
        return Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise AwardValidationError(f"Expected a number, got {value!r}") from exc


def _optional_decimal(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    return to_decimal(value)


def _number(value: Decimal) -> float:
    return float(value)


@dataclass(frozen=True)
class PenaltyRates:
    """Multipliers of the base hourly rate; 1.0 means no penalty.

    A field left as ``None`` came from a partial table. It is never back-filled
    from the standard table.
    """

    saturday: Optional[Decimal] = None
    sunday: Optional[Decimal] = None
    public_holiday: Optional[Decimal] = None
    overtime: Optional[Decimal] = None
    night_shift: Optional[Decimal] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PenaltyRates":
        if not isinstance(data, Mapping):
            raise AwardValidationError("penaltyRates must be an object")
        return cls(
            saturday=_optional_decimal(data.get("saturday")),
            sunday=_optional_decimal(data.get("sunday")),
            public_holiday=_optional_decimal(data.get("publicHoliday")),
            overtime=_optional_decimal(data.get("overtime")),
            night_shift=_optional_decimal(data.get("nightShift")),
        )

    def multiplier_for(self, penalty_type: str) -> Optional[Decimal]:
        try:
            attribute = PENALTY_FIELDS[penalty_type]
        except KeyError as exc:
            raise AwardValidationError(f"Unknown penalty type {penalty_type!r}") from exc
        if attribute is None:
            return Decimal("1")
        return getattr(self, attribute)

    def to_dict(self) -> Dict[str, Optional[float]]:
        def _opt(value: Optional[Decimal]) -> Optional[float]:
            return None if value is None else float(value)

        return {
            "saturday": _opt(self.saturday),
            "sunday": _opt(self.sunday),
            "publicHoliday": _opt(self.public_holiday),
            "overtime": _opt(self.overtime),
            "nightShift": _opt(self.night_shift),
        }


@dataclass(frozen=True)
class Allowance:
    name: str
    amount: Decimal

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Allowance":
        if not isinstance(data, Mapping):
            raise AwardValidationError("allowance entries must be objects")
        return cls(name=str(data.get("name", "")), amount=to_decimal(data.get("amount", 0)))

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "amount": _number(self.amount)}


@dataclass(frozen=True)
class Classification:
    id: str
    title: str
    base_rate: Decimal
    casual_loading: Decimal
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Classification":
        if not isinstance(data, Mapping):
            raise AwardValidationError("classification entries must be objects")
        class_id = str(data.get("id") or "").strip()
        if not class_id:
            raise AwardValidationError("classification requires an 'id'")
        if "baseRate" not in data:
            raise AwardValidationError(f"classification {class_id!r} is missing 'baseRate'")
        return cls(
            id=class_id,
            title=str(data.get("title", class_id)),
            base_rate=to_decimal(data["baseRate"]),
            casual_loading=to_decimal(data.get("casualLoading", 0)),
            description=data.get("description"),
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "baseRate": _number(self.base_rate),
            "casualLoading": _number(self.casual_loading),
        }
        if self.description is not None:
            payload["description"] = self.description
        return payload


@dataclass(frozen=True)
class Award:
    code: str
    name: str
    industry: str
    classifications: Tuple[Classification, ...] = ()
    penalty_rates: Optional[PenaltyRates] = None
    allowances: Tuple[Allowance, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Award":
        if not isinstance(data, Mapping):
            raise AwardValidationError("award payload must be an object")
        code = str(data.get("code") or "").strip()
        if not code:
            raise AwardValidationError("award requires a non-empty 'code'")

        raw_classes = data.get("classifications") or []
        raw_allowances = data.get("allowances") or []
        if not isinstance(raw_classes, list):
            raise AwardValidationError("classifications must be a list")
        if not isinstance(raw_allowances, list):
            raise AwardValidationError("allowances must be a list")

        raw_penalties = data.get("penaltyRates")
        return cls(
            code=code,
            name=str(data.get("name") or code),
            industry=str(data.get("industry") or ""),
            classifications=tuple(Classification.from_dict(item) for item in raw_classes),
            penalty_rates=PenaltyRates.from_dict(raw_penalties) if raw_penalties is not None else None,
            allowances=tuple(Allowance.from_dict(item) for item in raw_allowances),
        )

    def classification(self, class_id: Optional[str]) -> Optional[Classification]:
        for item in self.classifications:
            if item.id == class_id:
                return item
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "name": self.name,
            "industry": self.industry,
            "classifications": [item.to_dict() for item in self.classifications],
            "penaltyRates": self.penalty_rates.to_dict() if self.penalty_rates else None,
            "allowances": [item.to_dict() for item in self.allowances],
        }


@dataclass
class Shift:
    """One day of the week. Callers edit these in place between calculations."""

    id: str
    day: str
    hours: Decimal = _DECIMAL_ZERO
    is_casual: bool = False
    penalty_type: PenaltyType = "None"
    allowances: Decimal = _DECIMAL_ZERO

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Shift":
        penalty_type = str(data.get("penaltyType") or "None")
        if penalty_type not in PENALTY_FIELDS:
            raise AwardValidationError(f"Unknown penalty type {penalty_type!r}")
        return cls(
            id=str(data.get("id", "")),
            day=str(data.get("day", "")),
            hours=to_decimal(data.get("hours", 0)),
            is_casual=bool(data.get("isCasual", False)),
            penalty_type=penalty_type,  # type: ignore[arg-type]
            allowances=to_decimal(data.get("allowances", 0)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "day": self.day,
            "hours": float(self.hours),
            "isCasual": self.is_casual,
            "penaltyType": self.penalty_type,
            "allowances": float(self.allowances),
        }


def standard_week() -> List[Shift]:
    """Return the seven empty Monday..Sunday shifts with stable ids."""

    return [Shift(id=f"shift-{idx}", day=day) for idx, day in enumerate(DAYS_OF_WEEK)]


@dataclass(frozen=True)
class PayBreakdown:
    base_pay: Decimal
    penalty_pay: Decimal
    casual_loading_pay: Decimal
    allowances: Decimal
    total_gross: Decimal
    superannuation: Decimal

    @property
    def total_package(self) -> Decimal:
        return self.total_gross + self.superannuation

    def components(self) -> List[Tuple[str, Decimal]]:
        """Labelled non-zero components in display order."""

        labelled = [
            ("Base", self.base_pay),
            ("Penalties", self.penalty_pay),
            ("Casual", self.casual_loading_pay),
            ("Allowances", self.allowances),
        ]
        return [(label, value) for label, value in labelled if value > 0]

    def to_dict(self) -> Dict[str, float]:
        return {
            "basePay": float(self.base_pay),
            "penaltyPay": float(self.penalty_pay),
            "casualLoadingPay": float(self.casual_loading_pay),
            "allowances": float(self.allowances),
            "totalGross": float(self.total_gross),
            "superannuation": float(self.superannuation),
            "totalPackage": float(self.total_package),
        }


@dataclass(frozen=True)
class AwardMatch:
    award_code: str
    award_name: str
    confidence: float
    reasoning: str
    suggested_classification: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AwardMatch":
        try:
            confidence = float(data.get("confidence", 0) or 0)
        except (TypeError, ValueError):
            confidence = 0.0
        return cls(
            award_code=str(data.get("awardCode", "")),
            award_name=str(data.get("awardName", "")),
            confidence=max(0.0, min(100.0, confidence)),
            reasoning=str(data.get("reasoning", "")),
            suggested_classification=str(data.get("suggestedClassification", "")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "awardCode": self.award_code,
            "awardName": self.award_name,
            "confidence": self.confidence,
            "reasoning": self.reasoning,
            "suggestedClassification": self.suggested_classification,
        }


@dataclass(frozen=True)
class AwardDocument:
    title: str
    url: Optional[str] = None
    award_code: Optional[str] = None
    description: Optional[str] = None
    industry: Optional[str] = None
    source: Literal["static", "search"] = "static"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], source: Literal["static", "search"] = "static") -> "AwardDocument":
        return cls(
            title=str(data.get("title", "")),
            url=data.get("url"),
            award_code=data.get("awardCode"),
            description=data.get("description"),
            industry=data.get("industry"),
            source=source,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "url": self.url,
            "awardCode": self.award_code,
            "description": self.description,
            "industry": self.industry,
            "source": self.source,
        }


__all__ = [
    "AwardValidationError",
    "PenaltyType",
    "PENALTY_TYPES",
    "PENALTY_FIELDS",
    "DAYS_OF_WEEK",
    "PenaltyRates",
    "Allowance",
    "Classification",
    "Award",
    "Shift",
    "standard_week",
    "PayBreakdown",
    "AwardMatch",
    "AwardDocument",
    "to_decimal",
]
