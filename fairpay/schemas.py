"""Pydantic models for FairPay endpoints."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ShiftIn(_CamelModel):
    id: str = Field("", description="Stable shift identifier, e.g. shift-0")
    day: str = Field("", description="Day of the week")
    hours: float = Field(0, ge=0, description="Hours worked; the UI suggests at most 24")
    is_casual: bool = Field(False, alias="isCasual")
    penalty_type: Literal["None", "Saturday", "Sunday", "PublicHoliday", "Overtime", "NightShift"] = Field(
        "None", alias="penaltyType"
    )
    allowances: float = Field(0, ge=0, description="Flat dollar allowances entered for the day")


class CalculateRequest(_CamelModel):
    award_code: Optional[str] = Field(None, alias="awardCode", description="Defaults to the active selection")
    classification_id: Optional[str] = Field(None, alias="classificationId")
    shifts: Optional[List[ShiftIn]] = Field(None, max_length=7, description="Defaults to an empty week")


class SelectionRequest(_CamelModel):
    award_code: str = Field(..., alias="awardCode", min_length=1)
    classification_id: Optional[str] = Field(None, alias="classificationId")


class IngestRequest(_CamelModel):
    content: str = Field(..., min_length=1, description="Pay guide text, or base64 data for other mime types")
    mime_type: str = Field("text/plain", alias="mimeType")


class MatchRequest(_CamelModel):
    job_title: str = Field(..., alias="jobTitle", min_length=1)
    description: str = ""
    industry: str = ""


class SearchRequest(BaseModel):
    query: str = Field(..., min_length=1)


class AssistantRequest(BaseModel):
    question: str = Field(..., min_length=1)
    context: Optional[str] = None
