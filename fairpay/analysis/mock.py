"""Deterministic offline stand-in for the award-analysis collaborator.

Used for local development and tests. Matching scores the bundled award
library by keyword overlap; ingestion reads either a JSON award record or a
plain-text pay guide with simple pattern matching.
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict, List, Optional, Sequence

from ..library import load_library
from ..models import Award, AwardDocument, AwardMatch, AwardValidationError
from ..registry import parse_award
from ..rules import load_seed_payloads
from . import TEXT_CONTENT_LIMIT, AnalysisError, dedupe_documents, knowledge_base_summary

AWARD_URL = "https://awards.fairwork.gov.au/{code}.html"

_CODE_PATTERN = re.compile(r"\bMA\d{6}\b", re.IGNORECASE)
_PENALTY_PATTERN = re.compile(
    r"(saturday|sunday|public\s+holiday|overtime|night\s+shift)\D{0,40}?(\d+(?:\.\d+)?)\s*%",
    re.IGNORECASE,
)
_CLASSIFICATION_PATTERN = re.compile(
    r"^\s*(?P<title>[^$\n]*?(?:level|grade)\s*[\w/-]+[^$\n]*?)\s*[-:]\s*\$(?P<rate>\d+(?:\.\d+)?)\s*(?:per\s+hour|/\s*hr|/\s*hour)",
    re.IGNORECASE | re.MULTILINE,
)
_ALLOWANCE_PATTERN = re.compile(
    r"^\s*(?P<name>[^$\n]*allowance)\s*[-:]\s*\$(?P<amount>\d+(?:\.\d+)?)",
    re.IGNORECASE | re.MULTILINE,
)
_CASUAL_PATTERN = re.compile(r"casual\s+loading\D{0,20}?(\d+(?:\.\d+)?)\s*%", re.IGNORECASE)

_PENALTY_KEYS = {
    "saturday": "saturday",
    "sunday": "sunday",
    "public holiday": "publicHoliday",
    "overtime": "overtime",
    "night shift": "nightShift",
}


def _tokens(*parts: str) -> set[str]:
    words: set[str] = set()
    for part in parts:
        words.update(token for token in re.findall(r"[a-z0-9]+", (part or "").lower()) if len(token) > 2)
    return words


def _first_classification_titles() -> Dict[str, str]:
    titles: Dict[str, str] = {}
    for payload in load_seed_payloads():
        classes = payload.get("classifications") or []
        if classes:
            titles[str(payload.get("code"))] = str(classes[0].get("title", ""))
    return titles


class MockAnalysis:
    port_name = "mock"

    def match_award(self, job_title: str, description: str, industry: str) -> List[AwardMatch]:
        wanted = _tokens(job_title, description)
        industry_key = (industry or "").strip().lower()
        suggestions = _first_classification_titles()

        scored = []
        for position, document in enumerate(load_library()):
            overlap = wanted & _tokens(document.title, document.description or "", document.industry or "")
            score = 15 * len(overlap)
            if industry_key and industry_key in (document.industry or "").lower():
                score += 50
            if score:
                scored.append((score, position, document, sorted(overlap)))

        scored.sort(key=lambda item: (-item[0], item[1]))
        matches: List[AwardMatch] = []
        for score, _position, document, overlap in scored[:3]:
            reasons = []
            if overlap:
                reasons.append(f"matched terms: {', '.join(overlap)}")
            if industry_key and industry_key in (document.industry or "").lower():
                reasons.append(f"industry {document.industry}")
            matches.append(
                AwardMatch(
                    award_code=document.award_code or "",
                    award_name=document.title,
                    confidence=float(min(score, 95)),
                    reasoning="; ".join(reasons),
                    suggested_classification=suggestions.get(document.award_code or "", "Level 1"),
                )
            )
        return matches

    def find_documents(self, query: str) -> List[AwardDocument]:
        wanted = _tokens(query)
        codes = {code.upper() for code in _CODE_PATTERN.findall(query or "")}
        found = []
        for document in load_library():
            code = (document.award_code or "").upper()
            if code in codes or wanted & _tokens(document.title):
                found.append(
                    AwardDocument(
                        title=f"{document.title} Pay Guide",
                        url=AWARD_URL.format(code=code),
                        award_code=document.award_code,
                        description="Found via Live Search",
                        industry=document.industry,
                        source="search",
                    )
                )
        return dedupe_documents(found)

    def ask(self, question: str, knowledge_base: Sequence[Award] = (), context: Optional[str] = None) -> str:
        lowered = (question or "").lower()
        for award in knowledge_base:
            if award.code.lower() in lowered or award.name.lower() in lowered:
                summary = knowledge_base_summary([award]).splitlines()[1:]
                return "\n".join(line for line in summary if line).strip()
        return (
            "I don't have that specific award loaded yet. Fair Work general principles apply; "
            "check the relevant pay guide. This is not legal advice."
        )

    def ingest_award(self, content: str, mime_type: str = "text/plain") -> Award:
        if mime_type not in ("text/plain", "application/json"):
            raise AnalysisError(f"Mock analysis cannot read {mime_type} content")
        text = (content or "")[:TEXT_CONTENT_LIMIT]
        payload = self._json_payload(text) or self._text_payload(text)
        try:
            return parse_award(payload)
        except AwardValidationError as exc:
            raise AnalysisError(f"Could not parse award data: {exc}") from exc

    def _json_payload(self, text: str) -> Optional[Dict[str, Any]]:
        stripped = text.strip()
        if not stripped.startswith("{"):
            return None
        try:
            data = json.loads(stripped)
        except json.JSONDecodeError:
            return None
        return data if isinstance(data, dict) else None

    def _text_payload(self, text: str) -> Dict[str, Any]:
        code_match = _CODE_PATTERN.search(text)
        if code_match is None:
            raise AnalysisError("Could not parse award data: no award code found")
        lines = [line.strip() for line in text.splitlines() if line.strip()]

        penalties: Dict[str, float] = {}
        for label, percent in _PENALTY_PATTERN.findall(text):
            key = _PENALTY_KEYS[" ".join(label.lower().split())]
            penalties.setdefault(key, float(percent) / 100)

        casual = _CASUAL_PATTERN.search(text)
        casual_loading = float(casual.group(1)) / 100 if casual else 0.25

        classifications = []
        for idx, match in enumerate(_CLASSIFICATION_PATTERN.finditer(text)):
            classifications.append(
                {
                    "id": f"L{idx + 1}",
                    "title": match.group("title").strip(),
                    "baseRate": float(match.group("rate")),
                    "casualLoading": casual_loading,
                }
            )

        allowances = [
            {"name": match.group("name").strip(), "amount": float(match.group("amount"))}
            for match in _ALLOWANCE_PATTERN.finditer(text)
        ]

        return {
            "code": code_match.group(0).upper(),
            "name": lines[0] if lines else code_match.group(0).upper(),
            "industry": "",
            "penaltyRates": penalties or None,
            "classifications": classifications,
            "allowances": allowances,
        }
