"""Gemini-backed award analysis adapter.

Talks to the Gemini ``generateContent`` REST endpoint. Configuration comes
from the environment (see :mod:`fairpay.config`):

    GEMINI_API_KEY / API_KEY     API key sent as the ``x-goog-api-key`` header.
    FAIRPAY_GEMINI_MODEL         Model name, defaults to gemini-2.5-flash.
    FAIRPAY_GEMINI_BASE_URL      API root, defaults to the public v1beta API.
    FAIRPAY_ANALYSIS_TIMEOUT     Request timeout in seconds.

Structured operations (matching, ingestion) request JSON output constrained
by a response schema; document search uses the Google Search tool and reads
the grounding metadata instead.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

import httpx

from .. import config
from ..models import Award, AwardDocument, AwardMatch, AwardValidationError
from ..registry import parse_award
from . import TEXT_CONTENT_LIMIT, AnalysisError, AnalysisUnavailable, dedupe_documents, knowledge_base_summary

LOGGER = logging.getLogger("fairpay.analysis.gemini")

MATCH_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "matches": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "awardCode": {"type": "STRING"},
                    "awardName": {"type": "STRING"},
                    "confidence": {"type": "NUMBER", "description": "A number between 0 and 100"},
                    "reasoning": {"type": "STRING"},
                    "suggestedClassification": {"type": "STRING"},
                },
                "required": ["awardCode", "awardName", "confidence", "reasoning", "suggestedClassification"],
            },
        }
    },
    "required": ["matches"],
}

AWARD_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "code": {"type": "STRING", "description": "The MA code, e.g., MA000004"},
        "name": {"type": "STRING"},
        "industry": {"type": "STRING"},
        "penaltyRates": {
            "type": "OBJECT",
            "properties": {
                "saturday": {"type": "NUMBER"},
                "sunday": {"type": "NUMBER"},
                "publicHoliday": {"type": "NUMBER"},
                "overtime": {"type": "NUMBER"},
                "nightShift": {"type": "NUMBER"},
            },
            "required": ["saturday", "sunday", "publicHoliday", "overtime", "nightShift"],
        },
        "classifications": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "id": {"type": "STRING"},
                    "title": {"type": "STRING"},
                    "baseRate": {"type": "NUMBER"},
                    "casualLoading": {"type": "NUMBER"},
                    "description": {"type": "STRING"},
                },
                "required": ["id", "title", "baseRate", "casualLoading"],
            },
        },
        "allowances": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "name": {"type": "STRING"},
                    "amount": {"type": "NUMBER", "description": "The dollar amount or hourly rate for the allowance"},
                },
                "required": ["name", "amount"],
            },
        },
    },
    "required": ["code", "name", "industry", "penaltyRates", "classifications"],
}

MATCH_PROMPT = """
You are an expert in Australian Modern Awards (Fair Work).
Analyze the following job details and identify the most likely Australian Modern Award and Classification.

Job Title: {job_title}
Industry Hint: {industry}
Description: {description}

Consider standard awards like General Retail (MA000004), Hospitality (MA000009), Clerks (MA000002), etc.
Return the top 3 matches.
"""

SEARCH_PROMPT = """
Find the official Fair Work Ombudsman Pay Guide PDF for: "{query}".
Focus on finding definitive PDF documents from fairwork.gov.au.
"""

ASSISTANT_PROMPT = """
You are a helpful Australian Payroll Assistant.
Answer the user's question about pay rates, awards, or conditions.

{knowledge_base}

User Question: {question}
{context}

Instructions:
1. If the user's question relates to one of the KNOWN AWARDS above, cite specific rates, allowances, or penalties from the data provided.
2. If the data is not in the knowledge base, refer to Fair Work general principles but mention you don't have that specific award loaded yet.
3. Keep the answer concise, friendly, and refer to Fair Work Australia principles generally.
4. Do not give binding legal advice.
"""

INGEST_INSTRUCTION = """
Analyze the provided Australian Award document (Pay Guide).
Extract the key rules into a structured format.

Specifically extract:
1. The Award Code and Name.
2. The Penalty Rate multipliers for Saturday, Sunday, Public Holiday, Overtime, and Night Shift (e.g., 150% = 1.5).
3. A list of key Classifications with their hourly Base Rates.
4. A list of common monetary Allowances (e.g., Tool Allowance, Laundry Allowance, Meal Allowance) and their dollar amounts.

If content is base64 PDF, OCR and parse it.
"""

ASSISTANT_FALLBACK = "Sorry, I encountered an error communicating with the AI service."


class GeminiAnalysis:
    port_name = "real"

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._api_key = api_key if api_key is not None else config.gemini_api_key()
        self._model = model or config.gemini_model()
        self._base_url = (base_url or config.gemini_base_url()).rstrip("/")
        seconds = timeout if timeout is not None else config.analysis_timeout()
        self._client = client or httpx.Client(
            timeout=httpx.Timeout(seconds, connect=5.0),
            headers={"User-Agent": "fairpay/1.0"},
        )

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    def match_award(self, job_title: str, description: str, industry: str) -> List[AwardMatch]:
        prompt = MATCH_PROMPT.format(job_title=job_title, industry=industry, description=description)
        body = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": MATCH_SCHEMA,
                "temperature": 0.1,
            },
        }
        data = self._json_text(self._generate(body))
        matches = data.get("matches") if isinstance(data, dict) else None
        if not isinstance(matches, list):
            raise AnalysisError("Award match response is missing 'matches'")
        return [AwardMatch.from_dict(item) for item in matches if isinstance(item, Mapping)]

    def find_documents(self, query: str) -> List[AwardDocument]:
        body = {
            "contents": [{"parts": [{"text": SEARCH_PROMPT.format(query=query)}]}],
            "tools": [{"google_search": {}}],
        }
        response = self._generate(body)
        candidates = response.get("candidates") or [{}]
        chunks = (candidates[0].get("groundingMetadata") or {}).get("groundingChunks") or []
        documents = []
        for chunk in chunks:
            web = chunk.get("web") or {}
            documents.append(
                AwardDocument(
                    title=str(web.get("title") or ""),
                    url=web.get("uri"),
                    description="Found via Live Search",
                    source="search",
                )
            )
        return dedupe_documents(documents)

    def ask(self, question: str, knowledge_base: Sequence[Award] = (), context: Optional[str] = None) -> str:
        prompt = ASSISTANT_PROMPT.format(
            knowledge_base=knowledge_base_summary(knowledge_base),
            question=question,
            context=f"Context from current calculation: {context}" if context else "",
        )
        try:
            text = self._text(self._generate({"contents": [{"parts": [{"text": prompt}]}]}))
        except AnalysisUnavailable:
            raise
        except AnalysisError:
            LOGGER.exception("assistant request failed")
            return ASSISTANT_FALLBACK
        return text or "I couldn't generate a response."

    def ingest_award(self, content: str, mime_type: str = "text/plain") -> Award:
        if mime_type == "text/plain":
            parts: List[Dict[str, Any]] = [
                {"text": INGEST_INSTRUCTION + "\nText Content:\n" + (content or "")[:TEXT_CONTENT_LIMIT]}
            ]
        else:
            parts = [
                {"text": INGEST_INSTRUCTION},
                {"inlineData": {"mimeType": mime_type, "data": content}},
            ]
        body = {
            "contents": [{"parts": parts}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": AWARD_SCHEMA,
            },
        }
        data = self._json_text(self._generate(body))
        try:
            return parse_award(data)
        except AwardValidationError as exc:
            raise AnalysisError(f"Could not parse award data: {exc}") from exc

    # Internal helpers -----------------------------------------------------------------

    def _generate(self, body: Mapping[str, Any]) -> Dict[str, Any]:
        if not self._api_key:
            raise AnalysisUnavailable("API Key not configured")
        url = f"{self._base_url}/models/{self._model}:generateContent"
        try:
            response = self._client.post(url, json=body, headers={"x-goog-api-key": self._api_key})
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise AnalysisError(f"Gemini request failed: {exc}") from exc
        try:
            data = response.json()
        except ValueError as exc:
            raise AnalysisError("Gemini returned a non-JSON response") from exc
        if not isinstance(data, dict):
            raise AnalysisError("Gemini returned an unexpected response")
        return data

    def _text(self, response: Mapping[str, Any]) -> str:
        candidates = response.get("candidates") or []
        if not candidates:
            return ""
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(str(part.get("text", "")) for part in parts if isinstance(part, Mapping))

    def _json_text(self, response: Mapping[str, Any]) -> Any:
        text = self._text(response)
        if not text:
            raise AnalysisError("No response from AI")
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise AnalysisError("AI response was not valid JSON") from exc


__all__ = ["GeminiAnalysis", "ASSISTANT_FALLBACK"]
