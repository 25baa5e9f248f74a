"""Port for the external award-analysis collaborator.

Matching a job to an award, searching for official pay guides, answering
free-text questions and extracting award rules from a document are all
delegated to an AI-backed service. The rest of the package only depends on
the :class:`AwardAnalysisPort` shape and on the typed results it returns.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Protocol, Sequence

from ..models import Award, AwardDocument, AwardMatch

TEXT_CONTENT_LIMIT = 15000


class AnalysisError(RuntimeError):
    """Raised when the analysis collaborator fails or returns unusable data."""


class AnalysisUnavailable(AnalysisError):
    """Raised when the analysis collaborator has not been configured."""


class AwardAnalysisPort(Protocol):
    """Port abstraction for the award-analysis collaborator."""

    port_name: str

    def match_award(self, job_title: str, description: str, industry: str) -> List[AwardMatch]:
        ...

    def find_documents(self, query: str) -> List[AwardDocument]:
        ...

    def ask(self, question: str, knowledge_base: Sequence[Award] = (), context: Optional[str] = None) -> str:
        ...

    def ingest_award(self, content: str, mime_type: str = "text/plain") -> Award:
        ...


def _fmt(value: object) -> str:
    if value is None:
        return "n/a"
    return format(value, "f") if not isinstance(value, str) else value


def knowledge_base_summary(awards: Iterable[Award]) -> str:
    """Render the known awards as prompt context for the assistant."""

    lines: List[str] = []
    for award in awards:
        lines.append(f"Award: {award.name} ({award.code})")
        rates = award.penalty_rates
        if rates is not None:
            lines.append(
                f"  - Penalties: Sat x{_fmt(rates.saturday)}, Sun x{_fmt(rates.sunday)}, "
                f"PH x{_fmt(rates.public_holiday)}"
            )
        if award.allowances:
            allowances = ", ".join(f"{item.name} (${_fmt(item.amount)})" for item in award.allowances)
            lines.append(f"  - Allowances: {allowances}")
        if award.classifications:
            first = award.classifications[0]
            lines.append(f"  - Example Rate: {first.title} = ${_fmt(first.base_rate)}/hr")
        lines.append("")
    if not lines:
        return ""
    return "CURRENT KNOWN AWARDS & RULES:\n" + "\n".join(lines)


def dedupe_documents(documents: Iterable[AwardDocument]) -> List[AwardDocument]:
    """Drop entries without a title or url; one entry per url, in first-seen order."""

    unique: Dict[str, AwardDocument] = {}
    for document in documents:
        if not document.title or not document.url:
            continue
        unique[document.url] = document
    return list(unique.values())


def get_analysis(provider: Optional[str] = None) -> AwardAnalysisPort:
    """Bind the configured adapter (``mock`` unless configured otherwise)."""

    from .. import config
    from .gemini import GeminiAnalysis
    from .mock import MockAnalysis

    variant = (provider or config.analysis_provider()).lower()
    if variant == "mock":
        return MockAnalysis()
    if variant == "real":
        return GeminiAnalysis()
    raise KeyError(f"No award analysis implementation for {variant!r}")


__all__ = [
    "TEXT_CONTENT_LIMIT",
    "AnalysisError",
    "AnalysisUnavailable",
    "AwardAnalysisPort",
    "knowledge_base_summary",
    "dedupe_documents",
    "get_analysis",
]
