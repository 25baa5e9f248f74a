"""FastAPI application factory for the FairPay award calculator."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import Body, FastAPI, HTTPException, Response, status
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

from . import config
from .analysis import AnalysisError, AnalysisUnavailable, AwardAnalysisPort, get_analysis
from .engine import MissingSelectionError, calculate_for_award, effective_penalty_rates
from .ingestion import IngestionError, IngestionService
from .library import filter_documents, is_ingested, load_library
from .logging_utils import install_redacting_filter
from .models import Award, Classification, PayBreakdown, Shift, AwardValidationError, standard_week
from .registry import AwardNotFoundError, AwardRegistry
from .schemas import (
    AssistantRequest,
    CalculateRequest,
    IngestRequest,
    MatchRequest,
    SearchRequest,
    SelectionRequest,
)
from .selection import CalculatorSelection, ClassificationNotFoundError, resolve_classification

LOGGER = logging.getLogger("fairpay.service")

CALCULATIONS = Counter("fairpay_calculations_total", "Pay breakdown calculations", labelnames=("outcome",))
INGESTIONS = Counter("fairpay_ingestions_total", "Award ingestion attempts", labelnames=("outcome",))
CALC_LAT = Histogram("fairpay_calc_seconds", "Pay breakdown calculation latency")

REDACTED_LOGGERS = [
    "fairpay",
    "fairpay.service",
    "fairpay.ingestion",
    "fairpay.analysis.gemini",
    "httpx",
    "uvicorn.error",
    "uvicorn.access",
]


def _default_registry() -> AwardRegistry:
    if not config.seed_enabled():
        return AwardRegistry()
    return AwardRegistry.from_seed(config.seed_awards_path())


def _collaborator_failure(exc: AnalysisError) -> HTTPException:
    if isinstance(exc, AnalysisUnavailable):
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))


def _calculation_payload(award: Award, classification: Classification, breakdown: PayBreakdown) -> Dict[str, Any]:
    return {
        "awardCode": award.code,
        "classification": classification.to_dict(),
        "penaltyRates": effective_penalty_rates(award).to_dict(),
        "referenceAllowances": [item.to_dict() for item in award.allowances],
        "breakdown": breakdown.to_dict(),
        "components": [{"name": name, "value": float(value)} for name, value in breakdown.components()],
    }


def create_app(
    registry: Optional[AwardRegistry] = None,
    analysis: Optional[AwardAnalysisPort] = None,
) -> FastAPI:
    install_redacting_filter(REDACTED_LOGGERS)

    app = FastAPI(title="FairPay Award Calculator", version="0.1.0")
    registry = registry if registry is not None else _default_registry()
    analysis = analysis if analysis is not None else get_analysis()
    ingestion = IngestionService(registry, analysis)
    selection = CalculatorSelection(registry)

    app.state.registry = registry
    app.state.analysis = analysis
    app.state.selection = selection

    @app.get("/healthz")
    def health() -> Dict[str, Any]:
        return {"ok": True, "awards": len(registry), "analysis": analysis.port_name}

    @app.get("/metrics")
    def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Registry ----------------------------------------------------------------------

    @app.get("/awards")
    def list_awards() -> Dict[str, Any]:
        items = [award.to_dict() for award in registry.list_all()]
        return {"items": items, "count": len(items)}

    @app.get("/awards/{code}")
    def get_award(code: str) -> Dict[str, Any]:
        try:
            return registry.get(code).to_dict()
        except AwardNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc

    @app.post("/awards")
    def upsert_award(payload: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
        try:
            award = ingestion.ingest_payload(payload)
        except AwardValidationError as exc:
            INGESTIONS.labels("rejected").inc()
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        INGESTIONS.labels("ok").inc()
        return award.to_dict()

    @app.post("/awards/ingest")
    def ingest_award(request: IngestRequest) -> Dict[str, Any]:
        try:
            award = ingestion.ingest_document(request.content, request.mime_type)
        except IngestionError as exc:
            INGESTIONS.labels("failed").inc()
            cause = exc.__cause__
            if isinstance(cause, AnalysisError):
                raise _collaborator_failure(cause) from exc
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        INGESTIONS.labels("ok").inc()
        return award.to_dict()

    # Calculator --------------------------------------------------------------------

    @app.get("/selection")
    def get_selection() -> Dict[str, Any]:
        award = selection.award
        return {
            "awardCode": selection.award_code,
            "classificationId": selection.classification_id,
            "penaltyRates": selection.penalty_rates.to_dict(),
            "referenceAllowances": [item.to_dict() for item in award.allowances] if award else [],
        }

    @app.post("/selection")
    def update_selection(request: SelectionRequest) -> Dict[str, Any]:
        try:
            selection.select(request.award_code, request.classification_id)
        except AwardNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except ClassificationNotFoundError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return get_selection()

    @app.post("/calculate")
    def calculate(request: CalculateRequest) -> Dict[str, Any]:
        if request.shifts is None:
            shifts: List[Shift] = standard_week()
        else:
            shifts = [Shift.from_dict(item.model_dump(by_alias=True)) for item in request.shifts]

        with CALC_LAT.time():
            try:
                if request.award_code is None:
                    award, classification = selection.resolve()
                else:
                    award = registry.get(request.award_code)
                    classification = resolve_classification(award, request.classification_id)
                breakdown = calculate_for_award(award, classification, shifts)
            except AwardNotFoundError as exc:
                CALCULATIONS.labels("not_found").inc()
                raise HTTPException(status_code=404, detail=str(exc)) from exc
            except MissingSelectionError as exc:
                CALCULATIONS.labels("missing_selection").inc()
                raise HTTPException(status_code=409, detail=str(exc)) from exc

        CALCULATIONS.labels("ok").inc()
        return _calculation_payload(award, classification, breakdown)

    # Collaborator-backed helpers -------------------------------------------------

    @app.post("/match")
    def match(request: MatchRequest) -> Dict[str, Any]:
        try:
            matches = analysis.match_award(request.job_title, request.description, request.industry)
        except AnalysisError as exc:
            LOGGER.warning("award match failed: %s", exc)
            raise _collaborator_failure(exc) from exc
        return {"matches": [item.to_dict() for item in matches]}

    @app.get("/library")
    def library(q: Optional[str] = None) -> Dict[str, Any]:
        documents = filter_documents(load_library(), q)
        items = []
        for document in documents:
            entry = document.to_dict()
            entry["ingested"] = is_ingested(document.award_code, registry)
            items.append(entry)
        return {"items": items, "count": len(items)}

    @app.post("/library/search")
    def search_library(request: SearchRequest) -> Dict[str, Any]:
        try:
            documents = analysis.find_documents(request.query)
        except AnalysisError as exc:
            LOGGER.warning("document search failed: %s", exc)
            raise _collaborator_failure(exc) from exc
        return {"items": [item.to_dict() for item in documents], "count": len(documents)}

    @app.post("/assistant")
    def assistant(request: AssistantRequest) -> Dict[str, Any]:
        try:
            answer = analysis.ask(request.question, registry.list_all(), request.context)
        except AnalysisError as exc:
            raise _collaborator_failure(exc) from exc
        return {"answer": answer}

    return app
