from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from readiness.application import AnalysisService
from readiness.routes.dependencies import get_analysis_service
from readiness.routes.envelope import success

router = APIRouter(tags=["analysis"])


@router.post("/analyze")
def analyze_repository(
    request: Request,
    payload: dict,
    service: AnalysisService = Depends(get_analysis_service),
) -> dict:
    """Generate a production readiness report for ``owner/repo``."""
    outcome = service.analyze_repository(payload.get("owner"), payload.get("repo"), payload.get("analysisData"))
    meta = {"model": outcome.model}
    if outcome.degraded:
        meta["degraded"] = True
    return success(request, outcome.data, **meta)


@router.post("/llm")
def complete_prompt(payload: dict, service: AnalysisService = Depends(get_analysis_service)) -> dict:
    return {"response": service.complete(payload.get("prompt"))}
