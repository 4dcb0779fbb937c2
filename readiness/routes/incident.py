from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from readiness.application import AnalysisService
from readiness.routes.dependencies import get_analysis_service
from readiness.routes.envelope import success

router = APIRouter(tags=["incident"])


@router.post("/analyze-incident")
def analyze_incident(
    request: Request,
    payload: dict,
    service: AnalysisService = Depends(get_analysis_service),
) -> dict:
    """Root-cause analysis for a reported incident."""
    outcome = service.analyze_incident(payload.get("debugData"))
    return success(request, outcome.data, model=outcome.model)
