from __future__ import annotations

from fastapi import Request

from readiness.application import AnalysisService


def get_analysis_service(request: Request) -> AnalysisService:
    """Return the service wired into this application instance."""

    return request.app.state.analysis_service
