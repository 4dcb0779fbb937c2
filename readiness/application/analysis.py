"""Server-side analysis use cases behind the proxy endpoints."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from readiness.core.normalize import normalize_incident, normalize_report
from readiness.core.prompts import build_analysis_prompt, build_incident_prompt
from readiness.core.sanitize import parse_model_json
from readiness.domain.errors import ResponseFormatError, ValidationError
from readiness.domain.reports import degraded_report
from readiness.infrastructure.gemini import TextGenerator

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AnalysisOutcome:
    """Normalized payload returned to the route together with call metadata."""

    data: dict[str, Any]
    model: str
    degraded: bool = False


class AnalysisService:
    """Builds prompts, calls the model and decodes its answers."""

    def __init__(self, generator: TextGenerator, *, parse_failure_mode: str = "error") -> None:
        self._generator = generator
        self._parse_failure_mode = parse_failure_mode

    @property
    def model(self) -> str:
        return self._generator.model

    def analyze_repository(self, owner: Any, repo: Any, analysis_data: Any) -> AnalysisOutcome:
        if not owner or not repo or not isinstance(owner, str) or not isinstance(repo, str):
            raise ValidationError("Missing required fields: owner and repo are required")

        logger.info("Analysis request for %s/%s", owner, repo)
        prompt = build_analysis_prompt(owner, repo, analysis_data)
        text = self._generator.generate_content(prompt)

        try:
            parsed = parse_model_json(text)
        except ResponseFormatError as exc:
            logger.error("Unparseable model output for %s/%s: %.500s", owner, repo, exc.raw_text)
            if self._parse_failure_mode != "fallback":
                raise
            return AnalysisOutcome(data=degraded_report(str(exc)).to_wire(), model=self.model, degraded=True)

        return AnalysisOutcome(data=normalize_report(parsed).to_wire(), model=self.model)

    def analyze_incident(self, debug_data: Any) -> AnalysisOutcome:
        if not debug_data or not isinstance(debug_data, (Mapping, str)):
            raise ValidationError("Debug data is required")

        logger.info("Incident analysis request")
        text = self._generator.generate_content(build_incident_prompt(debug_data))
        try:
            parsed = parse_model_json(text)
        except ResponseFormatError as exc:
            logger.error("Unparseable incident analysis output: %.500s", exc.raw_text)
            raise
        return AnalysisOutcome(data=normalize_incident(parsed).to_wire(), model=self.model)

    def complete(self, prompt: Any) -> str:
        if not isinstance(prompt, str) or not prompt.strip():
            raise ValidationError("Prompt is required")
        return self._generator.generate_content(prompt)
