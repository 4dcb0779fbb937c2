"""Root-cause analysis entities."""
from __future__ import annotations

from pydantic import Field

from .reports import _WireModel


class IncidentDebugData(_WireModel):
    symptoms: str
    environment: str
    error_log: str | None = None
    code_snippet: str | None = None
    stack_trace: str | None = None


class IncidentSummary(_WireModel):
    severity: str = "unknown"
    error_type: str = ""
    confidence_score: float = 0.0


class RootCauseAnalysis(_WireModel):
    symptom: str = ""
    direct_cause: str = ""
    root_cause: str = ""
    explanation: str = ""


class ImmediateFix(_WireModel):
    code: str = ""
    description: str = ""


class IncidentSolution(_WireModel):
    immediate_fix: ImmediateFix = Field(default_factory=ImmediateFix)
    long_term_mitigation: str = ""


class PreventionAction(_WireModel):
    action: str = ""
    type: str = ""


class IncidentReport(_WireModel):
    incident_report: IncidentSummary = Field(default_factory=IncidentSummary)
    root_cause_analysis: RootCauseAnalysis = Field(default_factory=RootCauseAnalysis)
    solution: IncidentSolution = Field(default_factory=IncidentSolution)
    verification_steps: list[str] = Field(default_factory=list)
    prevention_strategy: list[PreventionAction] = Field(default_factory=list)
    impact_analysis: str = ""
