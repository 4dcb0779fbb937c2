"""Decode loosely-shaped model JSON into display-safe report structures.

The model is asked for a fixed schema but nothing guarantees it complies:
arrays go missing, recommendations arrive as objects instead of strings and
statuses drift outside the closed enumeration. Every function here is total:
it accepts any JSON value and returns a canonical structure without raising.
"""
from __future__ import annotations

import json
import math
from collections.abc import Mapping
from typing import Any

from readiness.domain.incidents import (
    ImmediateFix,
    IncidentReport,
    IncidentSolution,
    IncidentSummary,
    PreventionAction,
    RootCauseAnalysis,
)
from readiness.domain.reports import (
    DEFAULT_CONCLUSION,
    DEFAULT_SUMMARY,
    READINESS_STATUSES,
    DomainAssessment,
    ReadinessStatus,
    ReportContent,
)

_TEXT_KEYS = ("description", "text", "action", "issue", "title")
_DOMAIN_KEYS = ("title", "status", "findings")


def normalize_status(value: Any) -> ReadinessStatus:
    if isinstance(value, str):
        candidate = value.strip().lower()
        if candidate in READINESS_STATUSES:
            return candidate  # type: ignore[return-value]
    return "unknown"


def _text_field(node: Mapping[str, Any]) -> str:
    for key in _TEXT_KEYS:
        candidate = node.get(key)
        if isinstance(candidate, str) and candidate.strip():
            return candidate.strip()
    return ""


def coerce_text(value: Any) -> str:
    """Render a single JSON value as display text."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, Mapping):
        text = _text_field(value)
        if not text:
            return json.dumps(value, ensure_ascii=False, default=str)
        priority = value.get("priority")
        if isinstance(priority, str) and priority.strip():
            return f"[{priority.strip()}] {text}"
        return text
    if isinstance(value, (list, tuple)):
        return ", ".join(part for part in (coerce_text(item) for item in value) if part)
    return str(value)


def coerce_text_list(value: Any) -> list[str]:
    """Render a JSON value as a list of display strings.

    Objects without a recognisable text field (e.g. recommendations grouped
    as ``{"immediate": [...], "shortTerm": [...]}``) are flattened in order.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        items = (coerce_text(item) for item in value)
        return [item for item in items if item]
    if isinstance(value, Mapping):
        if _text_field(value):
            return [coerce_text(value)]
        flattened: list[str] = []
        for nested in value.values():
            flattened.extend(coerce_text_list(nested))
        return flattened
    text = coerce_text(value)
    return [text] if text else []


def normalize_domain(value: Any) -> DomainAssessment:
    if not isinstance(value, Mapping):
        return DomainAssessment(title=coerce_text(value))
    return DomainAssessment(
        title=coerce_text(value.get("title")) or coerce_text(value.get("name")),
        status=normalize_status(value.get("status")),
        description=coerce_text(value.get("description")),
        findings=coerce_text_list(value.get("findings")),
        recommendations=coerce_text_list(value.get("recommendations")),
    )


def _domains(value: Any) -> list[DomainAssessment]:
    if isinstance(value, (list, tuple)):
        return [normalize_domain(item) for item in value if item is not None]
    if isinstance(value, Mapping):
        if any(key in value for key in _DOMAIN_KEYS):
            return [normalize_domain(value)]
        return [normalize_domain(item) for item in value.values() if item is not None]
    return []


def normalize_report(value: Any) -> ReportContent:
    """Return the canonical report body for any parsed model output."""
    if not isinstance(value, Mapping):
        return ReportContent()
    return ReportContent(
        summary=coerce_text(value.get("summary")) or DEFAULT_SUMMARY,
        overall_status=normalize_status(value.get("overallStatus")),
        domains=_domains(value.get("domains")),
        critical_issues=coerce_text_list(value.get("criticalIssues")),
        recommendations=coerce_text_list(value.get("recommendations")),
        conclusion=coerce_text(value.get("conclusion")) or DEFAULT_CONCLUSION,
    )


def _section(value: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    section = value.get(key)
    return section if isinstance(section, Mapping) else {}


def _coerce_score(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        score = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    return score if math.isfinite(score) else 0.0


def _prevention(value: Any) -> list[PreventionAction]:
    items = value if isinstance(value, (list, tuple)) else [value] if value else []
    actions: list[PreventionAction] = []
    for item in items:
        if isinstance(item, Mapping):
            action = PreventionAction(action=coerce_text(item.get("action")), type=coerce_text(item.get("type")))
        else:
            action = PreventionAction(action=coerce_text(item))
        if action.action:
            actions.append(action)
    return actions


def normalize_incident(value: Any) -> IncidentReport:
    """Return the canonical incident report for any parsed model output."""
    if not isinstance(value, Mapping):
        return IncidentReport()

    summary = _section(value, "incidentReport")
    cause = _section(value, "rootCauseAnalysis")
    solution = _section(value, "solution")
    fix = _section(solution, "immediateFix")

    return IncidentReport(
        incident_report=IncidentSummary(
            severity=coerce_text(summary.get("severity")) or "unknown",
            error_type=coerce_text(summary.get("errorType")),
            confidence_score=_coerce_score(summary.get("confidenceScore")),
        ),
        root_cause_analysis=RootCauseAnalysis(
            symptom=coerce_text(cause.get("symptom")),
            direct_cause=coerce_text(cause.get("directCause")),
            root_cause=coerce_text(cause.get("rootCause")),
            explanation=coerce_text(cause.get("explanation")),
        ),
        solution=IncidentSolution(
            immediate_fix=ImmediateFix(code=coerce_text(fix.get("code")), description=coerce_text(fix.get("description"))),
            long_term_mitigation=coerce_text(solution.get("longTermMitigation")),
        ),
        verification_steps=coerce_text_list(value.get("verificationSteps")),
        prevention_strategy=_prevention(value.get("preventionStrategy")),
        impact_analysis=coerce_text(value.get("impactAnalysis")),
    )
