"""Render reports as Markdown, the exported form of the report view."""
from __future__ import annotations

from collections.abc import Iterable

from readiness.core.normalize import normalize_status
from readiness.domain.incidents import IncidentReport
from readiness.domain.reports import DomainAssessment, ProductionReport

STATUS_BADGES: dict[str, tuple[str, str]] = {
    "ready": ("✅", "جاهز"),
    "conditional": ("⚠️", "جاهز بشروط"),
    "not-ready": ("❌", "غير جاهز"),
    "unknown": ("❔", "غير معروف"),
}


def status_label(status: object) -> str:
    """Arabic badge text for a status; anything unrecognised is ``unknown``."""
    icon, label = STATUS_BADGES[normalize_status(status)]
    return f"{icon} {label}"


def _bullets(items: Iterable[str]) -> list[str]:
    return [f"- {item}" for item in items]


def _domain_section(domain: DomainAssessment) -> list[str]:
    title = domain.title or "مجال بدون عنوان"
    lines = [
        "<details open>",
        f"<summary>{status_label(domain.status)} | {title}</summary>",
        "",
    ]
    if domain.description:
        lines += [domain.description, ""]
    if domain.findings:
        lines += ["**الملاحظات:**", *_bullets(domain.findings), ""]
    if domain.recommendations:
        lines += ["**التوصيات:**", *_bullets(domain.recommendations), ""]
    lines += ["</details>", ""]
    return lines


def render_report_markdown(report: ProductionReport) -> str:
    repository = report.repository
    lines = [
        "# تقرير جاهزية الإنتاج",
        "",
        "## معلومات المستودع",
        f"- الرابط: {repository.url}",
        f"- المالك: {repository.owner}",
        f"- الاسم: {repository.repo}",
        f"- تاريخ التحليل: {report.created_at}",
        "",
        "## الحالة العامة",
        status_label(report.overall_status),
        "",
        "## نظرة عامة",
        report.summary,
        "",
    ]
    if report.critical_issues:
        lines += ["## المشاكل الحرجة", *_bullets(report.critical_issues), ""]
    if report.domains:
        lines += ["## تقييم المجالات", ""]
        for domain in report.domains:
            lines += _domain_section(domain)
    if report.recommendations:
        lines += ["## التوصيات العامة", *_bullets(report.recommendations), ""]
    lines += ["## الخلاصة", report.conclusion, "", f"**الحالة النهائية:** {status_label(report.overall_status)}", ""]
    return "\n".join(lines)


def render_incident_markdown(incident: IncidentReport) -> str:
    summary = incident.incident_report
    cause = incident.root_cause_analysis
    fix = incident.solution.immediate_fix
    lines = [
        "# تحليل السبب الجذري للحادثة",
        "",
        f"- الخطورة: {summary.severity}",
        f"- نوع الخطأ: {summary.error_type or 'غير محدد'}",
        f"- درجة الثقة: {summary.confidence_score:g}",
        "",
        "## تحليل السبب الجذري",
        f"- العَرَض: {cause.symptom}",
        f"- السبب المباشر: {cause.direct_cause}",
        f"- السبب الجذري: {cause.root_cause}",
        "",
        cause.explanation,
        "",
        "## الحل",
        fix.description,
        "",
    ]
    if fix.code:
        lines += ["```", fix.code, "```", ""]
    if incident.solution.long_term_mitigation:
        lines += ["**المعالجة طويلة المدى:** " + incident.solution.long_term_mitigation, ""]
    if incident.verification_steps:
        lines += ["## خطوات التحقق", *_bullets(incident.verification_steps), ""]
    if incident.prevention_strategy:
        lines += ["## استراتيجية الوقاية"]
        lines += [f"- {item.action}" + (f" ({item.type})" if item.type else "") for item in incident.prevention_strategy]
        lines.append("")
    if incident.impact_analysis:
        lines += ["## تحليل الأثر", incident.impact_analysis, ""]
    return "\n".join(lines)
