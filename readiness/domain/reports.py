"""Report entities exchanged between the proxy, the client and the store."""
from __future__ import annotations

from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ReadinessStatus = Literal["ready", "conditional", "not-ready", "unknown"]

READINESS_STATUSES: tuple[str, ...] = get_args(ReadinessStatus)

# (key, Arabic title, English title), in the order the model must report them.
REPORT_DOMAINS: tuple[tuple[str, str, str], ...] = (
    ("core_functionality", "الوظائف الأساسية", "Core Functionality"),
    ("performance", "الأداء", "Performance"),
    ("security", "الأمان", "Security"),
    ("infrastructure", "البنية التحتية", "Infrastructure"),
    ("monitoring", "المراقبة والسجلات", "Monitoring & Logging"),
    ("backup_recovery", "النسخ الاحتياطي والاستعادة", "Backup & Recovery"),
    ("documentation", "التوثيق", "Documentation"),
    ("testing", "الاختبار", "Testing"),
    ("compatibility", "التوافق", "Compatibility"),
    ("compliance", "الامتثال", "Compliance"),
)

DEFAULT_SUMMARY = "لم يتم توفير ملخص"
DEFAULT_CONCLUSION = "لم يتم التوصل إلى خلاصة"


class _WireModel(BaseModel):
    """snake_case attributes, camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class RepositoryInfo(_WireModel):
    url: str
    owner: str
    repo: str
    analyzed_at: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


class DomainAssessment(_WireModel):
    title: str = ""
    status: ReadinessStatus = "unknown"
    description: str = ""
    findings: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class ReportContent(_WireModel):
    """Display-safe report body, as produced by normalization."""

    summary: str = DEFAULT_SUMMARY
    overall_status: ReadinessStatus = "unknown"
    domains: list[DomainAssessment] = Field(default_factory=list)
    critical_issues: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    conclusion: str = DEFAULT_CONCLUSION


class ProductionReport(ReportContent):
    """Persisted report. Reports are never updated in place."""

    id: str
    repository: RepositoryInfo
    created_at: str

    @classmethod
    def from_content(
        cls,
        content: ReportContent,
        *,
        report_id: str,
        repository: RepositoryInfo,
        created_at: str,
    ) -> "ProductionReport":
        return cls(
            id=report_id,
            repository=repository,
            created_at=created_at,
            **content.model_dump(),
        )


def degraded_report(reason: str) -> ReportContent:
    """Build the report returned whenever an analysis cannot be completed.

    Every error path goes through this function so the fallback shape always
    matches :class:`ReportContent`.
    """

    reason = reason.strip() or "خطأ غير معروف"
    return ReportContent(
        summary="حدث خطأ أثناء تحليل المستودع",
        overall_status="unknown",
        domains=[
            DomainAssessment(
                title="تحليل النظام",
                status="not-ready",
                description=f"تعذر إكمال التحليل الذكي: {reason}",
                findings=[reason],
                recommendations=[
                    "تحقق من حصة استخدام واجهة Gemini",
                    "تحقق من ضبط مفتاح GEMINI_API_KEY على الخادم",
                    "أعد المحاولة لاحقاً",
                ],
            )
        ],
        critical_issues=["فشل في توليد التقرير بسبب خطأ في الخدمة"],
        recommendations=["يرجى المحاولة مرة أخرى لاحقاً"],
        conclusion="لم يتم إكمال التحليل بنجاح",
    )
