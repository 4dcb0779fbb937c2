"""Prompt templates sent to the generative model."""
from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from readiness.domain.reports import REPORT_DOMAINS

logger = logging.getLogger(__name__)

MAX_PAYLOAD_CHARS = 30_000
MAX_INCIDENT_CHARS = 15_000
MAX_FILE_LIST_CHARS = 3_000
MAX_FIELD_CHARS = 500
TRUNCATION_MARKER = "\n... [TRUNCATED]"
NOT_SPECIFIED = "غير محدد"

_SEPARATOR = "═" * 60

# (analysis key, label) pairs rendered as presence flags.
_PRESENCE_FLAGS: tuple[tuple[str, str], ...] = (
    ("hasPackageJson", "package.json"),
    ("hasRequirementsTxt", "requirements.txt"),
    ("hasPyprojectToml", "pyproject.toml"),
    ("hasDockerfile", "Dockerfile"),
    ("hasTests", "اختبارات آلية"),
    ("hasCI", "CI/CD Pipeline"),
    ("hasReadme", "README"),
    ("hasGitignore", ".gitignore"),
)

_REPORT_SCHEMA = """{
  "summary": "نظرة عامة شاملة عن التطبيق والنتائج الرئيسية (3-5 جمل)",
  "overallStatus": "ready أو conditional أو not-ready",
  "domains": [
    {
      "title": "اسم المجال",
      "status": "ready أو conditional أو not-ready أو unknown",
      "description": "تقييم الحالة مع ذكر السياق الهندسي (2-3 جمل)",
      "findings": ["ملاحظة محددة مع دليل 1", "ملاحظة محددة مع دليل 2"],
      "recommendations": ["توصية محددة 1", "توصية محددة 2"]
    }
  ],
  "criticalIssues": ["مشكلة حرجة 1"],
  "recommendations": ["توصية عامة 1"],
  "conclusion": "الخلاصة النهائية مع توصية واضحة وحاسمة"
}"""

_INCIDENT_SCHEMA = """{
  "incidentReport": {"severity": "critical أو high أو medium أو low", "errorType": "نوع الخطأ", "confidenceScore": 0.0},
  "rootCauseAnalysis": {"symptom": "العَرَض", "directCause": "السبب المباشر", "rootCause": "السبب الجذري", "explanation": "الشرح"},
  "solution": {"immediateFix": {"code": "الكود المقترح", "description": "وصف الإصلاح"}, "longTermMitigation": "المعالجة طويلة المدى"},
  "verificationSteps": ["خطوة تحقق 1"],
  "preventionStrategy": [{"action": "إجراء وقائي", "type": "نوع الإجراء"}],
  "impactAnalysis": "تحليل الأثر"
}"""


def truncate_payload(text: str, limit: int) -> str:
    """Cap ``text`` at ``limit`` characters, appending the truncation marker."""
    if len(text) <= limit:
        return text
    return text[:limit] + TRUNCATION_MARKER


def _serialise(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2, default=str)


def _flag(data: Mapping[str, Any], key: str) -> str:
    if key not in data:
        return NOT_SPECIFIED
    return "✓ موجود" if data.get(key) else "✗ غير موجود"


def _joined(value: Any, separator: str, limit: int) -> str:
    if isinstance(value, (list, tuple)):
        rendered = ""
        for item in value:
            if item in (None, ""):
                continue
            rendered = f"{rendered}{separator}{item}" if rendered else str(item)
            if len(rendered) > limit:
                break
        return truncate_payload(rendered, limit) if rendered else NOT_SPECIFIED
    if isinstance(value, str) and value.strip():
        return truncate_payload(value.strip(), limit)
    return NOT_SPECIFIED


def build_analysis_prompt(owner: str, repo: str, analysis_data: Any) -> str:
    """Build the production-readiness instruction for ``owner/repo``."""

    data: Mapping[str, Any] = analysis_data if isinstance(analysis_data, Mapping) else {}

    payload = _serialise(dict(data))
    if len(payload) > MAX_PAYLOAD_CHARS:
        logger.warning(
            "Truncating analysis payload for %s/%s from %d to %d chars",
            owner,
            repo,
            len(payload),
            MAX_PAYLOAD_CHARS,
        )
        payload = truncate_payload(payload, MAX_PAYLOAD_CHARS)

    flags = "\n".join(f"- {label}: {_flag(data, key)}" for key, label in _PRESENCE_FLAGS)
    domains = "\n".join(
        f"{index}. {arabic} ({english})" for index, (_, arabic, english) in enumerate(REPORT_DOMAINS, start=1)
    )

    return f"""أنت خبير هندسي متخصص في تقييم جاهزية التطبيقات للنشر في بيئات الإنتاج. مهمتك كتابة تقرير جاهزية إنتاج (Production Readiness Report) للمستودع التالي.

{_SEPARATOR}
معلومات المستودع
{_SEPARATOR}
- المالك: {truncate_payload(owner, MAX_FIELD_CHARS)}
- اسم المستودع: {truncate_payload(repo, MAX_FIELD_CHARS)}
- اللغات البرمجية: {_joined(data.get("languages"), ", ", MAX_FIELD_CHARS)}

الملفات والممارسات المكتشفة:
{flags}

هيكل الملفات:
{_joined(data.get("fileStructure"), chr(10), MAX_FILE_LIST_CHARS)}

بيانات المستودع الكاملة:
{payload}

{_SEPARATOR}
المجالات الهندسية للتقييم
{_SEPARATOR}
قيّم التطبيق عبر المجالات العشرة التالية وبنفس الترتيب:
{domains}

نظام التقييم لكل مجال:
- ready: المجال يلبي المعايير الأساسية وجاهز للإنتاج
- conditional: يحتاج تحسينات غير حرجة
- not-ready: يعاني من نقص حرج يمنع النشر
- unknown: المعلومات غير كافية للتقييم

{_SEPARATOR}
هيكل الرد المطلوب (JSON فقط)
{_SEPARATOR}
أعد كائن JSON واحداً صالحاً بالمفاتيح التالية بالضبط، دون أي نص خارجه:
{_REPORT_SCHEMA}

تعليمات حاسمة:
1. يجب تضمين جميع المجالات العشرة في domains
2. جميع القيم النصية يجب أن تكون باللغة العربية الفصحى
3. استخدم القيم ready و conditional و not-ready و unknown فقط للحالة
4. إذا كانت المعلومات غير كافية استخدم unknown
5. لا تستخدم رموزاً تعبيرية داخل JSON"""


def build_incident_prompt(debug_data: Any) -> str:
    """Build the root-cause-analysis instruction for an incident."""

    payload = truncate_payload(_serialise(debug_data), MAX_INCIDENT_CHARS)
    return f"""أنت مهندس موثوقية مواقع (SRE) خبير في تحليل الحوادث. حلل الحادثة التالية وحدد السبب الجذري.

بيانات الحادثة:
{payload}

أعد كائن JSON واحداً صالحاً بالهيكل التالي بالضبط، وجميع النصوص بالعربية:
{_INCIDENT_SCHEMA}"""
