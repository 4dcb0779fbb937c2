from __future__ import annotations

from pathlib import Path
import sys

sys.path.append(str(Path(__file__).resolve().parents[1]))

import pandas as pd

from readiness.core.normalize import normalize_incident
from readiness.domain.reports import DomainAssessment, ProductionReport, RepositoryInfo, degraded_report
from readiness.exporters.history_csv import export_history_csv
from readiness.exporters.markdown import render_incident_markdown, render_report_markdown, status_label


def _report(**overrides) -> ProductionReport:
    fields = {
        "id": "report-1",
        "repository": RepositoryInfo(url="https://github.com/octo/widgets", owner="octo", repo="widgets", analyzed_at="2025-01-01T00:00:00+00:00"),
        "summary": "ملخص التقرير",
        "overall_status": "conditional",
        "domains": [
            DomainAssessment(title="الأمان", status="not-ready", description="وصف", findings=["مفاتيح مكشوفة"], recommendations=["تدوير المفاتيح"]),
            DomainAssessment(title="التوثيق", status="ready"),
        ],
        "critical_issues": ["مشكلة حرجة"],
        "recommendations": ["توصية عامة"],
        "conclusion": "الخلاصة",
        "created_at": "2025-01-01T00:00:00+00:00",
    }
    fields.update(overrides)
    return ProductionReport(**fields)


def test_status_labels():
    assert status_label("ready") == "✅ جاهز"
    assert status_label("conditional") == "⚠️ جاهز بشروط"
    assert status_label("not-ready") == "❌ غير جاهز"
    assert status_label("bogus") == status_label("unknown") == "❔ غير معروف"


def test_markdown_contains_every_section():
    text = render_report_markdown(_report())

    assert text.startswith("# تقرير جاهزية الإنتاج")
    assert "https://github.com/octo/widgets" in text
    assert "## المشاكل الحرجة" in text and "- مشكلة حرجة" in text
    assert "<summary>❌ غير جاهز | الأمان</summary>" in text
    assert "- مفاتيح مكشوفة" in text and "- تدوير المفاتيح" in text
    assert "## التوصيات العامة" in text
    assert text.count("<details open>") == 2


def test_markdown_omits_empty_sections():
    text = render_report_markdown(_report(domains=[], critical_issues=[], recommendations=[]))
    assert "## المشاكل الحرجة" not in text
    assert "## تقييم المجالات" not in text
    assert "## التوصيات العامة" not in text
    assert "## الخلاصة" in text


def test_degraded_report_renders():
    content = degraded_report("quota exceeded")
    report = ProductionReport.from_content(
        content,
        report_id="report-2",
        repository=RepositoryInfo(url="octo/widgets", owner="octo", repo="widgets", analyzed_at="now"),
        created_at="now",
    )
    text = render_report_markdown(report)
    assert "quota exceeded" in text
    assert "❔ غير معروف" in text


def test_incident_markdown():
    incident = normalize_incident(
        {
            "incidentReport": {"severity": "high", "errorType": "Timeout", "confidenceScore": 0.75},
            "solution": {"immediateFix": {"code": "retry()", "description": "أعد المحاولة"}},
            "preventionStrategy": [{"action": "مهلة صريحة", "type": "config"}],
        }
    )
    text = render_incident_markdown(incident)
    assert "الخطورة: high" in text
    assert "درجة الثقة: 0.75" in text
    assert "retry()" in text
    assert "- مهلة صريحة (config)" in text


def test_history_csv_export(tmp_path):
    reports = [_report(), _report(id="report-2", overall_status="ready", domains=[], critical_issues=[])]
    path = export_history_csv(tmp_path / "out" / "history.csv", reports)

    frame = pd.read_csv(path)
    assert list(frame["id"]) == ["report-1", "report-2"]
    assert list(frame["repository"]) == ["octo/widgets", "octo/widgets"]
    assert list(frame["domains_not_ready"]) == [1, 0]
    assert list(frame["domains_ready"]) == [1, 0]
    assert list(frame["critical_issues"]) == [1, 0]


def test_history_csv_export_with_no_reports(tmp_path):
    path = export_history_csv(tmp_path / "empty.csv", [])
    assert pd.read_csv(path).empty
