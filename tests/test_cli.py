from __future__ import annotations

from pathlib import Path
import sys

sys.path.append(str(Path(__file__).resolve().parents[1]))

import pytest

from readiness import cli
from readiness.domain.errors import GitHubError
from readiness.domain.reports import ProductionReport, RepositoryInfo
from readiness.infrastructure.storage import JsonFileKeyValueStore, ReportHistory


def _report(report_id: str) -> ProductionReport:
    return ProductionReport(
        id=report_id,
        repository=RepositoryInfo(url="https://github.com/octo/widgets", owner="octo", repo="widgets", analyzed_at="2025-01-01"),
        overall_status="ready",
        created_at="2025-01-01",
    )


@pytest.fixture()
def store_path(tmp_path) -> Path:
    return tmp_path / "reports.json"


def _history(store_path: Path) -> ReportHistory:
    return ReportHistory(JsonFileKeyValueStore(store_path))


def test_history_list_and_delete(store_path, capsys):
    history = _history(store_path)
    history.add(_report("report-1"))
    history.add(_report("report-2"))

    assert cli.main(["--store", str(store_path), "history", "list"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert [line.split("\t")[0] for line in lines] == ["report-2", "report-1"]

    assert cli.main(["--store", str(store_path), "history", "delete", "report-2"]) == 0
    assert [report.id for report in history.list_reports()] == ["report-1"]

    assert cli.main(["--store", str(store_path), "history", "delete", "report-2"]) == 1


def test_history_show_writes_markdown(store_path, tmp_path):
    _history(store_path).add(_report("report-1"))
    output = tmp_path / "report.md"

    assert cli.main(["--store", str(store_path), "history", "show", "report-1", "--output", str(output)]) == 0
    assert output.read_text(encoding="utf-8").startswith("# تقرير جاهزية الإنتاج")


def test_history_export_csv(store_path, tmp_path):
    _history(store_path).add(_report("report-1"))
    target = tmp_path / "history.csv"
    assert cli.main(["--store", str(store_path), "history", "export-csv", str(target)]) == 0
    assert target.exists()


def test_history_show_requires_target(store_path):
    with pytest.raises(SystemExit):
        cli.main(["--store", str(store_path), "history", "show"])


def test_analyze_saves_and_prints_report(store_path, monkeypatch, capsys):
    class FakeGenerator:
        def __init__(self, analyzer, proxy) -> None:
            pass

        def generate(self, url: str) -> ProductionReport:
            return _report("report-9")

    monkeypatch.setattr(cli, "ReportGenerator", FakeGenerator)

    assert cli.main(["--store", str(store_path), "analyze", "https://github.com/octo/widgets"]) == 0
    assert "octo" in capsys.readouterr().out
    assert [report.id for report in _history(store_path).list_reports()] == ["report-9"]


def test_analyze_reports_errors(store_path, monkeypatch, capsys):
    class FailingGenerator:
        def __init__(self, analyzer, proxy) -> None:
            pass

        def generate(self, url: str) -> ProductionReport:
            raise GitHubError("المستودع غير موجود أو خاص", status_code=404)

    monkeypatch.setattr(cli, "ReportGenerator", FailingGenerator)

    assert cli.main(["--store", str(store_path), "analyze", "octo/missing"]) == 1
    assert "المستودع غير موجود أو خاص" in capsys.readouterr().err
    assert _history(store_path).list_reports() == []


def test_incident_with_missing_log_file_fails_cleanly(store_path, tmp_path, capsys):
    missing = tmp_path / "nope.log"
    code = cli.main(
        [
            "--store",
            str(store_path),
            "incident",
            "--symptoms",
            "slow",
            "--environment",
            "prod",
            "--error-log",
            str(missing),
        ]
    )
    assert code == 1
    assert "nope.log" in capsys.readouterr().err
