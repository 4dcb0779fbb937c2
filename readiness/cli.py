"""Command line front end: analyze repositories and browse saved reports."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from readiness.application import ReportGenerator, RepositoryAnalyzer, analyze_incident
from readiness.core.settings import Settings
from readiness.domain.errors import ReadinessError, ValidationError
from readiness.domain.incidents import IncidentDebugData
from readiness.exporters.history_csv import export_history_csv
from readiness.exporters.markdown import render_incident_markdown, render_report_markdown, status_label
from readiness.infrastructure import GitHubClient, JsonFileKeyValueStore, ProxyClient, ReportHistory

logger = logging.getLogger("readiness")


def _read_optional(path: str | None) -> str | None:
    if not path:
        return None
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ValidationError(f"تعذر قراءة الملف {path}: {exc}") from exc


def _emit(text: str, output: str | None) -> None:
    if output:
        target = Path(output)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
        print(f"تم حفظ التقرير: {target}")
    else:
        print(text)


def _cmd_analyze(args: argparse.Namespace, settings: Settings, history: ReportHistory) -> int:
    github = GitHubClient(settings.github_token, api_base=settings.github_api_base)
    proxy = ProxyClient(args.proxy_url or settings.api_base_url)
    try:
        report = ReportGenerator(RepositoryAnalyzer(github), proxy).generate(args.url)
    finally:
        github.close()
        proxy.close()

    if not args.no_save:
        history.add(report)
    _emit(render_report_markdown(report), args.output)
    return 0


def _cmd_incident(args: argparse.Namespace, settings: Settings, history: ReportHistory) -> int:
    debug_data = IncidentDebugData(
        symptoms=args.symptoms,
        environment=args.environment,
        error_log=_read_optional(args.error_log),
        stack_trace=_read_optional(args.stack_trace),
        code_snippet=_read_optional(args.code),
    )
    proxy = ProxyClient(args.proxy_url or settings.api_base_url)
    try:
        incident = analyze_incident(proxy, debug_data)
    finally:
        proxy.close()
    _emit(render_incident_markdown(incident), args.output)
    return 0


def _cmd_history(args: argparse.Namespace, settings: Settings, history: ReportHistory) -> int:
    if args.action == "list":
        reports = history.list_reports()
        if not reports:
            print("لا توجد تقارير محفوظة")
        for report in reports:
            print(f"{report.id}\t{report.repository.full_name}\t{status_label(report.overall_status)}\t{report.created_at}")
        return 0

    if args.action == "show":
        report = history.get(args.target)
        if report is None:
            print(f"التقرير غير موجود: {args.target}", file=sys.stderr)
            return 1
        _emit(render_report_markdown(report), args.output)
        return 0

    if args.action == "delete":
        if not history.delete(args.target):
            print(f"التقرير غير موجود: {args.target}", file=sys.stderr)
            return 1
        print(f"تم حذف التقرير: {args.target}")
        return 0

    if args.action == "export-csv":
        path = export_history_csv(Path(args.target), history.list_reports())
        print(f"تم تصدير السجل: {path}")
        return 0

    history.clear()
    print("تم مسح سجل التقارير")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="readiness", description="تقارير جاهزية الإنتاج لمستودعات GitHub")
    parser.add_argument("--store", help="مسار ملف التقارير المحفوظة")
    parser.add_argument("-v", "--verbose", action="store_true", help="عرض سجلات التشخيص")
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="تحليل مستودع وإنشاء تقرير")
    analyze.add_argument("url", help="رابط المستودع، مثل https://github.com/owner/repo")
    analyze.add_argument("--proxy-url", help="عنوان خادم التحليل")
    analyze.add_argument("--output", help="حفظ التقرير بصيغة Markdown في هذا المسار")
    analyze.add_argument("--no-save", action="store_true", help="عدم حفظ التقرير في السجل")
    analyze.set_defaults(handler=_cmd_analyze)

    incident = subparsers.add_parser("incident", help="تحليل السبب الجذري لحادثة")
    incident.add_argument("--symptoms", required=True, help="وصف الأعراض")
    incident.add_argument("--environment", required=True, help="بيئة التشغيل")
    incident.add_argument("--error-log", help="ملف سجل الأخطاء")
    incident.add_argument("--stack-trace", help="ملف تتبع المكدس")
    incident.add_argument("--code", help="ملف مقتطف الكود")
    incident.add_argument("--proxy-url", help="عنوان خادم التحليل")
    incident.add_argument("--output", help="حفظ التحليل بصيغة Markdown في هذا المسار")
    incident.set_defaults(handler=_cmd_incident)

    history = subparsers.add_parser("history", help="إدارة التقارير السابقة")
    history.add_argument("action", choices=["list", "show", "delete", "export-csv", "clear"])
    history.add_argument("target", nargs="?", help="معرّف التقرير أو مسار ملف CSV")
    history.add_argument("--output", help="حفظ التقرير المعروض في هذا المسار")
    history.set_defaults(handler=_cmd_history)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "history" and args.action in {"show", "delete", "export-csv"} and not args.target:
        parser.error(f"history {args.action} requires a target")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = Settings.from_env()
    store_path = Path(args.store).expanduser() if args.store else settings.store_path
    history = ReportHistory(JsonFileKeyValueStore(store_path))

    try:
        return args.handler(args, settings, history)
    except ReadinessError as exc:
        logger.debug("Command failed", exc_info=True)
        print(str(exc), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
