"""Local persistence for generated reports."""
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

import pydantic

from readiness.domain.errors import StorageError
from readiness.domain.reports import ProductionReport

logger = logging.getLogger(__name__)

REPORTS_KEY = "production-reports"


class KeyValueStore(Protocol):
    """Synchronous string key-value storage."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class InMemoryKeyValueStore:
    """Dictionary-backed store for tests."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileKeyValueStore:
    """Keeps every key in a single JSON object file on disk."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise StorageError(f"cannot read {self._path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StorageError(f"{self._path} does not hold a JSON object")
        return {str(key): value for key, value in data.items() if isinstance(value, str)}

    def _write(self, data: dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=".reports-", suffix=".tmp")
        except OSError as exc:
            raise StorageError(f"cannot write {self._path}: {exc}") from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fp:
                json.dump(data, fp, ensure_ascii=False)
            os.replace(tmp_name, self._path)
        except (OSError, TypeError, ValueError) as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise StorageError(f"cannot write {self._path}: {exc}") from exc

    def get_item(self, key: str) -> str | None:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        try:
            data = self._read()
        except StorageError as exc:
            logger.warning("Discarding unreadable store contents: %s", exc)
            data = {}
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)


class ReportHistory:
    """Ordered list of reports, newest first.

    Storage failures never propagate: unreadable or corrupt data reads as an
    empty history and failed writes are logged.
    """

    def __init__(self, store: KeyValueStore, *, key: str = REPORTS_KEY) -> None:
        self._store = store
        self._key = key

    def _load(self) -> list[ProductionReport]:
        try:
            raw = self._store.get_item(self._key)
        except StorageError as exc:
            logger.warning("Report history unavailable: %s", exc)
            return []
        if not raw:
            return []

        try:
            items = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Stored report history is corrupt, ignoring it")
            return []
        if not isinstance(items, list):
            return []

        reports: list[ProductionReport] = []
        for item in items:
            try:
                reports.append(ProductionReport.model_validate(item))
            except pydantic.ValidationError:
                logger.warning("Skipping malformed stored report")
        return reports

    def _save(self, reports: list[ProductionReport]) -> None:
        payload = json.dumps([report.to_wire() for report in reports], ensure_ascii=False)
        try:
            self._store.set_item(self._key, payload)
        except StorageError as exc:
            logger.error("Could not persist report history: %s", exc)

    def list_reports(self) -> list[ProductionReport]:
        return self._load()

    def get(self, report_id: str) -> ProductionReport | None:
        return next((report for report in self._load() if report.id == report_id), None)

    def add(self, report: ProductionReport) -> list[ProductionReport]:
        reports = [report, *self._load()]
        self._save(reports)
        return reports

    def delete(self, report_id: str) -> bool:
        reports = self._load()
        remaining = [report for report in reports if report.id != report_id]
        if len(remaining) == len(reports):
            return False
        self._save(remaining)
        return True

    def clear(self) -> None:
        try:
            self._store.remove_item(self._key)
        except StorageError as exc:
            logger.error("Could not clear report history: %s", exc)


__all__ = [
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "REPORTS_KEY",
    "ReportHistory",
]
