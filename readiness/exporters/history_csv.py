from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Iterable

import pandas as pd

from readiness.domain.reports import ProductionReport

COLUMNS = [
    "id",
    "repository",
    "url",
    "overall_status",
    "created_at",
    "domains",
    "domains_ready",
    "domains_conditional",
    "domains_not_ready",
    "domains_unknown",
    "critical_issues",
]


def export_history_csv(path: Path, reports: Iterable[ProductionReport]) -> Path:
    records = []
    for report in reports:
        statuses = Counter(domain.status for domain in report.domains)
        records.append({
            "id": report.id,
            "repository": report.repository.full_name,
            "url": report.repository.url,
            "overall_status": report.overall_status,
            "created_at": report.created_at,
            "domains": len(report.domains),
            "domains_ready": statuses["ready"],
            "domains_conditional": statuses["conditional"],
            "domains_not_ready": statuses["not-ready"],
            "domains_unknown": statuses["unknown"],
            "critical_issues": len(report.critical_issues),
        })
    df = pd.DataFrame(records, columns=COLUMNS)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    return path
