"""Domain layer definitions."""

from .errors import (
    ConfigurationError,
    EmptyResponseError,
    GitHubError,
    ReadinessError,
    ResponseFormatError,
    StorageError,
    UpstreamError,
    ValidationError,
)
from .incidents import IncidentDebugData, IncidentReport
from .reports import (
    READINESS_STATUSES,
    REPORT_DOMAINS,
    DomainAssessment,
    ProductionReport,
    ReadinessStatus,
    ReportContent,
    RepositoryInfo,
    degraded_report,
)

__all__ = [
    "READINESS_STATUSES",
    "REPORT_DOMAINS",
    "ConfigurationError",
    "DomainAssessment",
    "EmptyResponseError",
    "GitHubError",
    "IncidentDebugData",
    "IncidentReport",
    "ProductionReport",
    "ReadinessError",
    "ReadinessStatus",
    "ReportContent",
    "RepositoryInfo",
    "ResponseFormatError",
    "StorageError",
    "UpstreamError",
    "ValidationError",
    "degraded_report",
]
