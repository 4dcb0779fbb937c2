"""Application services."""

from .analysis import AnalysisOutcome, AnalysisService
from .reports import RepoAnalysisData, ReportGenerator, RepositoryAnalyzer, analyze_incident

__all__ = [
    "AnalysisOutcome",
    "AnalysisService",
    "RepoAnalysisData",
    "ReportGenerator",
    "RepositoryAnalyzer",
    "analyze_incident",
]
