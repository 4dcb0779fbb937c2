"""Client-side report generation: GitHub facts in, stored report out."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from readiness.core.normalize import normalize_incident, normalize_report
from readiness.domain.errors import UpstreamError, ValidationError
from readiness.domain.incidents import IncidentDebugData, IncidentReport
from readiness.domain.reports import ProductionReport, RepositoryInfo, degraded_report
from readiness.infrastructure.github import GitHubClient, parse_github_url
from readiness.infrastructure.proxy import ProxyClient

logger = logging.getLogger(__name__)

TEST_DIRECTORIES = frozenset({"test", "tests", "__tests__"})


@dataclass(slots=True)
class RepoAnalysisData:
    """Facts about a repository root, sent to the proxy as ``analysisData``."""

    has_package_json: bool = False
    has_requirements_txt: bool = False
    has_pyproject_toml: bool = False
    has_dockerfile: bool = False
    has_tests: bool = False
    has_ci: bool = False
    has_readme: bool = False
    has_gitignore: bool = False
    languages: list[str] = field(default_factory=list)
    file_structure: list[str] = field(default_factory=list)
    package_json_content: str | None = None
    readme_content: str | None = None
    requirements_content: str | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "hasPackageJson": self.has_package_json,
            "hasRequirementsTxt": self.has_requirements_txt,
            "hasPyprojectToml": self.has_pyproject_toml,
            "hasDockerfile": self.has_dockerfile,
            "hasTests": self.has_tests,
            "hasCI": self.has_ci,
            "hasReadme": self.has_readme,
            "hasGitignore": self.has_gitignore,
            "languages": list(self.languages),
            "fileStructure": list(self.file_structure),
        }
        if self.package_json_content is not None:
            payload["packageJsonContent"] = self.package_json_content
        if self.readme_content is not None:
            payload["readmeContent"] = self.readme_content
        if self.requirements_content is not None:
            payload["requirementsContent"] = self.requirements_content
        return payload


class RepositoryAnalyzer:
    """Collects :class:`RepoAnalysisData` from the repository root listing."""

    def __init__(self, github: GitHubClient) -> None:
        self._github = github

    def collect(self, owner: str, repo: str) -> RepoAnalysisData:
        data = RepoAnalysisData()

        info = self._github.fetch_repository_info(owner, repo)
        if isinstance(info.get("language"), str) and info["language"]:
            data.languages.append(info["language"])

        contents = self._github.fetch_repository_contents(owner, repo)
        if not isinstance(contents, list):
            logger.warning("No root listing for %s/%s", owner, repo)
            return data

        for item in contents:
            if not isinstance(item, dict):
                continue
            name = str(item.get("name") or "")
            is_dir = item.get("type") == "dir"
            if not name:
                continue
            data.file_structure.append(name)

            if name == "package.json":
                data.has_package_json = True
                data.package_json_content = self._github.fetch_file_content(owner, repo, name)
            elif name == "requirements.txt":
                data.has_requirements_txt = True
                data.requirements_content = self._github.fetch_file_content(owner, repo, name)
            elif name == "pyproject.toml":
                data.has_pyproject_toml = True
            elif name == "Dockerfile":
                data.has_dockerfile = True
            elif name == ".gitignore":
                data.has_gitignore = True
            elif is_dir and name in TEST_DIRECTORIES:
                data.has_tests = True
            elif is_dir and name == ".github":
                data.has_ci = True
            elif "readme" in name.lower() and not data.has_readme:
                data.has_readme = True
                data.readme_content = self._github.fetch_file_content(owner, repo, name)
        return data


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class ReportGenerator:
    """Orchestrates a full analysis for one repository URL."""

    def __init__(self, analyzer: RepositoryAnalyzer, proxy: ProxyClient) -> None:
        self._analyzer = analyzer
        self._proxy = proxy

    def generate(self, url: str) -> ProductionReport:
        parsed = parse_github_url(url)
        if parsed is None:
            raise ValidationError("رابط GitHub غير صحيح. الرجاء إدخال رابط صحيح مثل: https://github.com/owner/repo")
        owner, repo = parsed

        analyzed_at = _now_iso()
        analysis = self._analyzer.collect(owner, repo)

        try:
            content = normalize_report(self._proxy.analyze(owner, repo, analysis.to_payload()))
        except UpstreamError as exc:
            logger.error("Error generating report for %s/%s: %s", owner, repo, exc)
            content = degraded_report(str(exc))

        return ProductionReport.from_content(
            content,
            report_id=f"report-{time.time_ns() // 1_000_000}",
            repository=RepositoryInfo(url=url.strip(), owner=owner, repo=repo, analyzed_at=analyzed_at),
            created_at=analyzed_at,
        )


def analyze_incident(proxy: ProxyClient, debug_data: IncidentDebugData) -> IncidentReport:
    """Send an incident to the proxy and decode the root-cause report."""
    payload = debug_data.model_dump(mode="json", by_alias=True, exclude_none=True)
    return normalize_incident(proxy.analyze_incident(payload))
