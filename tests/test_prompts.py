from __future__ import annotations

from pathlib import Path
import sys

sys.path.append(str(Path(__file__).resolve().parents[1]))

import pytest

from readiness.core.prompts import (
    MAX_FILE_LIST_CHARS,
    MAX_INCIDENT_CHARS,
    MAX_PAYLOAD_CHARS,
    NOT_SPECIFIED,
    TRUNCATION_MARKER,
    build_analysis_prompt,
    build_incident_prompt,
    truncate_payload,
)
from readiness.domain.reports import REPORT_DOMAINS


def test_prompt_mentions_repository_and_schema_keys():
    prompt = build_analysis_prompt(
        "octo",
        "widgets",
        {"languages": ["Python", "TypeScript"], "hasDockerfile": True, "hasTests": False},
    )
    assert "octo" in prompt and "widgets" in prompt
    assert "Python, TypeScript" in prompt
    assert "Dockerfile: ✓ موجود" in prompt
    assert "اختبارات آلية: ✗ غير موجود" in prompt
    for key in ("summary", "overallStatus", "domains", "criticalIssues", "recommendations", "conclusion"):
        assert f'"{key}"' in prompt
    for _, arabic, english in REPORT_DOMAINS:
        assert arabic in prompt and english in prompt


def test_missing_facts_render_as_not_specified():
    prompt = build_analysis_prompt("octo", "widgets", None)
    assert f"اللغات البرمجية: {NOT_SPECIFIED}" in prompt
    assert f"package.json: {NOT_SPECIFIED}" in prompt
    assert TRUNCATION_MARKER not in prompt


def test_oversized_payload_is_truncated():
    huge = {"readmeContent": "x" * (MAX_PAYLOAD_CHARS * 2)}
    prompt = build_analysis_prompt("octo", "widgets", huge)
    assert TRUNCATION_MARKER in prompt
    assert len(prompt) < MAX_PAYLOAD_CHARS + 10_000


def test_truncate_payload_keeps_short_text():
    assert truncate_payload("abc", 3) == "abc"
    assert truncate_payload("abcd", 3) == "abc" + TRUNCATION_MARKER


def test_incident_prompt_is_capped():
    prompt = build_incident_prompt({"errorLog": "e" * (MAX_INCIDENT_CHARS * 2), "symptoms": "slow"})
    assert TRUNCATION_MARKER in prompt
    assert "rootCauseAnalysis" in prompt


@pytest.mark.parametrize(
    "file_structure",
    ["x" * 1_000_000, [f"file-{index}.txt" for index in range(200_000)]],
)
def test_file_structure_is_capped_in_prompt(file_structure):
    prompt = build_analysis_prompt(
        "octo",
        "widgets",
        {"fileStructure": file_structure, "languages": ["Python"] * 100_000},
    )
    assert len(prompt) < MAX_PAYLOAD_CHARS + 10_000
    assert prompt.count(TRUNCATION_MARKER) == 3


def test_short_file_structure_is_rendered_whole():
    prompt = build_analysis_prompt("octo", "widgets", {"fileStructure": ["src", "README.md"]})
    assert "src\nREADME.md" in prompt
    assert len("src\nREADME.md") < MAX_FILE_LIST_CHARS


def test_oversized_owner_and_repo_are_capped():
    prompt = build_analysis_prompt("o" * 100_000, "r" * 100_000, {})
    assert len(prompt) < MAX_PAYLOAD_CHARS + 10_000
