from __future__ import annotations

from pathlib import Path
import sys

sys.path.append(str(Path(__file__).resolve().parents[1]))

import pytest

from readiness.core.sanitize import parse_model_json, strip_code_fences
from readiness.domain.errors import ResponseFormatError


@pytest.mark.parametrize(
    "raw",
    [
        '```json\n{"a": 1}\n```',
        '```\n{"a": 1}\n```',
        '  {"a": 1}  ',
        '```JSON{"a": 1}```',
    ],
)
def test_code_fences_are_stripped(raw):
    assert strip_code_fences(raw) == '{"a": 1}'


def test_fenced_json_is_parsed():
    assert parse_model_json('```json\n{"summary": "x"}\n```\n') == {"summary": "x"}


def test_object_inside_prose_is_recovered():
    text = 'Here is your report:\n{"summary": "x", "domains": []}\nHope this helps.'
    assert parse_model_json(text) == {"summary": "x", "domains": []}


def test_non_json_raises_with_raw_text():
    with pytest.raises(ResponseFormatError) as excinfo:
        parse_model_json("no json here")
    assert excinfo.value.raw_text == "no json here"
    assert "not valid JSON" in str(excinfo.value)


def test_json_that_is_not_an_object_is_rejected():
    with pytest.raises(ResponseFormatError):
        parse_model_json("[1, 2, 3]")


def test_empty_text_is_rejected():
    with pytest.raises(ResponseFormatError):
        parse_model_json("")
