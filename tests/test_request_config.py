from __future__ import annotations

import json

import pytest

from whymoved.domain.models import ModelCandidate
from whymoved.errors import UnparseableModelOutputError
from whymoved.llm.request_config import (
    JSON_ONLY_DIRECTIVE,
    build_generation_config,
    clean_json,
    parse_model_json,
)

SCHEMA = {"type": "OBJECT", "properties": {"x": {"type": "NUMBER"}}}


def test_structured_model_gets_schema_and_mime_type() -> None:
    config = build_generation_config(ModelCandidate("gemini-2.0-flash"), SCHEMA, "persona")

    assert config["system_instruction"] == "persona"
    assert config["response_mime_type"] == "application/json"
    assert config["response_schema"] is SCHEMA
    assert config["tools"] == [{"google_search": {}}]


def test_text_only_model_gets_json_directive_instead_of_schema() -> None:
    candidate = ModelCandidate("gemini-flash-lite-latest", structured_output=False)
    config = build_generation_config(candidate, SCHEMA, "persona")

    assert config["system_instruction"] == "persona" + JSON_ONLY_DIRECTIVE
    assert "response_mime_type" not in config
    assert "response_schema" not in config


def test_search_tool_can_be_disabled() -> None:
    config = build_generation_config(ModelCandidate("m"), SCHEMA, "p", use_search=False)

    assert "tools" not in config


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ('Sure! Here it is: {"a": 1, "b": [1, 2]} Hope that helps.', {"a": 1, "b": [1, 2]}),
        ("The list is [1, 2, 3] as requested", [1, 2, 3]),
        ('```json\n{"nested": {"k": "v"}}\n```', {"nested": {"k": "v"}}),
    ],
)
def test_clean_json_extracts_embedded_json(text: str, expected: object) -> None:
    assert json.loads(clean_json(text)) == expected


def test_clean_json_match_is_greedy_across_text() -> None:
    text = 'first {"a": 1} and then {"b": 2}'

    assert clean_json(text) == '{"a": 1} and then {"b": 2}'


def test_clean_json_strips_fences_when_no_json_found() -> None:
    assert clean_json("```json\n  plain answer  \n```") == "plain answer"
    assert clean_json("```\nplain\n```") == "plain"
    assert clean_json("   just text   ") == "just text"


def test_parse_model_json_raises_distinct_error() -> None:
    with pytest.raises(UnparseableModelOutputError) as excinfo:
        parse_model_json("```\nno json here\n```")

    assert excinfo.value.text == "```\nno json here\n```"
    assert isinstance(excinfo.value, ValueError)
