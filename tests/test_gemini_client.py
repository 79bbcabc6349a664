from __future__ import annotations

from typing import Any

import pytest
import requests

from whymoved.domain.models import ModelCandidate
from whymoved.errors import ModelRequestError
from whymoved.llm.gemini_client import GeminiRestClient
from whymoved.llm.request_config import build_generation_config


class FakeResponse:
    def __init__(self, status_code: int, payload: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeSession:
    def __init__(self, responses: list[Any]) -> None:
        self.responses = list(responses)
        self.calls: list[dict[str, Any]] = []
        self.headers: dict[str, str] = {}

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def _client(session: FakeSession) -> GeminiRestClient:
    client = GeminiRestClient(api_key="test-key", base_url="https://example.test/")
    client.session = session  # type: ignore[assignment]
    return client


def test_generate_content_builds_structured_request_body() -> None:
    session = FakeSession(
        [FakeResponse(200, {"candidates": [{"content": {"parts": [{"text": '{"x": 1}'}]}}]})]
    )
    client = _client(session)
    schema = {"type": "OBJECT"}
    config = build_generation_config(ModelCandidate("gemini-2.0-flash"), schema, "persona")

    result = client.generate_content("gemini-2.0-flash", "prompt text", config)

    call = session.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == "https://example.test/v1beta/models/gemini-2.0-flash:generateContent"
    assert call["json"] == {
        "contents": [{"role": "user", "parts": [{"text": "prompt text"}]}],
        "systemInstruction": {"parts": [{"text": "persona"}]},
        "tools": [{"google_search": {}}],
        "generationConfig": {"responseMimeType": "application/json", "responseSchema": schema},
    }
    assert result.text == '{"x": 1}'


def test_generate_content_omits_generation_config_for_text_models() -> None:
    session = FakeSession([FakeResponse(200, {"candidates": [{"content": {"parts": []}}]})])
    client = _client(session)
    config = build_generation_config(
        ModelCandidate("gemini-flash-lite-latest", structured_output=False),
        {"type": "OBJECT"},
        "persona",
        use_search=False,
    )

    client.generate_content("models/gemini-flash-lite-latest", "p", config)

    body = session.calls[0]["json"]
    assert "generationConfig" not in body
    assert "tools" not in body
    assert session.calls[0]["url"].endswith("/models/gemini-flash-lite-latest:generateContent")


def test_parse_generation_collects_web_sources() -> None:
    payload = {
        "candidates": [
            {
                "content": {"parts": [{"text": "part one "}, {"text": "part two"}]},
                "groundingMetadata": {
                    "groundingChunks": [
                        {"web": {"uri": "https://news.test/a", "title": "Mint"}},
                        {"retrievedContext": {"uri": "ignored"}},
                        {"web": {"uri": "https://news.test/b"}},
                    ]
                },
            }
        ]
    }

    result = GeminiRestClient.parse_generation(payload)

    assert result.text == "part one part two"
    assert [source.to_record() for source in result.sources] == [
        {"title": "Mint", "uri": "https://news.test/a"},
        {"title": "Source", "uri": "https://news.test/b"},
    ]


def test_blocked_prompt_raises_model_request_error() -> None:
    with pytest.raises(ModelRequestError, match="SAFETY"):
        GeminiRestClient.parse_generation({"promptFeedback": {"blockReason": "SAFETY"}})


def test_api_error_message_is_surfaced() -> None:
    session = FakeSession(
        [
            FakeResponse(
                429,
                {"error": {"code": 429, "message": "Quota exceeded", "status": "RESOURCE_EXHAUSTED"}},
            )
        ]
    )

    with pytest.raises(ModelRequestError, match=r"\[429 RESOURCE_EXHAUSTED\] Quota exceeded"):
        _client(session).generate_content("m", "p", {})


def test_server_error_is_reported_after_a_single_request() -> None:
    session = FakeSession(
        [
            FakeResponse(503, text="upstream overloaded"),
            FakeResponse(200, {"candidates": [{"content": {"parts": [{"text": "late"}]}}]}),
        ]
    )

    with pytest.raises(ModelRequestError, match=r"\[503\] upstream overloaded"):
        _client(session).generate_content("m", "p", {})
    assert len(session.calls) == 1


def test_non_json_success_body_raises_model_request_error() -> None:
    session = FakeSession([FakeResponse(200, text="<html>captive portal</html>")])

    with pytest.raises(ModelRequestError, match=r"non-JSON body \(200\)"):
        _client(session).list_models()


def test_network_error_is_wrapped() -> None:
    session = FakeSession([requests.ConnectionError("connection refused")])

    with pytest.raises(ModelRequestError, match="connection refused"):
        _client(session).generate_content("m", "p", {})


def test_list_models_follows_pagination() -> None:
    session = FakeSession(
        [
            FakeResponse(
                200,
                {
                    "models": [
                        {
                            "name": "models/gemini-2.0-flash",
                            "displayName": "Gemini 2.0 Flash",
                            "supportedGenerationMethods": ["generateContent", "countTokens"],
                        }
                    ],
                    "nextPageToken": "page-2",
                },
            ),
            FakeResponse(200, {"models": [{"name": "models/embedding-001"}]}),
        ]
    )
    client = _client(session)

    models = client.list_models()

    assert [model.name for model in models] == ["models/gemini-2.0-flash", "models/embedding-001"]
    assert models[0].supported_generation_methods == ["generateContent", "countTokens"]
    assert session.calls[0]["params"] == {"pageSize": "100"}
    assert session.calls[1]["params"] == {"pageSize": "100", "pageToken": "page-2"}
    assert session.calls[0]["method"] == "GET"
