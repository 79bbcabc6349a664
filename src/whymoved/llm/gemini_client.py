"""Gemini REST client for generateContent and model listing."""

from __future__ import annotations

from typing import Any

import requests

from whymoved.domain.models import GenerationResult, ModelInfo, Source
from whymoved.errors import ModelRequestError


class GeminiRestClient:
    """Thin wrapper over the Generative Language `v1beta` REST API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://generativelanguage.googleapis.com",
        api_version: str = "v1beta",
        timeout: float = 60.0,
        page_size: int = 100,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_version = api_version
        self.timeout = timeout
        self.page_size = page_size
        self.session = requests.Session()
        self.session.headers.update(
            {
                "x-goog-api-key": api_key,
                "Content-Type": "application/json",
            }
        )

    def generate_content(
        self,
        model: str,
        contents: str,
        config: dict[str, Any],
    ) -> GenerationResult:
        body = self.build_request_body(contents, config)
        payload = self._request("POST", f"/models/{self._model_path(model)}:generateContent", body)
        return self.parse_generation(payload)

    def list_models(self) -> list[ModelInfo]:
        models: list[ModelInfo] = []
        page_token: str | None = None
        while True:
            params: dict[str, str] = {"pageSize": str(self.page_size)}
            if page_token:
                params["pageToken"] = page_token
            payload = self._request("GET", "/models", params=params)
            for item in payload.get("models", []) or []:
                models.append(
                    ModelInfo(
                        name=str(item.get("name", "")),
                        display_name=str(item.get("displayName", "")),
                        supported_generation_methods=[
                            str(method) for method in item.get("supportedGenerationMethods", [])
                        ],
                    )
                )
            page_token = payload.get("nextPageToken")
            if not page_token:
                return models

    @staticmethod
    def build_request_body(contents: str, config: dict[str, Any]) -> dict[str, Any]:
        """Translate a generation config into the REST request body."""
        body: dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": contents}]}],
        }
        system_instruction = config.get("system_instruction")
        if system_instruction:
            body["systemInstruction"] = {"parts": [{"text": system_instruction}]}
        tools = config.get("tools")
        if tools:
            body["tools"] = tools
        generation_config: dict[str, Any] = {}
        if config.get("response_mime_type"):
            generation_config["responseMimeType"] = config["response_mime_type"]
        if config.get("response_schema"):
            generation_config["responseSchema"] = config["response_schema"]
        if generation_config:
            body["generationConfig"] = generation_config
        return body

    @staticmethod
    def parse_generation(payload: dict[str, Any]) -> GenerationResult:
        """Extract candidate text and web citations from a response payload."""
        candidates = payload.get("candidates") or []
        if not candidates:
            feedback = payload.get("promptFeedback") or {}
            reason = feedback.get("blockReason")
            if reason:
                raise ModelRequestError(f"Prompt blocked: {reason}")
            raise ModelRequestError("Response contained no candidates")
        first = candidates[0] or {}
        parts = (first.get("content") or {}).get("parts") or []
        text = "".join(str(part.get("text", "")) for part in parts if isinstance(part, dict))
        chunks = (first.get("groundingMetadata") or {}).get("groundingChunks") or []
        sources: list[Source] = []
        for chunk in chunks:
            web = chunk.get("web") if isinstance(chunk, dict) else None
            if not web:
                continue
            title = str(web.get("title") or "Source")
            sources.append(Source(title=title, uri=str(web.get("uri", ""))))
        return GenerationResult(text=text, sources=sources, raw=payload)

    def _request(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        url = f"{self.base_url}/{self.api_version}{path}"
        try:
            response = self.session.request(
                method,
                url,
                json=body,
                params=params,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise ModelRequestError(f"Gemini request failed: {exc}") from exc
        if response.status_code >= 400:
            raise ModelRequestError(self._error_message(response))
        try:
            return response.json()
        except ValueError as exc:
            raise ModelRequestError(
                f"Gemini returned a non-JSON body ({response.status_code})"
            ) from exc

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
            error = payload["error"]
            status = error.get("status") or response.status_code
            message = error.get("message") or "No error message"
            return f"[{response.status_code} {status}] {message}"
        detail = response.text.strip() or "No response body"
        return f"[{response.status_code}] {detail}"

    @staticmethod
    def _model_path(model: str) -> str:
        return model.removeprefix("models/")
