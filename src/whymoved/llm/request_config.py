"""Per-model generation config and JSON recovery from model text."""

from __future__ import annotations

import json
import re
from typing import Any

from whymoved.domain.models import ModelCandidate
from whymoved.errors import UnparseableModelOutputError

JSON_ONLY_DIRECTIVE = (
    "\n\nCRITICAL: Output strictly valid JSON only. Do not wrap in markdown. "
    "Do not include any text before or after."
)

_JSON_BLOCK = re.compile(r"(\{[\s\S]*\}|\[[\s\S]*\])")


def build_generation_config(
    candidate: ModelCandidate,
    schema: dict[str, Any],
    system_instruction: str,
    use_search: bool = True,
) -> dict[str, Any]:
    """Attach a response schema, or a JSON directive for text-only models."""
    config: dict[str, Any] = {
        "system_instruction": (
            system_instruction
            if candidate.structured_output
            else system_instruction + JSON_ONLY_DIRECTIVE
        ),
    }
    if use_search:
        config["tools"] = [{"google_search": {}}]
    if candidate.structured_output:
        config["response_mime_type"] = "application/json"
        config["response_schema"] = schema
    return config


def clean_json(text: str) -> str:
    """Return the embedded JSON object/array, or the fence-stripped text."""
    match = _JSON_BLOCK.search(text)
    if match:
        return match.group(0)
    cleaned = text.strip()
    cleaned = re.sub(r"^```json\s*", "", cleaned)
    cleaned = re.sub(r"^```\s*", "", cleaned)
    return re.sub(r"\s*```$", "", cleaned)


def parse_model_json(text: str) -> Any:
    """Parse model output as JSON after cleanup."""
    cleaned = clean_json(text or "")
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as exc:
        preview = cleaned[:80].replace("\n", " ")
        raise UnparseableModelOutputError(
            f"Unparseable model output ({exc.msg}): {preview!r}",
            text=text,
        ) from exc
