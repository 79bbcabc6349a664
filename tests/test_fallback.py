from __future__ import annotations

import pytest

from whymoved.domain.models import ModelCandidate
from whymoved.errors import AllModelsFailedError
from whymoved.llm.fallback import generate_with_fallback


def _candidates(*names: str) -> list[ModelCandidate]:
    return [ModelCandidate(model_id=name) for name in names]


def test_returns_first_success_without_trying_later_candidates() -> None:
    calls: list[str] = []

    def generate(candidate: ModelCandidate) -> dict[str, int]:
        calls.append(candidate.model_id)
        if candidate.model_id == "A":
            raise RuntimeError("rate limited")
        if candidate.model_id == "B":
            raise ValueError("invalid arg")
        return {"x": 1}

    result = generate_with_fallback(_candidates("A", "B", "C", "D"), generate)

    assert result == {"x": 1}
    assert calls == ["A", "B", "C"]


@pytest.mark.parametrize("winner", [0, 1, 2, 3])
def test_nth_candidate_success_stops_iteration(winner: int) -> None:
    names = ["m0", "m1", "m2", "m3"]
    calls: list[str] = []

    def generate(candidate: ModelCandidate) -> str:
        calls.append(candidate.model_id)
        if candidate.model_id != names[winner]:
            raise RuntimeError("nope")
        return candidate.model_id

    assert generate_with_fallback(_candidates(*names), generate) == names[winner]
    assert calls == names[: winner + 1]


def test_all_failures_are_aggregated_in_order() -> None:
    messages = {"A": "quota exceeded", "B": "model not found"}

    def generate(candidate: ModelCandidate) -> None:
        raise RuntimeError(messages[candidate.model_id])

    with pytest.raises(AllModelsFailedError) as excinfo:
        generate_with_fallback(_candidates("A", "B"), generate)

    assert str(excinfo.value) == (
        "All models failed. Details:\n"
        "Model A failed: quota exceeded\n"
        "Model B failed: model not found"
    )
    assert excinfo.value.failures == [
        "Model A failed: quota exceeded",
        "Model B failed: model not found",
    ]


def test_aggregate_has_one_line_per_candidate() -> None:
    names = [f"model-{index}" for index in range(6)]

    def generate(candidate: ModelCandidate) -> None:
        raise RuntimeError("down")

    with pytest.raises(AllModelsFailedError) as excinfo:
        generate_with_fallback(_candidates(*names), generate)

    lines = str(excinfo.value).splitlines()[1:]
    assert len(lines) == len(names)
    for name, line in zip(names, lines, strict=True):
        assert line.startswith(f"Model {name} failed:")


def test_empty_candidate_list_raises_aggregate_error() -> None:
    with pytest.raises(AllModelsFailedError) as excinfo:
        generate_with_fallback([], lambda candidate: candidate)

    assert excinfo.value.failures == []


def test_events_report_each_attempt() -> None:
    events: list[tuple[str, dict]] = []

    def generate(candidate: ModelCandidate) -> str:
        if candidate.model_id == "A":
            raise RuntimeError("boom")
        return "ok"

    generate_with_fallback(
        _candidates("A", "B"),
        generate,
        on_event=lambda event_type, payload: events.append((event_type, payload)),
    )

    assert [event_type for event_type, _ in events] == [
        "model_attempt",
        "model_failed",
        "model_attempt",
        "model_succeeded",
    ]
    assert events[1][1]["error"] == "boom"
    assert events[3][1] == {"model": "B", "attempt": 2}
