from __future__ import annotations

import json
from pathlib import Path

from whymoved.domain.events import RequestEvent
from whymoved.logging.event_sink import (
    JsonlEventSink,
    generate_price_report,
    price_history_frame,
)


def test_jsonl_sink_appends_records(tmp_path: Path) -> None:
    path = tmp_path / "run" / "events.jsonl"
    sink = JsonlEventSink(str(path))
    sink.emit(RequestEvent(run_id="r", operation="pulse", event_type="model_attempt", ts="t1"))
    sink.emit(RequestEvent(run_id="r", operation="pulse", event_type="model_succeeded", ts="t2"))

    events = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]

    assert [event["event_type"] for event in events] == ["model_attempt", "model_succeeded"]
    assert events[0] == {
        "ts": "t1",
        "run_id": "r",
        "operation": "pulse",
        "event_type": "model_attempt",
        "payload": {},
    }


def test_price_history_frame_drops_non_numeric_points() -> None:
    frame = price_history_frame({"historicalPrices": [100, "101.5", None, "n/a", 103]})

    assert list(frame["close"]) == [100.0, 101.5, 103.0]
    assert list(frame["session"]) == ["T-2", "T-1", "T"]


def test_generate_price_report_writes_chart_and_sources(tmp_path: Path) -> None:
    output = tmp_path / "reports" / "itc.html"
    explanation = {
        "stockName": "ITC",
        "priceChange": "+2.1%",
        "oneLineSummary": "FMCG rally <lifted> the stock",
        "historicalPrices": [400, 402, 409],
        "finalTakeaway": "Sector-linked move.",
        "sources": [{"title": "Mint", "uri": "https://mint.test/itc"}],
    }

    generate_price_report(explanation, str(output))

    html = output.read_text(encoding="utf-8")
    assert "<h1>ITC +2.1%</h1>" in html
    assert "FMCG rally &lt;lifted&gt; the stock" in html
    assert "https://mint.test/itc" in html
    assert "plotly" in html.lower()


def test_generate_price_report_without_prices(tmp_path: Path) -> None:
    output = tmp_path / "empty.html"

    generate_price_report({"stockName": "ABC"}, str(output))

    assert output.exists()
