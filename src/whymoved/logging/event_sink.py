"""JSONL event sink and Plotly price-history report."""

from __future__ import annotations

import html
import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import pandas as pd
import plotly.express as px

from whymoved.domain.events import RequestEvent


class JsonlEventSink:
    """Append-only JSONL writer."""

    def __init__(self, path: str) -> None:
        output_path = Path(path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        self.path = output_path

    def emit(self, event: RequestEvent) -> None:
        record = event.to_record()
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, sort_keys=True))
            handle.write("\n")


def price_history_frame(explanation: Mapping[str, Any]) -> pd.DataFrame:
    """Turn `historicalPrices` into a session-indexed frame of numeric closes."""
    raw = explanation.get("historicalPrices") or []
    values = pd.to_numeric(pd.Series(list(raw), dtype="object"), errors="coerce").dropna()
    lags = range(len(values) - 1, -1, -1)
    return pd.DataFrame(
        {
            "session": [f"T-{lag}" if lag else "T" for lag in lags],
            "close": values.astype(float).tolist(),
        }
    )


def generate_price_report(explanation: Mapping[str, Any], output_html_path: str) -> None:
    """Render a stock explanation with a chart of its recent closing prices."""
    output = Path(output_html_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    name = str(explanation.get("stockName") or "Stock")
    frame = price_history_frame(explanation)
    if frame.empty:
        frame = pd.DataFrame({"session": ["no-data"], "close": [0.0]})
    figure = px.line(frame, x="session", y="close", markers=True, title=f"{name}: recent closes")

    summary = html.escape(str(explanation.get("oneLineSummary") or ""))
    takeaway = html.escape(str(explanation.get("finalTakeaway") or ""))
    change = html.escape(str(explanation.get("priceChange") or ""))
    source_items = "".join(
        f"<li><a href='{html.escape(str(source.get('uri', '')))}'>"
        f"{html.escape(str(source.get('title', 'Source')))}</a></li>"
        for source in explanation.get("sources") or []
        if isinstance(source, Mapping)
    )
    html_parts = [
        "<html><head><meta charset='utf-8'>",
        f"<title>{html.escape(name)} move report</title></head><body>",
        f"<h1>{html.escape(name)} {change}</h1>",
        f"<p>{summary}</p>",
        figure.to_html(full_html=False, include_plotlyjs="cdn"),
        f"<p><strong>Takeaway:</strong> {takeaway}</p>",
        f"<ul>{source_items}</ul>" if source_items else "",
        "</body></html>",
    ]
    output.write_text("".join(html_parts), encoding="utf-8")
