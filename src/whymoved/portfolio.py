"""CSV-backed portfolio holdings."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from whymoved.domain.models import PortfolioHolding

COLUMN_ALIASES = {
    "symbol": ("symbol", "ticker", "stock", "name"),
    "quantity": ("quantity", "qty", "shares", "units"),
    "average_price": ("average_price", "avg_price", "avg_cost", "price", "buy_price"),
}


def _resolve_column(frame: pd.DataFrame, field: str) -> str | None:
    normalized = {str(column).strip().lower().replace(" ", "_"): column for column in frame.columns}
    for alias in COLUMN_ALIASES[field]:
        if alias in normalized:
            return normalized[alias]
    return None


def load_holdings_csv(path: str | Path) -> list[PortfolioHolding]:
    """Read holdings from a CSV with symbol, quantity and average price columns."""
    csv_path = Path(path)
    if not csv_path.exists():
        raise ValueError(f"Holdings file not found: {csv_path}")
    frame = pd.read_csv(csv_path)
    columns = {field: _resolve_column(frame, field) for field in COLUMN_ALIASES}
    missing = [field for field, column in columns.items() if column is None]
    if missing:
        raise ValueError(f"{csv_path}: missing holdings columns: {', '.join(missing)}")

    normalized = pd.DataFrame(
        {
            "symbol": frame[columns["symbol"]].fillna("").astype(str).str.strip().str.upper(),
            "quantity": pd.to_numeric(frame[columns["quantity"]], errors="coerce"),
            "average_price": pd.to_numeric(frame[columns["average_price"]], errors="coerce"),
        }
    )
    normalized = normalized.dropna()
    normalized = normalized[(normalized["symbol"] != "") & (normalized["quantity"] > 0)]
    if normalized.empty:
        raise ValueError(f"{csv_path}: no valid holdings rows")
    return [
        PortfolioHolding(
            symbol=str(row.symbol),
            quantity=float(row.quantity),
            average_price=float(row.average_price),
        )
        for row in normalized.itertuples(index=False)
    ]


def allocation_frame(holdings: Sequence[PortfolioHolding]) -> pd.DataFrame:
    """Invested value and percentage weight per symbol, largest first."""
    frame = pd.DataFrame(
        [holding.to_record() for holding in holdings],
        columns=["symbol", "quantity", "averagePrice"],
    )
    if frame.empty:
        return pd.DataFrame(columns=["symbol", "invested", "weight_pct"])
    frame["invested"] = frame["quantity"] * frame["averagePrice"]
    grouped = frame.groupby("symbol", as_index=False)["invested"].sum()
    total = float(grouped["invested"].sum())
    grouped["weight_pct"] = grouped["invested"] / total * 100.0 if total > 0 else 0.0
    return grouped.sort_values("invested", ascending=False).reset_index(drop=True)
