"""Persona instructions and prompt builders."""

from __future__ import annotations

import json
from collections.abc import Sequence

from whymoved.domain.models import PortfolioHolding, UserProfile

EXPLAINER_SYSTEM_INSTRUCTION = """You are a premium Indian stock market explanation engine.
Your role is to explain WHY a stock or index moved on a given trading day.
- India only (NSE/BSE).
- NO predictions, NO advice, NO target prices.
- Be factual, neutral, and unemotional. No hype, no fear.
- HOLIDAY & SESSION RULES:
  1. Determine if the market is closed (Weekend or NSE/BSE Holiday).
  2. If closed, clearly state it and STOP analysis.
- ANALYSIS LOGIC:
  - Consider NIFTY 50/Sector context, News, Volume, and Sentiment.
  - If no strong reason exists, state it is sentiment-driven or index-linked. Do NOT speculate.
- IMPACT CLASSIFICATION: No Impact, Low Impact, Medium Impact, High Impact.
- SENTIMENT CLASSIFICATION: Positive, Negative, Neutral.
- PREMIUM INSIGHT: Provide a 'premiumInsight' string that gives a deeper look into FII/DII flow \
or order book data if available."""

REBALANCER_SYSTEM_INSTRUCTION = """You are an educational portfolio rebalancing assistant for \
Indian stock market investors only.
STRICT RULES:
- NO price predictions or market direction forecasts.
- NO guaranteed returns.
- NO aggressive buy/sell instructions.
- Provide logical, risk-based rebalancing suggestions only.
- Prioritize capital protection and diversification principles.
- Conservative, factual, and unemotional tone.
- Context: Indian market (NSE/BSE)."""


def market_status_prompt(date_str: str) -> str:
    return (
        f"Analyze Indian stock market status for {date_str}. Is it a trading holiday or "
        "weekend? Return STATUS: [OPEN/CLOSED/UNKNOWN] and REASON: [Reason]."
    )


def yesterday_pulse_prompt() -> str:
    return """Provide a very brief summary of the LAST trading session of the Indian Stock \
Market (Nifty 50 and Sensex).
Include:
- Nifty 50 percentage change and direction.
- Sensex percentage change and direction.
- Top sector that moved.
- One major market story from that session.
Return as JSON."""


def stock_explanation_prompt(stock_name: str) -> str:
    return f"""Explain why Indian stock "{stock_name}" moved recently.
Rules: Factual analysis only. No predictions. Quantify moves with percentages.
Include an array 'historicalPrices' of 7 approximate closing price points for the last 7 sessions.
For the 'newsImpact' card, please include the URL of the primary news article used for the \
analysis in the 'url' field.
Output in JSON format matching the response schema."""


def comparison_prompt(stock_a: str, stock_b: str) -> str:
    return f"""Perform a side-by-side technical and fundamental audit of two Indian stocks: \
"{stock_a}" and "{stock_b}".
Explain why each moved recently and how their performance compares.
Return JSON matching the comparison schema."""


def discovery_prompt(profile: UserProfile) -> str:
    return f"""Educational study for: Risk={profile.risk_tolerance}, Horizon={profile.horizon}.
Suggest 2-3 NSE/BSE stocks for learning/study. Focus on capital protection and diversification \
principles. NO ADVICE."""


def rebalancing_prompt(profile: UserProfile, holdings: Sequence[PortfolioHolding]) -> str:
    holdings_json = json.dumps([holding.to_record() for holding in holdings])
    return f"""Audit this asset allocation for an Indian investor: \
Risk={profile.risk_tolerance}, Horizon={profile.horizon}.
Holdings: {holdings_json}.
Provide logical diversification study. NO ADVICE."""
