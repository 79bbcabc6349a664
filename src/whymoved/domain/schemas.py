"""Response schemas sent with structured-output requests."""

from __future__ import annotations

from typing import Any

STOCK_EXPLANATION_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "stockName": {"type": "STRING"},
        "priceChange": {"type": "STRING"},
        "direction": {"type": "STRING", "enum": ["up", "down", "neutral"]},
        "oneLineSummary": {"type": "STRING"},
        "historicalPrices": {
            "type": "ARRAY",
            "items": {"type": "NUMBER"},
            "description": "Approximate closing prices for the last 7 trading sessions.",
        },
        "cards": {
            "type": "OBJECT",
            "properties": {
                "marketContext": {"type": "STRING"},
                "sectorPerformance": {"type": "STRING"},
                "newsImpact": {
                    "type": "OBJECT",
                    "properties": {
                        "text": {"type": "STRING"},
                        "impact": {"type": "STRING", "enum": ["High", "Medium", "Low", "None"]},
                        "sentiment": {
                            "type": "STRING",
                            "enum": ["Positive", "Negative", "Neutral"],
                        },
                        "url": {
                            "type": "STRING",
                            "description": (
                                "Direct URL to the most relevant news source used "
                                "for this analysis."
                            ),
                        },
                    },
                    "required": ["text", "impact", "sentiment"],
                },
                "tradingActivity": {"type": "STRING"},
                "historicalPattern": {"type": "STRING"},
            },
            "required": [
                "marketContext",
                "sectorPerformance",
                "newsImpact",
                "tradingActivity",
                "historicalPattern",
            ],
        },
        "premiumInsight": {
            "type": "STRING",
            "description": (
                "A deeper dive into FII flow, order book dynamics, or hidden corporate triggers."
            ),
        },
        "finalTakeaway": {"type": "STRING"},
    },
    "required": [
        "stockName",
        "priceChange",
        "direction",
        "oneLineSummary",
        "cards",
        "finalTakeaway",
        "historicalPrices",
        "premiumInsight",
    ],
}

COMPARISON_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "stockA": STOCK_EXPLANATION_SCHEMA,
        "stockB": STOCK_EXPLANATION_SCHEMA,
        "comparisonSummary": {
            "type": "STRING",
            "description": (
                "A summary of how these two stocks differ in their recent movement drivers."
            ),
        },
    },
    "required": ["stockA", "stockB", "comparisonSummary"],
}

YESTERDAY_PULSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "sessionDate": {"type": "STRING"},
        "nifty": {
            "type": "OBJECT",
            "properties": {
                "change": {"type": "STRING"},
                "direction": {"type": "STRING", "enum": ["up", "down", "neutral"]},
            },
            "required": ["change", "direction"],
        },
        "sensex": {
            "type": "OBJECT",
            "properties": {
                "change": {"type": "STRING"},
                "direction": {"type": "STRING", "enum": ["up", "down", "neutral"]},
            },
            "required": ["change", "direction"],
        },
        "topSector": {"type": "STRING"},
        "majorStory": {"type": "STRING"},
    },
    "required": ["nifty", "sensex", "topSector", "majorStory"],
}

DISCOVERY_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "profileAnalysis": {"type": "STRING"},
        "suggestedStocks": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "name": {"type": "STRING"},
                    "ticker": {"type": "STRING"},
                    "reasoning": {"type": "STRING"},
                    "fundamentals": {"type": "STRING"},
                    "newsImpact": {"type": "STRING"},
                    "risks": {"type": "STRING"},
                    "learningFocus": {"type": "STRING"},
                },
                "required": [
                    "name",
                    "ticker",
                    "reasoning",
                    "fundamentals",
                    "newsImpact",
                    "risks",
                    "learningFocus",
                ],
            },
        },
    },
    "required": ["profileAnalysis", "suggestedStocks"],
}

REBALANCING_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "analysis": {"type": "STRING"},
        "diversificationScore": {"type": "NUMBER"},
        "suggestions": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "title": {"type": "STRING"},
                    "description": {"type": "STRING"},
                    "type": {"type": "STRING", "enum": ["Risk", "Opportunity", "Balance"]},
                },
                "required": ["title", "description", "type"],
            },
        },
    },
    "required": ["analysis", "diversificationScore", "suggestions"],
}
