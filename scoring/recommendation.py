"""
Recommendation engine.

Additive point scoring over the three signals:

  Momentum     +2 (> 3%)  +1 (> 0%)  -1 (< 0%)  -2 (< -3%)
  Trend        +1 price > 1.02 * SMA20   -1 price < 0.98 * SMA20
  Valuation    +2 P/E < 15   +1 P/E < 25   -1 P/E > 40
  Dividend     +1 yield > 3%
  Sentiment    +1 score > 0.5   -1 score < -0.5

A signal that is missing (or a field of it) skips its rules entirely.
The total maps onto five actions; the risk level depends only on how many
risk factors were raised.
"""
from typing import Optional
from common.logger import get_logger
from common.models import FundamentalSignal, Recommendation, SentimentSignal, TechnicalSignal

logger = get_logger("recommendation")

MAX_REASONS = 4
MAX_RISK_FACTORS = 3

DIVIDEND_YIELD_THRESHOLD = 0.03  # fraction

# (min score, action class, action, confidence), checked top-down
ACTION_THRESHOLDS = [
    (3,  "BUY",  "Strong Buy",  "High"),
    (1,  "BUY",  "Buy",         "Medium"),
    (-1, "HOLD", "Hold",        "Medium"),
    (-3, "SELL", "Sell",        "Medium"),
]
FLOOR_ACTION = ("SELL", "Strong Sell", "High")

RISK_MESSAGES = {
    ("BUY", "Low"):     "Low risk investment with good upside potential.",
    ("BUY", "Medium"):  "Moderate risk - consider position sizing carefully.",
    ("BUY", "High"):    "Higher risk - suitable for aggressive investors only.",
    ("HOLD", "Low"):    "Mixed signals suggest waiting for clearer direction.",
    ("HOLD", "Medium"): "Mixed signals suggest waiting for clearer direction.",
    ("HOLD", "High"):   "Mixed signals suggest waiting for clearer direction.",
    ("SELL", "Low"):    "Consider taking profits or reducing exposure.",
    ("SELL", "Medium"): "Consider taking profits or reducing exposure.",
    ("SELL", "High"):   "High risk of further decline - consider exit strategy.",
}


def action_from_score(score: int) -> tuple[str, str, str]:
    """Return (action class, action, confidence) for a total score."""
    for floor, recommendation, action, confidence in ACTION_THRESHOLDS:
        if score >= floor:
            return recommendation, action, confidence
    return FLOOR_ACTION


def risk_level_from_count(count: int) -> str:
    if count >= 3: return "High"
    if count >= 1: return "Medium"
    return "Low"


def recommendation_message(recommendation: str, confidence: str, risk_level: str) -> str:
    detail = RISK_MESSAGES[(recommendation, risk_level)]
    if recommendation == "HOLD":
        return f"Hold current position. {detail}"
    return f"{confidence} confidence {recommendation.lower()} recommendation. {detail}"


class _Tally:
    def __init__(self):
        self.score = 0
        self.reasons: list[str] = []
        self.risk_factors: list[str] = []

    def add(self, points: int, reason: str, risk: Optional[str] = None):
        self.score += points
        self.reasons.append(reason)
        if risk:
            self.risk_factors.append(risk)


def _score_technical(t: TechnicalSignal, tally: _Tally):
    change = t.change_percent
    if change is not None:
        if change > 3:    tally.add(2, "Strong upward momentum (+3%)")
        elif change > 0:  tally.add(1, "Positive price movement")
        elif change < -3: tally.add(-2, "Significant price decline (-3%)", "Recent sharp decline")
        elif change < 0:  tally.add(-1, "Negative price movement")

    if t.price is not None and t.sma20 is not None:
        if t.price > t.sma20 * 1.02:
            tally.add(1, "Price above 20-day average")
        elif t.price < t.sma20 * 0.98:
            tally.add(-1, "Price below 20-day average", "Below short-term trend")


def _score_fundamental(f: FundamentalSignal, tally: _Tally):
    pe = f.pe_ratio
    if pe is not None and pe > 0:
        if pe < 15:   tally.add(2, "Attractive P/E ratio (value play)")
        elif pe < 25: tally.add(1, "Reasonable P/E ratio")
        elif pe > 40: tally.add(-1, "High P/E ratio (expensive)", "High valuation risk")

    if f.dividend_yield is not None and f.dividend_yield > DIVIDEND_YIELD_THRESHOLD:
        tally.add(1, "Good dividend yield")


def _score_sentiment(s: SentimentSignal, tally: _Tally):
    if s.score > 0.5:
        tally.add(1, "Positive market sentiment")
    elif s.score < -0.5:
        tally.add(-1, "Negative market sentiment", "Poor news sentiment")


def generate_recommendation(technical: Optional[TechnicalSignal],
                            fundamental: Optional[FundamentalSignal],
                            sentiment: Optional[SentimentSignal]) -> Recommendation:
    tally = _Tally()

    if technical is not None and technical.is_available:
        _score_technical(technical, tally)
    else:
        logger.info("Technical signal unavailable, skipping momentum and trend rules")

    if fundamental is not None and fundamental.is_available:
        _score_fundamental(fundamental, tally)
    else:
        logger.info("Fundamental signal unavailable, skipping valuation rules")

    if sentiment is not None and sentiment.is_available:
        _score_sentiment(sentiment, tally)
    else:
        logger.info("Sentiment signal unavailable, skipping sentiment rule")

    recommendation, action, confidence = action_from_score(tally.score)
    risk_level = risk_level_from_count(len(tally.risk_factors))
    logger.info(f"score={tally.score} → {action} ({confidence} confidence, {risk_level} risk)")

    return Recommendation(
        recommendation=recommendation,
        action=action,
        confidence=confidence,
        score=tally.score,
        risk_level=risk_level,
        reasons=tally.reasons[:MAX_REASONS],
        risk_factors=tally.risk_factors[:MAX_RISK_FACTORS],
        message=recommendation_message(recommendation, confidence, risk_level),
    )
