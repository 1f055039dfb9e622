"""Templated answers to follow-up questions about a previous analysis."""
from common.models import AnalysisResult

FOLLOW_UP_MARKERS = ("why", "risk", "?", "explain", "should i",
                     "what about", "tell me more", "reason")


def is_follow_up(query: str) -> bool:
    text = (query or "").lower()
    return any(marker in text for marker in FOLLOW_UP_MARKERS)


def answer_follow_up(symbol: str, query: str, previous: AnalysisResult) -> str:
    """Build the answer from the previous recommendation only; nothing is recomputed."""
    text = (query or "").lower()
    rec = previous.recommendation

    if "why" in text:
        action = rec.action if rec else "this position"
        answer = f"Here's why I recommend {action} for {symbol}:\n\n"
        if rec and rec.reasons:
            return answer + "\n".join(f"• {r}" for r in rec.reasons)
        return answer + "Based on current market conditions and technical indicators."

    if "risk" in text:
        answer = f"Risk assessment for {symbol}:\n\n"
        answer += f"Risk Level: {rec.risk_level if rec else 'Medium'}\n\n"
        if rec and rec.risk_factors:
            return answer + "\n".join(f"⚠️ {r}" for r in rec.risk_factors)
        return answer + "No major risk factors identified at this time."

    message = rec.message if rec else "the current position looks stable."
    return f"Based on my analysis of {symbol}, {message}"
