"""Summary text for an analysis. Sections render in a fixed order."""
from typing import Optional
from common.models import NA, AnalysisResult


def _money(value: Optional[float]) -> str:
    return NA if value is None else f"{value:,.2f}"


def _market_cap(value: Optional[float]) -> str:
    if value is None:
        return NA
    for size, suffix in ((1e12, "T"), (1e9, "B"), (1e6, "M")):
        if abs(value) >= size:
            return f"${value / size:.2f}{suffix}"
    return f"${value:,.0f}"


def generate_summary(analysis: AnalysisResult) -> str:
    """
    Render recommendation, technical, fundamentals, sentiment, news count.

    Unavailable technical/fundamental sections are left out.
    """
    lines = [f"**{analysis.symbol} Analysis Summary:**", ""]

    rec = analysis.recommendation
    if rec is not None:
        lines.append(f"🎯 **Smart Signal:** {rec.action_emoji} {rec.action} "
                     f"({rec.confidence} confidence, {rec.risk_level} risk)")
        lines.append(rec.message)
        lines.append("")

    tech = analysis.technical
    if tech is not None and tech.is_available:
        change = NA
        if tech.change_percent is not None:
            change = f"{'+' if tech.change_percent > 0 else ''}{tech.change_percent:.2f}%"
        lines.append(f"📈 **Technical:** ${_money(tech.price)} ({change}), "
                     f"trend {tech.trend or NA}")
        lines.append(tech.message)
        lines.append("")

    fund = analysis.fundamental
    if fund is not None and fund.pe_ratio is not None:
        lines.append(f"📊 **Fundamentals:** P/E {fund.pe_ratio:.2f}, "
                     f"Market Cap {_market_cap(fund.market_cap)}")
        lines.append(fund.message)
        lines.append("")

    if analysis.sentiment is not None:
        lines.append(f"📰 **Market Sentiment:** {analysis.sentiment.message}")

    news = analysis.news
    if news is not None and news.articles:
        lines.append(f"🗞 **News:** {len(news.articles)} recent articles found")

    return "\n".join(lines).rstrip() + "\n"
