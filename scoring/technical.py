"""Technical signal: daily change, SMA20 and trend from a close series."""
from typing import Optional
import pandas as pd
from common.logger import get_logger
from common.models import TechnicalSignal
from scoring.trend import TrendRule

logger = get_logger("technical")

SMA_WINDOW = 20


def interpret_technical(change_percent: float, price: float, sma20: float) -> str:
    if change_percent > 2:    message = "Strong upward momentum today. "
    elif change_percent > 0:  message = "Positive movement today. "
    elif change_percent < -2: message = "Significant decline today. "
    elif change_percent < 0:  message = "Slight downward pressure. "
    else:                     message = "Flat trading today. "

    if price > sma20:
        message += "Price is above 20-day average, indicating short-term strength."
    else:
        message += "Price is below 20-day average, suggesting short-term weakness."
    return message


def derive_technical(df: pd.DataFrame, rule: Optional[TrendRule] = None) -> TechnicalSignal:
    """
    Derive the technical signal from daily bars indexed by date.

    Fewer than two closes yields the unavailable signal instead of raising.
    """
    rule = rule or TrendRule()
    if df is None or "close" not in df or len(df) < 2:
        logger.warning("Technical series too short: need at least 2 closes")
        return TechnicalSignal.unavailable("Insufficient price history for technical analysis")

    recent = df.sort_index(ascending=False)
    close = recent["close"].astype(float)
    price = float(close.iloc[0])
    previous = float(close.iloc[1])
    if previous == 0:
        logger.warning("Previous close is zero, change is undefined")
        return TechnicalSignal.unavailable("Invalid price history for technical analysis")
    change = price - previous
    change_percent = 100 * change / previous

    sma20 = float(close.head(SMA_WINDOW).mean())
    averages: dict[int, Optional[float]] = {SMA_WINDOW: sma20}
    for window in rule.windows:
        if window == SMA_WINDOW:
            continue
        averages[window] = float(close.head(window).mean()) if len(close) >= window else None

    volume = float(recent["volume"].iloc[0]) if "volume" in recent else None
    trend = rule.classify(price, averages)
    logger.info(f"price={price:.2f} change={change_percent:+.2f}% sma20={sma20:.2f} trend={trend}")

    return TechnicalSignal(
        price=price,
        previous_close=previous,
        change=change,
        change_percent=change_percent,
        volume=volume,
        sma20=sma20,
        moving_averages=averages,
        trend=trend,
        message=interpret_technical(change_percent, price, sma20),
    )
