"""
Fundamental signal.

Pass-through of the company overview ratios (P/E, dividend yield, market cap,
EPS, book value) with a short interpretation. Alpha Vantage reports missing
values as "None" or "-"; those become None.

Dividend yield stays a fraction as reported (0.035 == 3.5%).
"""
import math
from typing import Any, Optional
from common.logger import get_logger
from common.models import FundamentalSignal

logger = get_logger("fundamental")

OVERVIEW_FIELDS = {
    "pe_ratio": "PERatio",
    "dividend_yield": "DividendYield",
    "market_cap": "MarketCapitalization",
    "eps": "EPS",
    "book_value": "BookValue",
}


def parse_number(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(number) else number


def interpret_fundamentals(pe: Optional[float], div_yield: Optional[float]) -> str:
    message = ""
    if pe is not None and pe > 0:
        if pe < 15:   message += "Low P/E ratio suggests potential value. "
        elif pe > 25: message += "High P/E ratio indicates growth expectations or overvaluation. "
        else:         message += "Moderate P/E ratio. "

    if div_yield is not None and div_yield > 0:
        if div_yield > 0.04:   message += "High dividend yield attractive for income investors."
        elif div_yield > 0.02: message += "Decent dividend yield."
        else:                  message += "Low dividend yield."

    return message.strip() or "Fundamental data analysis complete."


def derive_fundamentals(overview: dict) -> FundamentalSignal:
    values = {field: parse_number(overview.get(key)) for field, key in OVERVIEW_FIELDS.items()}
    logger.info(f"P/E={values['pe_ratio']} yield={values['dividend_yield']} "
                f"cap={values['market_cap']}")
    return FundamentalSignal(
        **values,
        message=interpret_fundamentals(values["pe_ratio"], values["dividend_yield"]),
    )
