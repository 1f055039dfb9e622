"""Pull a ticker symbol out of a chat message."""
import re
from typing import Optional

SYMBOL_RE = re.compile(r"\b[A-Z]{1,5}\b")

# Uppercase words that show up in questions but are never meant as tickers.
NOT_SYMBOLS = {"I", "A", "OK"}

COMPANY_TICKERS = {
    "apple": "AAPL",
    "tesla": "TSLA",
    "microsoft": "MSFT",
    "google": "GOOGL",
    "amazon": "AMZN",
    "meta": "META",
    "netflix": "NFLX",
    "nvidia": "NVDA",
}


def extract_symbol(message: str) -> Optional[str]:
    if not message:
        return None
    for candidate in SYMBOL_RE.findall(message):
        if candidate not in NOT_SYMBOLS:
            return candidate
    lower = message.lower()
    for company, ticker in COMPANY_TICKERS.items():
        if company in lower:
            return ticker
    return None
