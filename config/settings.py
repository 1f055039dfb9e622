"""Configuration loader."""
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv(Path(__file__).parent.parent / ".env")

ALPHA_VANTAGE_API_KEY = os.getenv("ALPHA_VANTAGE_API_KEY", "")
NEWS_API_KEY = os.getenv("NEWS_API_KEY", "")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Seconds allowed for each provider call (HTTP timeout and the async bound).
FETCH_TIMEOUT = float(os.getenv("FETCH_TIMEOUT", "8"))

# Moving-average windows the trend rule looks at: "20" or "20,50".
TREND_WINDOWS = tuple(
    int(w) for w in os.getenv("TREND_WINDOWS", "20").split(",") if w.strip()
)

NEWS_PAGE_SIZE = int(os.getenv("NEWS_PAGE_SIZE", "8"))
NEWS_MAX_ARTICLES = int(os.getenv("NEWS_MAX_ARTICLES", "5"))

COMPANY_NAMES = {
    "AAPL": "Apple Inc",
    "TSLA": "Tesla",
    "MSFT": "Microsoft",
    "GOOGL": "Google",
    "AMZN": "Amazon",
    "META": "Meta Facebook",
    "NVDA": "NVIDIA",
    "NFLX": "Netflix",
}
