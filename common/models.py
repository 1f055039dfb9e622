"""Core Pydantic models for the stock analysis chat."""
from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional

NA = "N/A"


class TechnicalSignal(BaseModel):
    price: Optional[float] = None
    previous_close: Optional[float] = None
    change: Optional[float] = None
    change_percent: Optional[float] = None
    volume: Optional[float] = None
    sma20: Optional[float] = None
    moving_averages: dict[int, Optional[float]] = {}
    trend: Optional[str] = None
    message: str = ""

    @classmethod
    def unavailable(cls, message: str) -> "TechnicalSignal":
        return cls(message=message)

    @property
    def is_available(self) -> bool:
        return self.price is not None


class FundamentalSignal(BaseModel):
    pe_ratio: Optional[float] = None
    dividend_yield: Optional[float] = None  # fraction: 0.035 == 3.5%
    market_cap: Optional[float] = None
    eps: Optional[float] = None
    book_value: Optional[float] = None
    message: str = ""

    @classmethod
    def unavailable(cls, message: str) -> "FundamentalSignal":
        return cls(message=message)

    @property
    def is_available(self) -> bool:
        return any(v is not None for v in (self.pe_ratio, self.dividend_yield,
                                           self.market_cap, self.eps, self.book_value))


class Headline(BaseModel):
    title: str
    sentiment: int
    url: Optional[str] = None


class SentimentSignal(BaseModel):
    score: Optional[float] = None
    message: str = ""
    headlines: list[Headline] = []

    @classmethod
    def unavailable(cls, message: str) -> "SentimentSignal":
        return cls(message=message)

    @property
    def is_available(self) -> bool:
        return self.score is not None


class NewsArticle(BaseModel):
    title: str
    description: Optional[str] = None
    url: Optional[str] = None
    published_at: Optional[str] = None
    source: Optional[str] = None


class NewsDigest(BaseModel):
    articles: list[NewsArticle] = []
    summary: str = ""
    available: bool = True


class Recommendation(BaseModel):
    recommendation: str          # "BUY" | "HOLD" | "SELL"
    action: str                  # "Strong Buy" ... "Strong Sell"
    confidence: str
    score: int
    risk_level: str
    reasons: list[str] = []
    risk_factors: list[str] = []
    message: str = ""

    @property
    def action_emoji(self) -> str:
        return {"Strong Buy": "🟢🟢", "Buy": "🟢", "Hold": "🟡",
                "Sell": "🔴", "Strong Sell": "🔴🔴"}.get(self.action, "⚪")


class AnalysisResult(BaseModel):
    symbol: str
    timestamp: datetime
    technical: Optional[TechnicalSignal] = None
    fundamental: Optional[FundamentalSignal] = None
    sentiment: Optional[SentimentSignal] = None
    news: Optional[NewsDigest] = None
    recommendation: Optional[Recommendation] = None
    summary: str = ""
    is_follow_up: bool = Field(default=False)
