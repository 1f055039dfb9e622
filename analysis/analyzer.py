"""
Stock analysis orchestration.

Fetches daily prices, the company overview and recent news concurrently,
derives the three signals, scores a recommendation and renders the summary.
Every provider failure (missing key, error payload, empty data, network
error, timeout) degrades only its own signal to "unavailable"; the analysis
itself fails only for an empty symbol.
"""
import asyncio
from datetime import datetime, timezone
from typing import Callable, Optional, TypeVar

from analysis.followup import answer_follow_up, is_follow_up
from analysis.summary import generate_summary
from common.errors import AnalysisError, SymbolRequired
from common.logger import get_logger
from common.models import (AnalysisResult, FundamentalSignal, NewsDigest,
                           SentimentSignal, TechnicalSignal)
from config.settings import FETCH_TIMEOUT
from ingest.alpha_vantage import AlphaVantageClient
from ingest.news_api import NewsApiClient
from scoring.fundamental import derive_fundamentals
from scoring.recommendation import generate_recommendation
from scoring.sentiment import derive_sentiment
from scoring.technical import derive_technical
from scoring.trend import TrendRule

logger = get_logger("analyzer")

T = TypeVar("T")


class StockAnalyzer:
    def __init__(self,
                 market: Optional[AlphaVantageClient] = None,
                 news: Optional[NewsApiClient] = None,
                 trend_rule: Optional[TrendRule] = None,
                 timeout: float = FETCH_TIMEOUT):
        self.market = market or AlphaVantageClient()
        self.news = news or NewsApiClient()
        self.trend_rule = trend_rule or TrendRule()
        self.timeout = timeout

    async def analyze(self, symbol: str, query: str = "",
                      previous: Optional[AnalysisResult] = None) -> AnalysisResult:
        symbol = (symbol or "").strip().upper()
        if not symbol:
            raise SymbolRequired()

        if previous is not None and previous.symbol == symbol and is_follow_up(query):
            logger.info(f"Follow-up on {symbol}: {query!r}")
            return AnalysisResult(
                symbol=symbol,
                timestamp=datetime.now(timezone.utc),
                technical=previous.technical,
                fundamental=previous.fundamental,
                sentiment=previous.sentiment,
                news=previous.news,
                recommendation=previous.recommendation,
                summary=answer_follow_up(symbol, query, previous),
                is_follow_up=True,
            )

        logger.info(f"Analyzing {symbol}...")
        technical, fundamental, news = await asyncio.gather(
            self._technical(symbol),
            self._fundamental(symbol),
            self._news(symbol),
        )
        if news.available:
            sentiment = derive_sentiment(news.articles)
        else:
            sentiment = SentimentSignal.unavailable("No news articles available for sentiment analysis")

        result = AnalysisResult(
            symbol=symbol,
            timestamp=datetime.now(timezone.utc),
            technical=technical,
            fundamental=fundamental,
            sentiment=sentiment,
            news=news,
            recommendation=generate_recommendation(technical, fundamental, sentiment),
        )
        result.summary = generate_summary(result)
        logger.info(f"{symbol} → {result.recommendation.action} (score {result.recommendation.score})")
        return result

    async def _fetch(self, fn: Callable[[str], T], symbol: str) -> T:
        return await asyncio.wait_for(asyncio.to_thread(fn, symbol), self.timeout)

    async def _technical(self, symbol: str) -> TechnicalSignal:
        try:
            df = await self._fetch(self.market.fetch_daily, symbol)
            return derive_technical(df, self.trend_rule)
        except asyncio.TimeoutError:
            logger.warning(f"Daily series for {symbol} timed out after {self.timeout}s")
            return TechnicalSignal.unavailable("Unable to fetch technical data: request timed out")
        except AnalysisError as e:
            logger.warning(f"Technical data failed for {symbol}: {e}")
            return TechnicalSignal.unavailable(f"Unable to fetch technical data: {e}")
        except Exception as e:
            logger.error(f"Technical analysis error for {symbol}: {e!r}")
            return TechnicalSignal.unavailable("Unable to fetch technical data")

    async def _fundamental(self, symbol: str) -> FundamentalSignal:
        try:
            overview = await self._fetch(self.market.fetch_overview, symbol)
            return derive_fundamentals(overview)
        except asyncio.TimeoutError:
            logger.warning(f"Overview for {symbol} timed out after {self.timeout}s")
            return FundamentalSignal.unavailable("Unable to fetch fundamental data: request timed out")
        except AnalysisError as e:
            logger.warning(f"Fundamental data failed for {symbol}: {e}")
            return FundamentalSignal.unavailable(f"Unable to fetch fundamental data: {e}")
        except Exception as e:
            logger.error(f"Fundamental analysis error for {symbol}: {e!r}")
            return FundamentalSignal.unavailable("Unable to fetch fundamental data")

    async def _news(self, symbol: str) -> NewsDigest:
        try:
            articles = await self._fetch(self.news.fetch_articles, symbol)
            return NewsDigest(articles=articles,
                              summary=f"Found {len(articles)} relevant news articles about {symbol}")
        except asyncio.TimeoutError:
            logger.warning(f"News for {symbol} timed out after {self.timeout}s")
            return NewsDigest(summary="Unable to fetch news data: request timed out", available=False)
        except AnalysisError as e:
            logger.warning(f"News failed for {symbol}: {e}")
            return NewsDigest(summary=f"Unable to fetch news data: {e}", available=False)
        except Exception as e:
            logger.error(f"News analysis error for {symbol}: {e!r}")
            return NewsDigest(summary="Unable to fetch news data", available=False)


async def analyze(symbol: str, query: str = "",
                  previous: Optional[AnalysisResult] = None) -> AnalysisResult:
    """Analyze with the default providers from settings."""
    return await StockAnalyzer().analyze(symbol, query, previous)
