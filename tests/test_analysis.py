"""Tests for the analysis orchestration, follow-ups, summary and symbol extraction."""
import time
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch
import numpy as np
import pandas as pd
import pytest

from analysis.analyzer import StockAnalyzer
from analysis.followup import answer_follow_up, is_follow_up
from analysis.query import extract_symbol
from analysis.summary import generate_summary
from common.errors import ConfigurationMissing, NetworkFailure, SymbolRequired
from ingest.alpha_vantage import AlphaVantageClient
from ingest.news_api import NewsApiClient
from common.models import (AnalysisResult, FundamentalSignal, NewsArticle, NewsDigest,
                           Recommendation, SentimentSignal, TechnicalSignal)
from scoring.trend import TrendRule


def make_df(closes):
    dates = pd.date_range(end=pd.Timestamp("2026-10-16"), periods=len(closes), freq="D")
    return pd.DataFrame({"close": [float(c) for c in closes],
                         "volume": np.full(len(closes), 1_000.0)}, index=dates)


def make_analyzer(df=None, overview=None, articles=None, timeout=2.0):
    market = MagicMock()
    news = MagicMock()
    market.fetch_daily.return_value = df if df is not None else make_df([100] * 19 + [101.0, 105.0])
    market.fetch_overview.return_value = overview if overview is not None else {"PERatio": "12"}
    news.fetch_articles.return_value = articles if articles is not None else [
        NewsArticle(title="Apple profit beats estimates", url="u1"),
    ]
    return StockAnalyzer(market=market, news=news, trend_rule=TrendRule((20,)), timeout=timeout)


def make_previous(**rec_overrides):
    rec = dict(recommendation="BUY", action="Buy", confidence="Medium", score=2,
               risk_level="Medium", reasons=["Positive price movement", "Reasonable P/E ratio"],
               risk_factors=["Below short-term trend"],
               message="Medium confidence buy recommendation. Moderate risk - consider position sizing carefully.")
    rec.update(rec_overrides)
    return AnalysisResult(symbol="AAPL", timestamp=datetime.now(timezone.utc),
                          technical=TechnicalSignal(price=101, change_percent=1, sma20=100),
                          recommendation=Recommendation(**rec))


class TestStockAnalyzer:
    @pytest.mark.asyncio
    async def test_full_analysis(self):
        analyzer = make_analyzer()
        result = await analyzer.analyze("aapl", "Analyze AAPL")
        assert result.symbol == "AAPL"
        assert not result.is_follow_up
        assert result.technical.price == 105
        assert result.fundamental.pe_ratio == 12
        # profit + beat = 2 → mean 2
        assert result.sentiment.score == 2
        # momentum +2, trend +1 (105 > 1.02 * sma20), P/E +2, sentiment +1
        assert result.recommendation.score == 6
        assert result.recommendation.action == "Strong Buy"
        assert result.summary.startswith("**AAPL Analysis Summary:**")
        analyzer.market.fetch_daily.assert_called_once_with("AAPL")
        analyzer.news.fetch_articles.assert_called_once_with("AAPL")

    @pytest.mark.asyncio
    async def test_empty_symbol_raises(self):
        with pytest.raises(SymbolRequired):
            await make_analyzer().analyze("  ")

    @pytest.mark.asyncio
    async def test_provider_failures_degrade(self):
        analyzer = make_analyzer()
        analyzer.market.fetch_daily.side_effect = NetworkFailure("Alpha Vantage", "down")
        analyzer.market.fetch_overview.side_effect = ConfigurationMissing("ALPHA_VANTAGE_API_KEY")
        analyzer.news.fetch_articles.side_effect = ConfigurationMissing("NEWS_API_KEY")
        result = await analyzer.analyze("MSFT")
        assert not result.technical.is_available
        assert "Unable to fetch technical data" in result.technical.message
        assert not result.fundamental.is_available
        assert not result.sentiment.is_available
        assert not result.news.available
        assert result.recommendation.score == 0
        assert result.recommendation.action == "Hold"

    @pytest.mark.asyncio
    async def test_short_series_unavailable(self):
        result = await make_analyzer(df=make_df([100])).analyze("MSFT")
        assert not result.technical.is_available
        assert result.recommendation.score == 3  # P/E +2, sentiment +1

    @pytest.mark.asyncio
    async def test_timeout_treated_as_unavailable(self):
        analyzer = make_analyzer(timeout=0.05)
        analyzer.market.fetch_overview.side_effect = lambda symbol: time.sleep(0.5) or {}
        result = await analyzer.analyze("AAPL")
        assert not result.fundamental.is_available
        assert "timed out" in result.fundamental.message
        assert result.technical.is_available

    @pytest.mark.asyncio
    async def test_no_articles_neutral(self):
        result = await make_analyzer(articles=[]).analyze("AAPL")
        assert result.sentiment.score == 0
        assert result.sentiment.message == "Neutral sentiment in recent news"
        assert result.news.available

    @pytest.mark.asyncio
    async def test_follow_up_uses_previous(self):
        analyzer = make_analyzer()
        previous = make_previous()
        result = await analyzer.analyze("AAPL", "Why?", previous)
        assert result.is_follow_up
        assert result.recommendation == previous.recommendation
        assert "• Positive price movement" in result.summary
        analyzer.market.fetch_daily.assert_not_called()
        analyzer.news.fetch_articles.assert_not_called()

    @pytest.mark.asyncio
    async def test_follow_up_other_symbol_reanalyzes(self):
        analyzer = make_analyzer()
        result = await analyzer.analyze("MSFT", "why?", make_previous())
        assert not result.is_follow_up
        analyzer.market.fetch_daily.assert_called_once_with("MSFT")

    @pytest.mark.asyncio
    async def test_fetches_run_concurrently(self):
        analyzer = make_analyzer()
        df = analyzer.market.fetch_daily.return_value
        analyzer.market.fetch_daily.side_effect = lambda symbol: time.sleep(0.2) or df
        analyzer.market.fetch_overview.side_effect = lambda symbol: time.sleep(0.2) or {"PERatio": "12"}
        analyzer.news.fetch_articles.side_effect = lambda symbol: time.sleep(0.2) or []
        started = time.perf_counter()
        result = await analyzer.analyze("AAPL")
        elapsed = time.perf_counter() - started
        assert result.technical.is_available and result.fundamental.is_available
        assert elapsed < 0.45

    @pytest.mark.asyncio
    async def test_derivation_error_degrades_one_signal(self):
        bad = pd.DataFrame({"close": ["abc", "def"], "volume": [1.0, 1.0]},
                           index=pd.date_range(end=pd.Timestamp("2026-10-16"), periods=2, freq="D"))
        result = await make_analyzer(df=bad).analyze("AAPL")
        assert not result.technical.is_available
        assert result.fundamental.pe_ratio == 12
        assert result.recommendation is not None


def fake_response(payload, status=200):
    resp = MagicMock()
    resp.ok = status < 400
    resp.status_code = status
    resp.json.return_value = payload
    return resp


class TestMalformedProviderPayloads:
    """Real clients behind a patched HTTP layer."""

    def setup_method(self):
        self.analyzer = StockAnalyzer(market=AlphaVantageClient(api_key="k"),
                                      news=NewsApiClient(api_key="k"), timeout=2.0)

    @staticmethod
    def routed(daily, overview, news):
        def fake_get(url, params=None, timeout=None):
            if params.get("function") == "TIME_SERIES_DAILY":
                return fake_response(daily)
            if params.get("function") == "OVERVIEW":
                return fake_response(overview)
            return fake_response(news)
        return fake_get

    @pytest.mark.asyncio
    async def test_daily_row_without_close(self):
        daily = {"Time Series (Daily)": {"2026-10-16": {"1. open": "1"},
                                         "2026-10-15": {"1. open": "1"}}}
        get = self.routed(daily, {"PERatio": "12"}, {"status": "ok", "articles": []})
        with patch("ingest.base.requests.get", side_effect=get):
            result = await self.analyzer.analyze("AAPL")
        assert not result.technical.is_available
        assert "malformed daily row" in result.technical.message
        assert result.fundamental.pe_ratio == 12
        assert result.sentiment.score == 0
        assert result.recommendation.score == 2

    @pytest.mark.asyncio
    async def test_non_dict_bodies(self):
        get = self.routed(["not", "a", "dict"], {"PERatio": "12"}, "oops")
        with patch("ingest.base.requests.get", side_effect=get):
            result = await self.analyzer.analyze("AAPL")
        assert not result.technical.is_available
        assert not result.news.available
        assert not result.sentiment.is_available
        assert result.fundamental.pe_ratio == 12

    @pytest.mark.asyncio
    async def test_malformed_article_list(self):
        daily = {"Time Series (Daily)": {"2026-10-16": {"4. close": "105"},
                                         "2026-10-15": {"4. close": "100"}}}
        get = self.routed(daily, {"PERatio": "12"}, {"status": "ok", "articles": ["AAPL up"]})
        with patch("ingest.base.requests.get", side_effect=get):
            result = await self.analyzer.analyze("AAPL")
        assert result.technical.price == 105
        assert not result.news.available


class TestFollowUp:
    def test_detection(self):
        assert is_follow_up("Why do you say that")
        assert is_follow_up("What are the risks")
        assert is_follow_up("and tomorrow?")
        assert not is_follow_up("Analyze AAPL")
        assert not is_follow_up("")

    def test_why(self):
        text = answer_follow_up("AAPL", "why", make_previous())
        assert text.startswith("Here's why I recommend Buy for AAPL:")
        assert "• Reasonable P/E ratio" in text

    def test_why_without_reasons(self):
        text = answer_follow_up("AAPL", "why", make_previous(reasons=[]))
        assert text.endswith("Based on current market conditions and technical indicators.")

    def test_risk(self):
        text = answer_follow_up("AAPL", "what's the risk", make_previous())
        assert "Risk Level: Medium" in text
        assert "⚠️ Below short-term trend" in text

    def test_risk_without_factors(self):
        text = answer_follow_up("AAPL", "risk", make_previous(risk_factors=[], risk_level="Low"))
        assert text.endswith("No major risk factors identified at this time.")

    def test_default(self):
        text = answer_follow_up("AAPL", "should i?", make_previous())
        assert text == ("Based on my analysis of AAPL, Medium confidence buy recommendation. "
                        "Moderate risk - consider position sizing carefully.")


class TestSummary:
    def test_section_order(self):
        result = make_previous()
        result.fundamental = FundamentalSignal(pe_ratio=12, market_cap=2.5e12, message="Low P/E.")
        result.sentiment = SentimentSignal(score=0.2, message="Positive sentiment in recent news")
        result.news = NewsDigest(articles=[NewsArticle(title="a")])
        result.technical = TechnicalSignal(price=101, change_percent=1, sma20=100,
                                           trend="Bullish", message="Positive movement today.")
        text = generate_summary(result)
        positions = [text.index(marker) for marker in
                     ("Smart Signal", "Technical", "Fundamentals", "Market Sentiment", "News:")]
        assert positions == sorted(positions)
        assert "Market Cap $2.50T" in text
        assert "(+1.00%)" in text

    def test_unavailable_sections_omitted(self):
        result = AnalysisResult(symbol="X", timestamp=datetime.now(timezone.utc),
                                technical=TechnicalSignal.unavailable("n/a"),
                                fundamental=FundamentalSignal.unavailable("n/a"),
                                sentiment=SentimentSignal.unavailable("No news articles available"))
        text = generate_summary(result)
        assert "Technical" not in text
        assert "Fundamentals" not in text
        assert "No news articles available" in text


class TestExtractSymbol:
    def test_uppercase_ticker(self):
        assert extract_symbol("Analyze TSLA please") == "TSLA"

    def test_skips_pronoun(self):
        assert extract_symbol("Should I buy NVDA") == "NVDA"

    def test_company_name(self):
        assert extract_symbol("what do you think about microsoft") == "MSFT"

    def test_nothing(self):
        assert extract_symbol("hello there") is None
        assert extract_symbol("") is None
