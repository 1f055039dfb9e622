"""Alpha Vantage daily prices & company overview fetcher."""
import pandas as pd
from common.errors import DataUnavailable, ProviderError
from config.settings import ALPHA_VANTAGE_API_KEY, FETCH_TIMEOUT
from ingest.base import BaseFetcher


class AlphaVantageClient(BaseFetcher):
    BASE_URL = "https://www.alphavantage.co/query"
    provider = "Alpha Vantage"
    key_setting = "ALPHA_VANTAGE_API_KEY"

    def __init__(self, api_key: str | None = None, timeout: float = FETCH_TIMEOUT):
        super().__init__(ALPHA_VANTAGE_API_KEY if api_key is None else api_key, timeout)

    def fetch_daily(self, symbol: str) -> pd.DataFrame:
        """Fetch daily closes. Returns DataFrame indexed by date with columns: close, volume."""
        params = {"function": "TIME_SERIES_DAILY", "symbol": symbol,
                  "outputsize": "compact", "apikey": self.require_key()}
        self.logger.info(f"Fetching daily series for {symbol}...")
        payload = self._query(params)
        series = payload.get("Time Series (Daily)")
        if not series:
            raise DataUnavailable(f"No time series data available for {symbol}")
        try:
            rows = [{"timestamp": pd.to_datetime(date_str),
                     "close": float(vals["4. close"]),
                     "volume": float(vals.get("5. volume", 0))}
                    for date_str, vals in series.items()]
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise ProviderError(self.provider, f"malformed daily row for {symbol}: {e!r}") from e
        df = pd.DataFrame(rows).set_index("timestamp").sort_index()
        self.logger.info(f"Got {len(df)} rows for {symbol}")
        return df

    def fetch_overview(self, symbol: str) -> dict:
        """Fetch the company overview (PERatio, DividendYield, MarketCapitalization, ...)."""
        params = {"function": "OVERVIEW", "symbol": symbol, "apikey": self.require_key()}
        self.logger.info(f"Fetching overview for {symbol}...")
        payload = self._query(params)
        if not payload:
            raise DataUnavailable(f"No overview data available for {symbol}")
        return payload

    def _query(self, params: dict) -> dict:
        payload = self.get_json(self.BASE_URL, params)
        if "Error Message" in payload:
            raise ProviderError(self.provider, payload["Error Message"])
        # Rate limiting and premium-only notices come back as 200 with a single note.
        note = payload.get("Information") or payload.get("Note")
        if note and len(payload) == 1:
            raise ProviderError(self.provider, note)
        return payload
