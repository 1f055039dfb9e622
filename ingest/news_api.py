"""NewsAPI headlines fetcher."""
from common.errors import ProviderError
from common.models import NewsArticle
from config.settings import COMPANY_NAMES, FETCH_TIMEOUT, NEWS_API_KEY, NEWS_MAX_ARTICLES, NEWS_PAGE_SIZE
from ingest.base import BaseFetcher


class NewsApiClient(BaseFetcher):
    BASE_URL = "https://newsapi.org/v2/everything"
    provider = "NewsAPI"
    key_setting = "NEWS_API_KEY"

    def __init__(self, api_key: str | None = None, timeout: float = FETCH_TIMEOUT,
                 page_size: int = NEWS_PAGE_SIZE, max_articles: int = NEWS_MAX_ARTICLES):
        super().__init__(NEWS_API_KEY if api_key is None else api_key, timeout)
        self.page_size = page_size
        self.max_articles = max_articles

    def fetch_articles(self, symbol: str) -> list[NewsArticle]:
        """Fetch recent English articles mentioning the symbol or its company name."""
        company = COMPANY_NAMES.get(symbol, symbol)
        params = {"q": f'"{company}" OR "{symbol}"', "sortBy": "publishedAt",
                  "pageSize": self.page_size, "language": "en",
                  "apiKey": self.require_key()}
        self.logger.info(f"Fetching news for {symbol}...")
        payload = self.get_json(self.BASE_URL, params)
        if payload.get("status") == "error":
            raise ProviderError(self.provider, payload.get("message", "unknown error"))

        try:
            relevant = [a for a in payload.get("articles") or []
                        if a.get("title") and self._is_relevant(a, symbol, company)]
            self.logger.info(f"{len(relevant)} relevant articles for {symbol}")
            return [NewsArticle(title=a["title"],
                                description=a.get("description"),
                                url=a.get("url"),
                                published_at=a.get("publishedAt"),
                                source=(a.get("source") or {}).get("name"))
                    for a in relevant[:self.max_articles]]
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise ProviderError(self.provider, f"malformed article for {symbol}: {e!r}") from e

    @staticmethod
    def _is_relevant(article: dict, symbol: str, company: str) -> bool:
        text = f"{article.get('title', '')} {article.get('description') or ''}".lower()
        return symbol.lower() in text or company.lower() in text
