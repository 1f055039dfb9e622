"""Base fetcher for JSON-over-HTTP providers."""
import requests
from common.errors import ConfigurationMissing, NetworkFailure, ProviderError
from common.logger import get_logger
from config.settings import FETCH_TIMEOUT


class BaseFetcher:
    provider = "provider"
    key_setting = "API_KEY"

    def __init__(self, api_key: str = "", timeout: float = FETCH_TIMEOUT):
        self.logger = get_logger(self.__class__.__name__)
        self.api_key = api_key
        self.timeout = timeout

    def require_key(self) -> str:
        if not self.api_key:
            raise ConfigurationMissing(self.key_setting)
        return self.api_key

    def get_json(self, url: str, params: dict) -> dict:
        """GET a JSON payload, mapping transport and status failures to provider errors."""
        try:
            resp = requests.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise NetworkFailure(self.provider, str(e)) from e
        if not resp.ok:
            raise ProviderError(self.provider, f"HTTP {resp.status_code}")
        try:
            payload = resp.json()
        except ValueError as e:
            raise ProviderError(self.provider, "invalid JSON response") from e
        if not isinstance(payload, dict):
            raise ProviderError(self.provider, f"unexpected payload type {type(payload).__name__}")
        return payload
