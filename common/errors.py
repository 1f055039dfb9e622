"""Error taxonomy for provider calls and analysis requests."""


class AnalysisError(Exception):
    def __init__(self, message: str, code: str = "ANALYSIS_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ConfigurationMissing(AnalysisError):
    def __init__(self, setting: str):
        super().__init__(f"{setting} not configured", code="CONFIGURATION_MISSING")


class ProviderError(AnalysisError):
    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider} error: {message}", code="PROVIDER_ERROR")


class DataUnavailable(AnalysisError):
    def __init__(self, message: str):
        super().__init__(message, code="DATA_UNAVAILABLE")


class NetworkFailure(AnalysisError):
    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider} request failed: {message}", code="NETWORK_FAILURE")


class SymbolRequired(AnalysisError, ValueError):
    def __init__(self):
        super().__init__("Symbol is required", code="SYMBOL_REQUIRED")
