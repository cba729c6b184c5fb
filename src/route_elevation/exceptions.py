"""Custom exception hierarchy for the application."""

NO_ELEVATION_DATA = "No elevation data"


class AppError(Exception):
    """Base exception for the application."""

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


class NetworkError(AppError):
    """Raised when a provider call fails at the transport level.

    Covers connection failures, timeouts and non-success HTTP statuses.
    """

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(f"{provider}: {message}", code="NETWORK_ERROR")
        self.provider = provider


class ParseError(AppError):
    """Raised when a provider response does not match its expected schema."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(f"{provider}: {message}", code="PARSE_ERROR")
        self.provider = provider


class DataError(AppError):
    """Raised when a well-formed response has no elevation for one point."""

    def __init__(self, latitude: float, longitude: float) -> None:
        super().__init__(NO_ELEVATION_DATA, code="NO_ELEVATION_DATA")
        self.latitude = latitude
        self.longitude = longitude


class ProviderConfigurationError(AppError):
    """Raised when a provider cannot issue requests at all."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="PROVIDER_CONFIGURATION")


class MissingCredentialError(ProviderConfigurationError):
    """Raised when a credential-gated provider has no credential."""

    def __init__(self, provider: str) -> None:
        super().__init__(f"{provider}: no API key configured")
        self.provider = provider


class ExhaustedProvidersError(AppError):
    """Raised when every provider, the terminal one included, is unusable."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="PROVIDERS_EXHAUSTED")


class InvalidItineraryError(AppError):
    """Raised when itinerary input is malformed or out of range."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="INVALID_ITINERARY")
