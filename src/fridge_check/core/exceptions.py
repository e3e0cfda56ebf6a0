"""Custom exception classes for the gateway and the client."""

from typing import Any


class APIError(Exception):
    """Base exception for API errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        details: Any = None,
        raw: str | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details
        self.raw = raw
        super().__init__(message)

    def to_content(self) -> dict[str, Any]:
        """Error body as sent to clients, optional keys omitted when empty."""
        content: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            content["details"] = self.details
        if self.raw is not None:
            content["raw"] = self.raw
        return content


class RequestValidationError(APIError):
    """Malformed or incomplete analysis request."""

    def __init__(
        self,
        message: str = "Invalid request: provide image or ingredients",
        details: Any = None,
    ):
        super().__init__(message=message, status_code=400, details=details)


class ConfigurationError(APIError):
    """The deployment has no credential for the upstream model."""

    def __init__(self, message: str = "API key not configured", details: Any = None):
        super().__init__(message=message, status_code=500, details=details)


class UpstreamCallError(APIError):
    """The upstream completion service failed or returned an error status."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message=message, status_code=500, details=details)


class ResponseParseError(APIError):
    """The upstream model replied, but not with the expected JSON envelope."""

    def __init__(self, raw: str, message: str = "Could not parse AI response"):
        super().__init__(message=message, status_code=500, raw=raw)


# =============================================================================
# Client-side errors
# =============================================================================


class ClientError(Exception):
    """Base exception for the gateway client."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ClientNetworkError(ClientError):
    """The request never produced a usable response (transport or non-JSON body)."""


class AnalysisFailedError(ClientError):
    """The gateway answered with an error body."""

    def __init__(self, message: str, details: Any = None, raw: str | None = None):
        super().__init__(message)
        self.details = details
        self.raw = raw
