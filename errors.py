from typing import Any, Dict, Optional


class ServiceError(Exception):
    """Base error surfaced to API callers as JSON ``{error, details}``."""

    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"error": self.message}
        if self.details:
            out["details"] = self.details
        return out


class ValidationError(ServiceError):
    status_code = 400


class AuthError(ServiceError):
    status_code = 401


class UpstreamError(ServiceError):
    """Completion provider answered non-2xx or could not be reached."""

    status_code = 500


class FetchError(ServiceError):
    """A site page could not be retrieved."""

    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None, url: Optional[str] = None):
        super().__init__(message, details)
        self.url = url
