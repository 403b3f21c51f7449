"""Error taxonomy for catalog requests."""

from __future__ import annotations

from enum import Enum


class ErrorType(str, Enum):
    """Types of errors that can occur while fetching the catalog."""

    INVALID_URL = "invalid_url"
    INVALID_RESPONSE = "invalid_response"
    HTTP_ERROR = "http_error"
    DECODING_ERROR = "decoding_error"
    UNKNOWN = "unknown"


class HeroAPIError(Exception):
    """Base class for every failure surfaced by :class:`HeroClient`."""

    error_type: ErrorType = ErrorType.UNKNOWN

    @property
    def description(self) -> str:
        """Human-readable message suitable for display next to a retry button."""

        return str(self)


class InvalidURLError(HeroAPIError):
    error_type = ErrorType.INVALID_URL

    def __init__(self, url: str) -> None:
        super().__init__("Invalid URL")
        self.url = url


class InvalidResponseError(HeroAPIError):
    error_type = ErrorType.INVALID_RESPONSE

    def __init__(self) -> None:
        super().__init__("Invalid response from server")


class HTTPStatusError(HeroAPIError):
    error_type = ErrorType.HTTP_ERROR

    def __init__(self, status_code: int) -> None:
        super().__init__(f"HTTP Error: {status_code}")
        self.status_code = status_code


class DecodingError(HeroAPIError):
    error_type = ErrorType.DECODING_ERROR

    def __init__(self, cause: Exception) -> None:
        super().__init__(f"Failed to decode data: {cause}")
        self.cause = cause


class UnknownAPIError(HeroAPIError):
    error_type = ErrorType.UNKNOWN

    def __init__(self, cause: Exception) -> None:
        super().__init__(f"Unknown error: {cause}")
        self.cause = cause


__all__ = [
    "DecodingError",
    "ErrorType",
    "HTTPStatusError",
    "HeroAPIError",
    "InvalidResponseError",
    "InvalidURLError",
    "UnknownAPIError",
]
