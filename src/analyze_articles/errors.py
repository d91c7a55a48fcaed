"""Errors raised by the authenticated service clients."""

from __future__ import annotations

from enum import Enum

import requests


class FailureCategory(Enum):
    """Why a call to an external service failed."""

    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"
    BAD_GATEWAY = "bad_gateway"
    SERVICE_UNAVAILABLE = "service_unavailable"
    HTTP_ERROR = "http_error"
    NO_RESPONSE = "no_response"
    REQUEST_ERROR = "request_error"

    @classmethod
    def from_status(cls, status_code: int) -> FailureCategory:
        if status_code == 401:
            return cls.UNAUTHORIZED
        if status_code == 403:
            return cls.FORBIDDEN
        if status_code == 404:
            return cls.NOT_FOUND
        if status_code == 502:
            return cls.BAD_GATEWAY
        if status_code == 503:
            return cls.SERVICE_UNAVAILABLE
        if 500 <= status_code < 600:
            return cls.SERVER_ERROR
        return cls.HTTP_ERROR

    def describe(self, url: str, status_code: int | None = None) -> str:
        """Human-readable message for operators."""
        if self is FailureCategory.UNAUTHORIZED:
            return "Authentication failed. Please check your token."
        if self is FailureCategory.FORBIDDEN:
            return "Access forbidden. Check your permissions."
        if self is FailureCategory.NOT_FOUND:
            return f"Endpoint not found: {url}"
        if self is FailureCategory.SERVER_ERROR:
            return "Server error. The API is experiencing issues."
        if self is FailureCategory.BAD_GATEWAY:
            return "Bad gateway. The API server might be down."
        if self is FailureCategory.SERVICE_UNAVAILABLE:
            return "Service unavailable. Please try again later."
        if self is FailureCategory.NO_RESPONSE:
            return "No response from server. Please check your connection and API URL."
        if self is FailureCategory.REQUEST_ERROR:
            return f"Could not build request for {url}."
        return f"API request failed with status {status_code}"


class AuthError(Exception):
    """The identity endpoint could not issue a token."""


class ServiceError(Exception):
    """A call to an external service failed."""

    def __init__(
        self,
        category: FailureCategory,
        message: str,
        status_code: int | None = None,
        url: str | None = None,
    ):
        self.category = category
        self.status_code = status_code
        self.url = url
        super().__init__(message)

    @classmethod
    def from_request_exception(cls, exc: requests.RequestException, url: str) -> ServiceError:
        """Classify a requests exception into a failure category."""
        response = getattr(exc, "response", None)
        if response is not None:
            category = FailureCategory.from_status(response.status_code)
            return cls(category, category.describe(url, response.status_code), response.status_code, url)

        if isinstance(exc, (requests.ConnectionError, requests.Timeout)):
            category = FailureCategory.NO_RESPONSE
            return cls(category, category.describe(url), url=url)

        category = FailureCategory.REQUEST_ERROR
        return cls(category, f"{category.describe(url)} {exc}", url=url)


class DispatchError(ServiceError):
    """The analysis service rejected or did not answer a request."""


class AnalysedFilesError(ServiceError):
    """The previously-analysed files query failed."""


class RetryExhaustedError(Exception):
    """All retry attempts failed. Carries the last underlying error."""

    def __init__(self, attempts: int, last_error: Exception):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(str(last_error))

    @property
    def category(self) -> FailureCategory | None:
        """Category of the last error, if it was a service error."""
        return getattr(self.last_error, "category", None)
