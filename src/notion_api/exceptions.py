"""Exceptions raised by the Notion API client.

Every failure surfaced by :class:`~notion_api.client.NotionClient` is one of a
closed set of exception types rooted at :class:`NotionClientError`:

- :class:`TransportError`: the request never produced an HTTP response.
- :class:`DeserializationError`: a response arrived but could not be decoded.
- :class:`ApiError`: Notion answered with a structured error.
- :class:`RateLimitedError`: Notion throttled the request.

The client never retries; callers decide their own retry policy from these.
"""

import logging
import math
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from enum import StrEnum
from http import HTTPStatus
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class ErrorCode(StrEnum):
    """Error codes documented by the Notion API."""

    INVALID_JSON = "invalid_json"
    INVALID_REQUEST_URL = "invalid_request_url"
    INVALID_REQUEST = "invalid_request"
    INVALID_GRANT = "invalid_grant"
    VALIDATION_ERROR = "validation_error"
    MISSING_VERSION = "missing_version"
    UNAUTHORIZED = "unauthorized"
    RESTRICTED_RESOURCE = "restricted_resource"
    OBJECT_NOT_FOUND = "object_not_found"
    CONFLICT_ERROR = "conflict_error"
    RATE_LIMITED = "rate_limited"
    INTERNAL_SERVER_ERROR = "internal_server_error"
    BAD_GATEWAY = "bad_gateway"
    SERVICE_UNAVAILABLE = "service_unavailable"
    DATABASE_CONNECTION_UNAVAILABLE = "database_connection_unavailable"
    GATEWAY_TIMEOUT = "gateway_timeout"
    UNKNOWN = "unknown"


# Fallback codes for error responses without a JSON body
STATUS_ERROR_CODES: dict[int, ErrorCode] = {
    HTTPStatus.BAD_REQUEST: ErrorCode.INVALID_REQUEST,
    HTTPStatus.UNAUTHORIZED: ErrorCode.UNAUTHORIZED,
    HTTPStatus.FORBIDDEN: ErrorCode.RESTRICTED_RESOURCE,
    HTTPStatus.NOT_FOUND: ErrorCode.OBJECT_NOT_FOUND,
    HTTPStatus.CONFLICT: ErrorCode.CONFLICT_ERROR,
    HTTPStatus.TOO_MANY_REQUESTS: ErrorCode.RATE_LIMITED,
    HTTPStatus.INTERNAL_SERVER_ERROR: ErrorCode.INTERNAL_SERVER_ERROR,
    HTTPStatus.BAD_GATEWAY: ErrorCode.BAD_GATEWAY,
    HTTPStatus.SERVICE_UNAVAILABLE: ErrorCode.SERVICE_UNAVAILABLE,
    HTTPStatus.GATEWAY_TIMEOUT: ErrorCode.GATEWAY_TIMEOUT,
}


class NotionClientError(Exception):
    """Base class for every error raised by the Notion API client."""

    @property
    def kind(self) -> str:
        """Short name of the error kind, used for user-facing output."""
        return type(self).__name__


class TransportError(NotionClientError):
    """Raised when no HTTP response could be obtained.

    Covers DNS resolution, connection, TLS, connection resets and timeouts.
    The underlying httpx exception is available as ``__cause__``.
    """


class DeserializationError(NotionClientError):
    """Raised when a response body does not match the expected schema."""


class ApiError(NotionClientError):
    """Raised when Notion responds with a structured error."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        code: str,
        request_id: str | None = None,
    ) -> None:
        """Initialise the error.

        :param message: Human readable message from Notion.
        :param status: HTTP status code.
        :param code: Notion error code, e.g. ``object_not_found``.
        :param request_id: Notion request ID, if returned.
        """
        super().__init__(f"{code} ({status}): {message}")
        self.message = message
        self.status = status
        self.code = code
        self.request_id = request_id


class RateLimitedError(ApiError):
    """Raised when Notion throttles the request (HTTP 429)."""

    def __init__(
        self,
        message: str,
        *,
        status: int = HTTPStatus.TOO_MANY_REQUESTS,
        code: str = ErrorCode.RATE_LIMITED,
        request_id: str | None = None,
        retry_after: float | None = None,
    ) -> None:
        """Initialise the error.

        :param message: Human readable message from Notion.
        :param status: HTTP status code.
        :param code: Notion error code.
        :param request_id: Notion request ID, if returned.
        :param retry_after: Seconds to wait before retrying, if Notion said so.
        """
        super().__init__(message, status=status, code=code, request_id=request_id)
        self.retry_after = retry_after


def parse_retry_after(value: str | None, *, now: datetime | None = None) -> float | None:
    """Parse a ``Retry-After`` header value into seconds.

    Accepts both forms allowed by RFC 9110: delta-seconds and an HTTP-date.

    :param value: Raw header value.
    :param now: Reference time for HTTP-date values. Defaults to now (UTC).
    :returns: Non-negative number of seconds, or None if absent or unparsable.
    """
    if value is None or not value.strip():
        return None

    value = value.strip()
    try:
        seconds = float(value)
    except ValueError:
        pass
    else:
        if not math.isfinite(seconds):
            logger.debug(f"Non-finite Retry-After header: {value!r}")
            return None
        return max(seconds, 0.0)

    try:
        retry_at = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        logger.debug(f"Unparsable Retry-After header: {value!r}")
        return None

    if retry_at.tzinfo is None:
        retry_at = retry_at.replace(tzinfo=UTC)
    reference = now or datetime.now(UTC)
    return max((retry_at - reference).total_seconds(), 0.0)


def classify_transport_error(error: httpx.TransportError) -> TransportError:
    """Map an httpx transport failure to a :class:`TransportError`.

    :param error: Exception raised by httpx before a response was received.
    :returns: Classified error. Callers raise it ``from error``.
    """
    if isinstance(error, httpx.TimeoutException):
        return TransportError(f"Notion API request timed out: {error}")
    return TransportError(f"Notion API request failed: {error}")


def classify_response(response: httpx.Response) -> ApiError:
    """Map a non-2xx response, or a 2xx error object, to an :class:`ApiError`.

    :param response: Response received from Notion.
    :returns: Classified error, :class:`RateLimitedError` when throttled.
    """
    body = _error_body(response)
    status = _int_field(body, "status") or response.status_code
    code = _str_field(body, "code") or STATUS_ERROR_CODES.get(status, ErrorCode.UNKNOWN)
    message = _str_field(body, "message") or response.text or f"HTTP {status}"
    request_id = _str_field(body, "request_id")

    logger.warning(f"Notion API error: status={status}, code={code}, request_id={request_id}")

    if status == HTTPStatus.TOO_MANY_REQUESTS or code == ErrorCode.RATE_LIMITED:
        return RateLimitedError(
            message,
            status=status,
            code=code,
            request_id=request_id,
            retry_after=parse_retry_after(response.headers.get("Retry-After")),
        )

    return ApiError(message, status=status, code=code, request_id=request_id)


def _error_body(response: httpx.Response) -> dict[str, Any]:
    """Extract the JSON error object from a response, if there is one."""
    try:
        data = response.json()
    except ValueError:
        return {}
    if not isinstance(data, dict):
        return {}
    return data


def _int_field(body: dict[str, Any], name: str) -> int | None:
    """Integer field of an error body, None if missing or of another type."""
    value = body.get(name)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _str_field(body: dict[str, Any], name: str) -> str | None:
    """Non-empty string field of an error body, None if missing or of another type."""
    value = body.get(name)
    if not isinstance(value, str) or not value:
        return None
    return value
