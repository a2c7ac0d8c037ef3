"""Classified GitHub API errors and the response classifier."""

import json
import logging
from datetime import datetime
from enum import Enum
from typing import Any

import httpx

from .models import RateLimit

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = {"message": "Unknown error"}


class ErrorKind(str, Enum):
    UNAUTHORIZED = "unauthorized"
    RATE_LIMITED = "rate_limited"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    VALIDATION_FAILED = "validation_failed"
    GENERIC = "generic"


class GitHubAPIError(Exception):
    """A non-2xx GitHub response.

    Used directly for statuses without a dedicated subclass; callers branch on
    the class or on `kind`, never on the message text.
    """

    kind = ErrorKind.GENERIC

    def __init__(self, status_code: int, message: str, rate_limit: RateLimit | None = None):
        self.status_code = status_code
        self.message = message
        self.rate_limit = rate_limit or RateLimit()
        super().__init__(message)


class Unauthorized(GitHubAPIError):
    kind = ErrorKind.UNAUTHORIZED


class RateLimited(GitHubAPIError):
    """Primary rate limit exhausted; `reset_at` is the local reset time."""

    kind = ErrorKind.RATE_LIMITED

    def __init__(self, status_code, message, reset_at: datetime, rate_limit=None):
        self.reset_at = reset_at
        super().__init__(status_code, message, rate_limit)


class Forbidden(GitHubAPIError):
    kind = ErrorKind.FORBIDDEN


class NotFound(GitHubAPIError):
    kind = ErrorKind.NOT_FOUND


class ValidationFailed(GitHubAPIError):
    """422 from GitHub. `details` holds the upstream per-field `errors` list."""

    kind = ErrorKind.VALIDATION_FAILED

    def __init__(self, status_code, message, details: list | None = None, rate_limit=None):
        self.details = details
        super().__init__(status_code, message, rate_limit)


def _reset_time(reset_header: str | None) -> datetime:
    try:
        return datetime.fromtimestamp(int(reset_header or 0)).astimezone()
    except (ValueError, OverflowError, OSError):
        # Unparseable or outside the platform's datetime range.
        return datetime.fromtimestamp(0).astimezone()


def _error_body(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return dict(UNKNOWN_ERROR)
    if not isinstance(body, dict):
        return dict(UNKNOWN_ERROR)
    return body


def classify_error(status_code: int, body: dict[str, Any], headers) -> GitHubAPIError:
    """Map a failed response onto the error taxonomy.

    Rate limiting is decided solely by `x-ratelimit-remaining` being "0"; a 403
    without that header is `Forbidden` whatever its message says.
    """
    rate_limit = RateLimit.from_headers(headers)
    message = body.get("message", UNKNOWN_ERROR["message"])

    if status_code == 401:
        return Unauthorized(
            status_code, "Authentication failed. Please check your GitHub token.", rate_limit
        )
    if status_code == 403:
        if headers.get("x-ratelimit-remaining") == "0":
            reset_at = _reset_time(headers.get("x-ratelimit-reset"))
            return RateLimited(
                status_code,
                f"GitHub API rate limit exceeded. Resets at {reset_at:%H:%M:%S}",
                reset_at=reset_at,
                rate_limit=rate_limit,
            )
        return Forbidden(status_code, f"Access forbidden: {message}", rate_limit)
    if status_code == 404:
        return NotFound(status_code, f"Resource not found: {message}", rate_limit)
    if status_code == 422:
        details = body.get("errors")
        text = f"Validation failed: {message}"
        if details:
            text = f"{text} {json.dumps(details, separators=(',', ':'))}"
        return ValidationFailed(status_code, text, details=details, rate_limit=rate_limit)
    return GitHubAPIError(status_code, f"GitHub API error ({status_code}): {message}", rate_limit)


def handle_response(response: httpx.Response) -> Any:
    """Return the decoded body of a 2xx response or raise a classified error."""
    rate_limit = RateLimit.from_headers(response.headers)
    try:
        request = response.request
    except RuntimeError:
        # Responses built without a request (e.g. in tests) have nothing to report.
        request = None
    logger.debug(
        "GitHub API call: %s %s -> %s [Rate limit: %s/%s]",
        request.method if request else "-",
        request.url if request else "-",
        response.status_code,
        rate_limit.remaining,
        rate_limit.limit,
    )

    if response.is_success:
        # 205 Reset Content carries no body either.
        if response.status_code in (204, 205) or not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            raise GitHubAPIError(
                response.status_code,
                f"GitHub API error ({response.status_code}): Invalid JSON in response body",
                rate_limit,
            ) from None

    error = classify_error(response.status_code, _error_body(response), response.headers)
    if isinstance(error, RateLimited):
        logger.warning("GitHub rate limit exhausted; resets at %s", error.reset_at.isoformat())
    raise error
