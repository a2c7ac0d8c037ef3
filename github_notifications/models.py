"""Data models and constants for the notifications API."""

from dataclasses import dataclass

from . import __version__

API_BASE = "https://api.github.com"
API_VERSION = "2022-11-28"
MEDIA_TYPE = "application/vnd.github+json"
USER_AGENT = f"github-notifications-mcp/{__version__}"

DEFAULT_PER_PAGE = 50  # /notifications
DEFAULT_REPO_PER_PAGE = 30  # /repos/{owner}/{repo}/notifications
DEFAULT_PAGE = 1


def _header_int(headers, name: str) -> int | None:
    value = headers.get(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


@dataclass(frozen=True)
class RateLimit:
    """Rate-limit snapshot read from a single response's headers."""

    limit: int | None = None
    remaining: int | None = None
    reset: int | None = None  # epoch seconds
    used: int | None = None

    @classmethod
    def from_headers(cls, headers) -> "RateLimit":
        return cls(
            limit=_header_int(headers, "x-ratelimit-limit"),
            remaining=_header_int(headers, "x-ratelimit-remaining"),
            reset=_header_int(headers, "x-ratelimit-reset"),
            used=_header_int(headers, "x-ratelimit-used"),
        )


@dataclass
class ToolResponse:
    """Text result handed back to the tool-calling host."""

    text: str
    is_error: bool = False
