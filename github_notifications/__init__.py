"""Expose GitHub notifications to tool-calling hosts over MCP.

The core is the request layer: validated identifiers, URL building, an httpx
client with fixed GitHub headers, and a classifier that turns failed responses
into typed errors.
"""

__version__ = "0.1.0"

from .cli import main
from .client import GitHubClient
from .errors import (
    ErrorKind,
    Forbidden,
    GitHubAPIError,
    NotFound,
    RateLimited,
    Unauthorized,
    ValidationFailed,
)
from .models import RateLimit, ToolResponse
from .schemas import FieldError, InvalidArguments

__all__ = [
    "main",
    "GitHubClient",
    "ErrorKind",
    "Forbidden",
    "GitHubAPIError",
    "NotFound",
    "RateLimited",
    "Unauthorized",
    "ValidationFailed",
    "RateLimit",
    "ToolResponse",
    "FieldError",
    "InvalidArguments",
]

if __name__ == "__main__":
    main()
