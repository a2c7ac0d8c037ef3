"""Shared pieces of the tool layer."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import httpx

from ..client import GitHubClient
from ..errors import GitHubAPIError
from ..formatters import error_response
from ..models import ToolResponse
from ..schemas import ToolArgs

logger = logging.getLogger("github_notifications.tools")

# Failures a handler renders instead of raising: classified upstream errors
# and transport errors that never produced a response.
API_ERRORS = (GitHubAPIError, httpx.HTTPError)


@dataclass(frozen=True)
class ToolDef:
    name: str
    description: str
    args_model: type[ToolArgs]
    handler: Callable[[GitHubClient, Any], ToolResponse]

    def input_schema(self) -> dict[str, Any]:
        return self.args_model.model_json_schema()


def failed(message: str, error: Exception) -> ToolResponse:
    logger.error("%s: %s", message, error)
    return error_response(message, error)
