"""
Notification tool definitions and dispatch.

Each module exports a list of ToolDef objects that are combined into ALL_TOOLS.
"""

import logging
from collections.abc import Mapping
from typing import Any

from ..client import GitHubClient
from ..formatters import error_response
from ..models import ToolResponse
from ..schemas import InvalidArguments, parse_args
from .base import ToolDef
from .notifications import notification_tools
from .repos import repo_tools
from .threads import thread_tools

logger = logging.getLogger(__name__)

ALL_TOOLS: list[ToolDef] = [
    *notification_tools,
    *thread_tools,
    *repo_tools,
]

TOOLS_BY_NAME: dict[str, ToolDef] = {tool.name: tool for tool in ALL_TOOLS}


def dispatch(client: GitHubClient, name: str, arguments: Mapping[str, Any] | None) -> ToolResponse:
    """Validate `arguments` for tool `name` and run it.

    Invalid arguments are reported without touching the network.
    """
    tool = TOOLS_BY_NAME.get(name)
    if tool is None:
        return error_response("Unknown tool", name)
    try:
        args = parse_args(tool.args_model, arguments)
    except InvalidArguments as e:
        logger.info("Rejected arguments for %s: %s", name, e)
        return error_response(f"Invalid arguments for {name}", e)
    return tool.handler(client, args)


__all__ = ["ALL_TOOLS", "TOOLS_BY_NAME", "ToolDef", "dispatch"]
