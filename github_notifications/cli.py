"""CLI commands for the GitHub notifications server."""

import argparse
import json
import logging
import sys


def configure_logging(level: str) -> None:
    # stdout carries the MCP protocol when serving; logs go to stderr.
    logging.basicConfig(
        stream=sys.stderr,
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _coerce(schema: dict, key: str, raw: str):
    """Convert a --arg string to the JSON type the tool declares for `key`."""
    prop = schema.get("properties", {}).get(key, {})
    types = {prop.get("type")} | {option.get("type") for option in prop.get("anyOf", [])}
    if "boolean" in types and raw in ("true", "false"):
        return raw == "true"
    if "integer" in types:
        try:
            return int(raw)
        except ValueError:
            return raw
    return raw


def _tool_arguments(args, schema: dict) -> dict:
    arguments = json.loads(args.json) if args.json else {}
    if not isinstance(arguments, dict):
        raise SystemExit("--json must be a JSON object")
    for pair in args.arg:
        key, _, value = pair.partition("=")
        arguments[key] = _coerce(schema, key, value)
    return arguments


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="GitHub notifications over MCP",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log at DEBUG level (default: LOG_LEVEL from the environment)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # serve subcommand
    subparsers.add_parser(
        "serve",
        help="Run the MCP server on stdio (default)",
    )

    # tools subcommand
    subparsers.add_parser(
        "tools",
        help="List available tool names",
    )

    # call subcommand
    call_parser = subparsers.add_parser(
        "call",
        help="Run a single tool and print its result",
    )
    call_parser.add_argument(
        "tool",
        help="Tool name (e.g., list-notifications)",
    )
    call_parser.add_argument(
        "--arg",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Tool argument (repeatable, e.g., --arg thread_id=123 --arg per_page=10)",
    )
    call_parser.add_argument(
        "--json",
        default=None,
        help="Tool arguments as a JSON object (merged under --arg values)",
    )

    # api subcommand
    api_parser = subparsers.add_parser(
        "api",
        help="Make a single raw GitHub API call",
    )
    api_parser.add_argument(
        "endpoint",
        help="API endpoint path (e.g., notifications/threads/123)",
    )
    api_parser.add_argument(
        "--param",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Query parameter (repeatable, e.g., --param per_page=100)",
    )
    api_parser.add_argument(
        "--method",
        default="GET",
        help="HTTP method (default: GET)",
    )
    api_parser.add_argument(
        "--data",
        default=None,
        help="JSON request body (PUT/PATCH)",
    )

    args = parser.parse_args(argv)

    from .settings import get_settings

    settings = get_settings()
    configure_logging("DEBUG" if args.verbose else settings.log_level)

    if args.command in (None, "serve"):
        from .server import run

        run(settings)
    elif args.command == "tools":
        from .tools import ALL_TOOLS

        for tool in ALL_TOOLS:
            print(f"{tool.name}\t{tool.description}")
    elif args.command == "call":
        from .client import GitHubClient
        from .tools import TOOLS_BY_NAME, dispatch

        tool = TOOLS_BY_NAME.get(args.tool)
        arguments = _tool_arguments(args, tool.input_schema() if tool else {})
        with GitHubClient(settings) as client:
            result = dispatch(client, args.tool, arguments)
        print(result.text)
        if result.is_error:
            sys.exit(1)
    elif args.command == "api":
        import httpx

        from .client import GitHubClient
        from .errors import GitHubAPIError

        params = {}
        for p in args.param:
            k, _, v = p.partition("=")
            params[k] = v
        body = json.loads(args.data) if args.data else None

        with GitHubClient(settings) as client:
            try:
                result = client.request(args.method, args.endpoint, body=body, params=params or None)
            except (GitHubAPIError, httpx.HTTPError, ValueError) as e:
                print(f"Error: {e}", file=sys.stderr)
                sys.exit(1)
        json.dump(result, sys.stdout, indent=2)
        sys.stdout.write("\n")


if __name__ == "__main__":
    main()
