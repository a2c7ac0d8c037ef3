"""List and mark-read tools for global and per-repository notifications."""

from pydantic import Field, StrictBool

from ..client import GitHubClient
from ..formatters import format_notification, format_timestamp, success_response
from ..models import DEFAULT_PAGE, DEFAULT_PER_PAGE, DEFAULT_REPO_PER_PAGE, ToolResponse
from ..schemas import NotificationFilter, RepoIdentifier, RepoNotificationFilter, Timestamp, ToolArgs
from ..urls import repo_path
from .base import API_ERRORS, ToolDef, failed


class MarkNotificationsReadArgs(ToolArgs):
    last_read_at: Timestamp | None = Field(
        default=None,
        description=(
            "ISO 8601 timestamp - marks notifications updated at or before this time as read. "
            "Default is current time."
        ),
    )
    read: StrictBool = Field(default=True, description="Whether to mark notifications as read or unread")


class MarkRepoNotificationsReadArgs(RepoIdentifier):
    last_read_at: Timestamp | None = Field(
        default=None,
        description="ISO 8601 timestamp - marks notifications updated at or before this time as read",
    )


def _filter_params(args: NotificationFilter, per_page: int, page: int) -> dict:
    return {
        "all": args.all,
        "participating": args.participating,
        "since": args.since,
        "before": args.before,
        "page": page,
        "per_page": per_page,
    }


def _render_list(notifications: list, per_page: int, page: int, header: str) -> str:
    text = f"{len(notifications)} {header}:\n\n" + "\n\n".join(
        format_notification(n) for n in notifications
    )
    # Without Link headers a full page is the only hint that more exist.
    if len(notifications) == per_page:
        text += (
            "\n\nMore notifications may be available. You can view the next page by "
            f"specifying 'page: {page + 1}' in the request."
        )
    return text


def list_notifications(client: GitHubClient, args: NotificationFilter) -> ToolResponse:
    per_page = args.per_page or DEFAULT_PER_PAGE
    page = args.page or DEFAULT_PAGE
    try:
        notifications = client.get("/notifications", params=_filter_params(args, per_page, page))
    except API_ERRORS as e:
        return failed("Failed to fetch notifications", e)

    if not notifications:
        return success_response("No notifications found with the given criteria.")
    return success_response(_render_list(notifications, per_page, page, "notifications found"))


def list_repo_notifications(client: GitHubClient, args: RepoNotificationFilter) -> ToolResponse:
    full_name = f"{args.owner}/{args.repo}"
    per_page = args.per_page or DEFAULT_REPO_PER_PAGE
    page = args.page or DEFAULT_PAGE
    try:
        notifications = client.get(
            repo_path(args.owner, args.repo, "notifications"),
            params=_filter_params(args, per_page, page),
        )
    except API_ERRORS as e:
        return failed(f"Failed to fetch notifications for repository {full_name}", e)

    if not notifications:
        return success_response(
            f"No notifications found for repository {full_name} with the given criteria."
        )
    return success_response(
        _render_list(notifications, per_page, page, f"notifications found for repository {full_name}")
    )


def _affected(last_read_at: str | None) -> str:
    if not last_read_at:
        return ""
    return f" Notifications updated on or before {format_timestamp(last_read_at)} were affected."


def mark_notifications_read(client: GitHubClient, args: MarkNotificationsReadArgs) -> ToolResponse:
    body = {"read": args.read}
    if args.last_read_at:
        body["last_read_at"] = args.last_read_at
    try:
        response = client.put("/notifications", body=body)
    except API_ERRORS as e:
        return failed("Failed to mark notifications as read", e)

    # 202 Accepted: GitHub marks the rest asynchronously and says so.
    if isinstance(response, dict) and response.get("message"):
        return success_response(response["message"])
    state = "read" if args.read else "unread"
    return success_response(f"Successfully marked notifications as {state}.{_affected(args.last_read_at)}")


def mark_repo_notifications_read(client: GitHubClient, args: MarkRepoNotificationsReadArgs) -> ToolResponse:
    full_name = f"{args.owner}/{args.repo}"
    body = {"last_read_at": args.last_read_at} if args.last_read_at else None
    try:
        response = client.put(repo_path(args.owner, args.repo, "notifications"), body=body)
    except API_ERRORS as e:
        return failed(f"Failed to mark notifications as read for repository {full_name}", e)

    if isinstance(response, dict) and response.get("message"):
        return success_response(response["message"])
    return success_response(
        f"Successfully marked notifications for repository {full_name} as read.{_affected(args.last_read_at)}"
    )


notification_tools = [
    ToolDef(
        name="list-notifications",
        description="List GitHub notifications for the authenticated user",
        args_model=NotificationFilter,
        handler=list_notifications,
    ),
    ToolDef(
        name="mark-notifications-read",
        description="Mark GitHub notifications as read",
        args_model=MarkNotificationsReadArgs,
        handler=mark_notifications_read,
    ),
    ToolDef(
        name="list-repo-notifications",
        description="List GitHub notifications for a specific repository",
        args_model=RepoNotificationFilter,
        handler=list_repo_notifications,
    ),
    ToolDef(
        name="mark-repo-notifications-read",
        description="Mark notifications in a specific repository as read",
        args_model=MarkRepoNotificationsReadArgs,
        handler=mark_repo_notifications_read,
    ),
]
