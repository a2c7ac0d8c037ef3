"""Text formatting for notification payloads and tool responses."""

import re
from datetime import datetime
from typing import Any

from .models import ToolResponse

REASON_DESCRIPTIONS = {
    "approval_requested": "You were requested to review and approve a deployment",
    "assign": "You were assigned to the issue",
    "author": "You created the thread",
    "comment": "You commented on the thread",
    "ci_activity": "A GitHub Actions workflow run that you triggered was completed",
    "invitation": "You accepted an invitation to contribute to the repository",
    "manual": "You subscribed to the thread",
    "member_feature_requested": "Organization members have requested to enable a feature",
    "mention": "You were @mentioned in the content",
    "review_requested": "You were requested to review a pull request",
    "security_alert": "GitHub discovered a security vulnerability in your repository",
    "security_advisory_credit": "You were credited for contributing to a security advisory",
    "state_change": "You changed the thread state",
    "subscribed": "You're watching the repository",
    "team_mention": "You were on a team that was mentioned",
}

_PULLS_RE = re.compile(r"/pulls/([0-9]+)")


def convert_api_url_to_html_url(api_url: str) -> str:
    """Map an api.github.com/repos URL to its github.com page.

    Pull request paths are singular on the web (`/pull/N`); issue paths match.
    """
    html_url = api_url.replace("api.github.com/repos", "github.com")
    return _PULLS_RE.sub(r"/pull/\1", html_url)


def reason_description(reason: str | None) -> str:
    return REASON_DESCRIPTIONS.get(reason or "", "Unknown reason")


def format_timestamp(value: str | None) -> str:
    """Render an ISO 8601 timestamp in local time; unparseable input is returned as-is."""
    if not value:
        return "unknown"
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return value
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.strftime("%Y-%m-%d %H:%M:%S")


def format_notification(notification: dict[str, Any]) -> str:
    subject = notification.get("subject") or {}
    repository = notification.get("repository") or {}
    reason = notification.get("reason")
    status = "Unread" if notification.get("unread") else "Read"
    # subject.url is null for some thread types (e.g. check suites)
    if subject.get("url"):
        url = convert_api_url_to_html_url(subject["url"])
    else:
        url = repository.get("html_url", "")

    return "\n".join(
        [
            f"ID: {notification.get('id')}",
            f"Title: {subject.get('title', '')}",
            f"Repository: {repository.get('full_name', '')}",
            f"Type: {subject.get('type', '')}",
            f"Reason: {reason} ({reason_description(reason)})",
            f"Status: {status}",
            f"Updated: {format_timestamp(notification.get('updated_at'))}",
            f"URL: {url}",
        ]
    )


def format_subscription(subscription: dict[str, Any]) -> str:
    lines = [
        f"Subscription Status: {'Subscribed' if subscription.get('subscribed') else 'Not Subscribed'}",
        f"Ignored: {'Yes' if subscription.get('ignored') else 'No'}",
    ]
    if subscription.get("reason"):
        lines.append(f"Reason: {subscription['reason']}")
    lines.append(f"Created: {format_timestamp(subscription.get('created_at'))}")
    return "\n".join(lines)


def format_error(message: str, error: object) -> str:
    if isinstance(error, (BaseException, str)) and str(error):
        return f"{message}: {error}"
    return f"{message}: Unknown error"


def success_response(text: str) -> ToolResponse:
    return ToolResponse(text=text)


def error_response(message: str, error: object) -> ToolResponse:
    return ToolResponse(text=format_error(message, error), is_error=True)
