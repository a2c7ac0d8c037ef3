"""Repository watch settings."""

from typing import Literal

from pydantic import Field

from ..client import GitHubClient
from ..errors import NotFound
from ..formatters import format_timestamp, success_response
from ..models import ToolResponse
from ..schemas import RepoIdentifier
from ..urls import repo_path
from .base import API_ERRORS, ToolDef, failed

SubscriptionAction = Literal["all_activity", "default", "ignore", "get"]


class ManageRepoSubscriptionArgs(RepoIdentifier):
    action: SubscriptionAction = Field(
        description=(
            "The action to perform: all_activity (watch all), default (participating and "
            "@mentions only), ignore (mute notifications), or get (view current settings)"
        )
    )


def _get_subscription(client: GitHubClient, owner: str, repo: str) -> ToolResponse:
    web_url = f"https://github.com/{owner}/{repo}"
    try:
        subscription = client.get(repo_path(owner, repo, "subscription"))
    except NotFound:
        # No explicit subscription: default settings or custom ones set on the web.
        return success_response(
            f"Subscription status for {owner}/{repo}:\n"
            "• Default settings (participating and @mentions only)\n"
            "• or Custom through the GitHub web interface at:\n"
            f"  {web_url}"
        )
    watching = "Watching all activity" if subscription.get("subscribed") else "Not watching"
    muted = "Ignored" if subscription.get("ignored") else "Active"
    return success_response(
        f"Subscription status for {owner}/{repo}:\n"
        f"• API Subscription: {watching}\n"
        f"• Notifications: {muted}\n"
        f"• Created at: {format_timestamp(subscription.get('created_at'))}\n"
        f"• Web Interface: {web_url}"
    )


def manage_repo_subscription(client: GitHubClient, args: ManageRepoSubscriptionArgs) -> ToolResponse:
    owner, repo = args.owner, args.repo
    path = repo_path(owner, repo, "subscription")
    try:
        if args.action == "get":
            return _get_subscription(client, owner, repo)
        if args.action == "all_activity":
            client.put(path, body={"subscribed": True, "ignored": False})
            return success_response(f"Successfully set {owner}/{repo} to watch all activity")
        if args.action == "ignore":
            client.put(path, body={"subscribed": False, "ignored": True})
            return success_response(f"Successfully set {owner}/{repo} to ignore all notifications")
        client.delete(path)
        return success_response(
            f"Successfully set {owner}/{repo} to default settings (participating and @mentions only)"
        )
    except API_ERRORS as e:
        return failed(f"Failed to manage repository subscription for {owner}/{repo}", e)


repo_tools = [
    ToolDef(
        name="manage-repo-subscription",
        description=(
            "Manage repository subscription settings including fine-grained notification preferences"
        ),
        args_model=ManageRepoSubscriptionArgs,
        handler=manage_repo_subscription,
    ),
]
