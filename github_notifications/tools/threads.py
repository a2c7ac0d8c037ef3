"""Tools for single notification threads and their subscriptions."""

from pydantic import Field, StrictBool

from ..client import GitHubClient
from ..errors import NotFound
from ..formatters import format_notification, format_subscription, success_response
from ..models import ToolResponse
from ..schemas import ThreadArgs
from ..urls import thread_path
from .base import API_ERRORS, ToolDef, failed


class SetThreadSubscriptionArgs(ThreadArgs):
    ignored: StrictBool = Field(default=False, description="If true, notifications will be ignored")


def get_thread(client: GitHubClient, args: ThreadArgs) -> ToolResponse:
    try:
        thread = client.get(thread_path(args.thread_id))
    except API_ERRORS as e:
        return failed(f"Failed to fetch thread {args.thread_id}", e)
    return success_response(f"Thread details:\n\n{format_notification(thread)}")


def mark_thread_read(client: GitHubClient, args: ThreadArgs) -> ToolResponse:
    try:
        client.patch(thread_path(args.thread_id))
    except API_ERRORS as e:
        return failed(f"Failed to mark thread {args.thread_id} as read", e)
    return success_response(f"Successfully marked thread {args.thread_id} as read.")


def mark_thread_done(client: GitHubClient, args: ThreadArgs) -> ToolResponse:
    try:
        client.delete(thread_path(args.thread_id))
    except API_ERRORS as e:
        return failed(f"Failed to mark thread {args.thread_id} as done", e)
    return success_response(f"Successfully marked thread {args.thread_id} as done.")


def get_thread_subscription(client: GitHubClient, args: ThreadArgs) -> ToolResponse:
    try:
        subscription = client.get(thread_path(args.thread_id, "subscription"))
    except NotFound:
        return success_response(f"You are not subscribed to thread {args.thread_id}.")
    except API_ERRORS as e:
        return failed(f"Failed to fetch subscription for thread {args.thread_id}", e)
    return success_response(
        f"Subscription status for thread {args.thread_id}:\n\n{format_subscription(subscription)}"
    )


def set_thread_subscription(client: GitHubClient, args: SetThreadSubscriptionArgs) -> ToolResponse:
    try:
        subscription = client.put(
            thread_path(args.thread_id, "subscription"), body={"ignored": args.ignored}
        )
    except API_ERRORS as e:
        return failed(f"Failed to update subscription for thread {args.thread_id}", e)
    status = "ignoring" if args.ignored else "subscribing to"
    return success_response(
        f"Successfully updated subscription by {status} thread {args.thread_id}:\n\n"
        f"{format_subscription(subscription)}"
    )


def delete_thread_subscription(client: GitHubClient, args: ThreadArgs) -> ToolResponse:
    try:
        client.delete(thread_path(args.thread_id, "subscription"))
    except NotFound:
        return success_response(f"You were not subscribed to thread {args.thread_id}.")
    except API_ERRORS as e:
        return failed(f"Failed to unsubscribe from thread {args.thread_id}", e)
    return success_response(f"Successfully unsubscribed from thread {args.thread_id}.")


thread_tools = [
    ToolDef(
        name="get-thread",
        description="Get information about a GitHub notification thread",
        args_model=ThreadArgs,
        handler=get_thread,
    ),
    ToolDef(
        name="mark-thread-read",
        description="Mark a GitHub notification thread as read",
        args_model=ThreadArgs,
        handler=mark_thread_read,
    ),
    ToolDef(
        name="mark-thread-done",
        description="Mark a GitHub notification thread as done",
        args_model=ThreadArgs,
        handler=mark_thread_done,
    ),
    ToolDef(
        name="get-thread-subscription",
        description="Get subscription status for a GitHub notification thread",
        args_model=ThreadArgs,
        handler=get_thread_subscription,
    ),
    ToolDef(
        name="set-thread-subscription",
        description="Subscribe to a GitHub notification thread",
        args_model=SetThreadSubscriptionArgs,
        handler=set_thread_subscription,
    ),
    ToolDef(
        name="delete-thread-subscription",
        description="Unsubscribe from a GitHub notification thread",
        args_model=ThreadArgs,
        handler=delete_thread_subscription,
    ),
]
