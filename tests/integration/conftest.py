"""Fixtures for tool-level tests: a real GitHubClient over httpx.MockTransport."""

import json

import httpx
import pytest

from github_notifications.client import GitHubClient
from github_notifications.settings import Settings


class FakeGitHub:
    """Records requests and replays queued responses (200 {} when empty)."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.queue: list[httpx.Response] = []

    def respond(self, status_code=200, json_body=None, headers=None):
        if json_body is None:
            self.queue.append(httpx.Response(status_code, headers=headers))
        else:
            self.queue.append(httpx.Response(status_code, json=json_body, headers=headers))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.queue:
            return self.queue.pop(0)
        return httpx.Response(200, json={})

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content) if self.last.content else None


@pytest.fixture
def github():
    return FakeGitHub()


@pytest.fixture
def client(github):
    c = GitHubClient(Settings(github_token="test-token"), transport=httpx.MockTransport(github))
    yield c
    c.close()


def _notification(i=1, **overrides):
    notification = {
        "id": str(i),
        "unread": True,
        "reason": "review_requested",
        "updated_at": "2024-01-15T10:30:00Z",
        "subject": {
            "title": f"PR {i}",
            "url": f"https://api.github.com/repos/nodejs/node/pulls/{i}",
            "type": "PullRequest",
        },
        "repository": {"full_name": "nodejs/node", "html_url": "https://github.com/nodejs/node"},
    }
    notification.update(overrides)
    return notification


@pytest.fixture
def make_notification():
    return _notification
