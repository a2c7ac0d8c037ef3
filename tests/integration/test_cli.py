"""Integration tests for the command line entry point."""

import json

import httpx
import pytest

from github_notifications import cli
from github_notifications.settings import get_settings


@pytest.fixture(autouse=True)
def env(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "test-token")
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def patched_client(monkeypatch, client):
    monkeypatch.setattr("github_notifications.client.GitHubClient", lambda settings: client)
    return client


class TestCliTools:
    def test_lists_tool_names(self, capsys):
        cli.main(["tools"])
        out = capsys.readouterr().out.splitlines()
        assert len(out) == 11
        assert out[0].startswith("list-notifications\t")


class TestCliCall:
    def test_coerces_arguments_from_schema(self, capsys, github, patched_client):
        github.respond(200, [])
        cli.main(["call", "list-notifications", "--arg", "all=true", "--arg", "per_page=5"])

        assert dict(github.last.url.params) == {"all": "true", "page": "1", "per_page": "5"}
        assert capsys.readouterr().out.strip() == "No notifications found with the given criteria."

    def test_thread_id_stays_a_string(self, capsys, github, patched_client):
        github.respond(205)
        cli.main(["call", "mark-thread-read", "--arg", "thread_id=123"])
        assert github.last.url.path == "/notifications/threads/123"
        assert "thread 123 as read" in capsys.readouterr().out

    def test_json_arguments(self, capsys, github, patched_client):
        github.respond(200, {"subscribed": True, "ignored": False})
        cli.main(["call", "set-thread-subscription", "--json", json.dumps({"thread_id": "9"})])
        assert json.loads(github.last.content) == {"ignored": False}

    def test_error_exits_nonzero(self, capsys, github, patched_client):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["call", "get-thread", "--arg", "thread_id=abc"])
        assert exc_info.value.code == 1
        assert "Invalid arguments for get-thread" in capsys.readouterr().out
        assert github.requests == []


class TestCliApiSubcommand:
    def test_get_with_params(self, capsys, github, patched_client):
        github.respond(200, [{"id": "1"}])
        cli.main(["api", "notifications", "--param", "per_page=1"])

        assert github.last.url.path == "/notifications"
        assert github.last.url.query == b"per_page=1"
        assert json.loads(capsys.readouterr().out) == [{"id": "1"}]

    def test_put_with_data(self, capsys, github, patched_client):
        github.respond(205)
        cli.main(["api", "notifications", "--method", "PUT", "--data", '{"read": true}'])

        assert github.last.method == "PUT"
        assert json.loads(github.last.content) == {"read": True}
        assert json.loads(capsys.readouterr().out) == {}

    def test_api_error_goes_to_stderr(self, capsys, github, patched_client):
        github.respond(404, {"message": "Not Found"})
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["api", "notifications/threads/1"])
        assert exc_info.value.code == 1
        assert capsys.readouterr().err.strip() == "Error: Resource not found: Not Found"

    def test_unsupported_method_goes_to_stderr(self, capsys, github, patched_client):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["api", "notifications", "--method", "POST"])
        assert exc_info.value.code == 1
        assert capsys.readouterr().err.strip() == "Error: Unsupported HTTP method: POST"
        assert github.requests == []

    def test_transport_error_goes_to_stderr(self, capsys, patched_client):
        def boom(request):
            raise httpx.ConnectError("connection refused", request=request)

        patched_client._client = httpx.Client(transport=httpx.MockTransport(boom))
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["api", "notifications"])
        assert exc_info.value.code == 1
        assert capsys.readouterr().err.strip() == "Error: connection refused"
