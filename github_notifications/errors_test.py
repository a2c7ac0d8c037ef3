"""Unit tests for response classification."""

from datetime import datetime

import httpx
import pytest

from .errors import (
    ErrorKind,
    Forbidden,
    GitHubAPIError,
    NotFound,
    RateLimited,
    Unauthorized,
    ValidationFailed,
    classify_error,
    handle_response,
)

RATE_HEADERS = {
    "x-ratelimit-limit": "5000",
    "x-ratelimit-remaining": "4999",
    "x-ratelimit-reset": "1234567890",
    "x-ratelimit-used": "1",
}


def _response(status_code, json_body=None, headers=None, content=None):
    request = httpx.Request("GET", "https://api.github.com/test")
    if content is not None:
        return httpx.Response(status_code, content=content, headers=headers, request=request)
    if json_body is not None:
        return httpx.Response(status_code, json=json_body, headers=headers, request=request)
    return httpx.Response(status_code, headers=headers, request=request)


def describe_handle_response():
    def describe_success():
        def it_returns_decoded_json():
            assert handle_response(_response(200, {"id": "1"}, RATE_HEADERS)) == {"id": "1"}

        def it_returns_lists():
            assert handle_response(_response(200, [{"id": "1"}])) == [{"id": "1"}]

        def it_returns_empty_dict_for_204():
            assert handle_response(_response(204)) == {}

        def it_ignores_body_on_204():
            assert handle_response(_response(204, content=b'{"unexpected": true}')) == {}

        def it_returns_empty_dict_for_205():
            assert handle_response(_response(205)) == {}

        def it_accepts_responses_without_a_request():
            assert handle_response(httpx.Response(200, json={"id": "1"})) == {"id": "1"}
            with pytest.raises(NotFound):
                handle_response(httpx.Response(404, json={"message": "Not Found"}))

        def it_returns_202_message_body():
            body = {"message": "Unread notifications couldn't be marked in a single request."}
            assert handle_response(_response(202, body)) == body

        def it_raises_generic_error_for_invalid_json():
            with pytest.raises(GitHubAPIError) as exc_info:
                handle_response(_response(200, content=b"<html>"))
            assert exc_info.value.kind is ErrorKind.GENERIC

    def describe_failure():
        def it_classifies_404():
            with pytest.raises(NotFound) as exc_info:
                handle_response(_response(404, {"message": "Not Found"}, RATE_HEADERS))
            assert "Resource not found: Not Found" in str(exc_info.value)
            assert exc_info.value.kind is ErrorKind.NOT_FOUND
            assert exc_info.value.status_code == 404

        def it_classifies_401():
            with pytest.raises(Unauthorized) as exc_info:
                handle_response(_response(401, {"message": "Bad credentials"}, RATE_HEADERS))
            assert "Authentication failed" in exc_info.value.message

        def it_classifies_403_with_no_remaining_quota_as_rate_limited():
            headers = {**RATE_HEADERS, "x-ratelimit-remaining": "0"}
            with pytest.raises(RateLimited) as exc_info:
                handle_response(_response(403, {"message": "API rate limit exceeded"}, headers))
            error = exc_info.value
            assert "GitHub API rate limit exceeded" in error.message
            assert error.reset_at == datetime.fromtimestamp(1234567890).astimezone()
            assert error.reset_at.strftime("%H:%M:%S") in error.message
            assert error.rate_limit.remaining == 0

        def it_substitutes_unknown_error_for_unparseable_bodies():
            with pytest.raises(GitHubAPIError) as exc_info:
                handle_response(_response(500, content=b"oops"))
            assert exc_info.value.message == "GitHub API error (500): Unknown error"

        def it_attaches_the_rate_limit_snapshot():
            with pytest.raises(NotFound) as exc_info:
                handle_response(_response(404, {"message": "Not Found"}, RATE_HEADERS))
            snapshot = exc_info.value.rate_limit
            assert (snapshot.limit, snapshot.remaining, snapshot.reset, snapshot.used) == (
                5000,
                4999,
                1234567890,
                1,
            )


def describe_classify_error():
    def it_treats_403_with_quota_left_as_forbidden():
        error = classify_error(403, {"message": "Resource not accessible"}, RATE_HEADERS)
        assert isinstance(error, Forbidden)
        assert error.message == "Access forbidden: Resource not accessible"

    def it_ignores_rate_limit_wording_without_the_header():
        error = classify_error(403, {"message": "API rate limit exceeded"}, {})
        assert isinstance(error, Forbidden)
        assert not isinstance(error, RateLimited)

    def it_only_trusts_the_exact_zero_string():
        error = classify_error(403, {"message": "x"}, {"x-ratelimit-remaining": "00"})
        assert error.kind is ErrorKind.FORBIDDEN

    def it_uses_epoch_zero_when_reset_header_is_missing():
        error = classify_error(403, {}, {"x-ratelimit-remaining": "0"})
        assert isinstance(error, RateLimited)
        assert error.reset_at == datetime.fromtimestamp(0).astimezone()

    @pytest.mark.parametrize("reset", ["99999999999999", "-99999999999999", "soon"])
    def it_uses_epoch_zero_when_reset_header_is_unusable(reset):
        error = classify_error(
            403, {"message": "x"}, {"x-ratelimit-remaining": "0", "x-ratelimit-reset": reset}
        )
        assert isinstance(error, RateLimited)
        assert error.reset_at == datetime.fromtimestamp(0).astimezone()
        assert error.message.startswith("GitHub API rate limit exceeded. Resets at ")

    def it_includes_upstream_details_for_422():
        details = [{"resource": "Thread", "field": "ignored", "code": "invalid"}]
        error = classify_error(422, {"message": "Invalid request", "errors": details}, {})
        assert isinstance(error, ValidationFailed)
        assert error.details == details
        assert error.message == (
            'Validation failed: Invalid request [{"resource":"Thread","field":"ignored","code":"invalid"}]'
        )

    def it_omits_details_for_422_without_errors():
        error = classify_error(422, {"message": "Invalid request"}, {})
        assert error.message == "Validation failed: Invalid request"
        assert error.details is None

    @pytest.mark.parametrize("status", [400, 409, 500, 502])
    def it_falls_back_to_generic(status):
        error = classify_error(status, {"message": "Boom"}, {})
        assert type(error) is GitHubAPIError
        assert error.kind is ErrorKind.GENERIC
        assert error.message == f"GitHub API error ({status}): Boom"

    def it_defaults_missing_message():
        error = classify_error(404, {}, {})
        assert error.message == "Resource not found: Unknown error"
