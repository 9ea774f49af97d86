from datetime import datetime

import pytest

from git_insight.clients.errors.github import (
    ErrorKind,
    ForbiddenError,
    NetworkError,
    NotFoundError,
    RateLimitedError,
    ServiceUnavailableError,
    UnexpectedError,
    UnexpectedStatusError,
    classify_error_kind,
    error_for_status,
    format_reset_time,
)

RESET_EPOCH = "1700000000"


@pytest.mark.parametrize(
    ("status_code", "headers", "expected_kind"),
    [
        (404, {}, ErrorKind.NOT_FOUND),
        (403, {"x-ratelimit-remaining": "0", "x-ratelimit-reset": RESET_EPOCH}, ErrorKind.RATE_LIMITED),
        (403, {"X-RateLimit-Remaining": "0"}, ErrorKind.RATE_LIMITED),
        (403, {"x-ratelimit-remaining": "12"}, ErrorKind.FORBIDDEN),
        (403, {}, ErrorKind.FORBIDDEN),
        (500, {}, ErrorKind.SERVICE_UNAVAILABLE),
        (503, {}, ErrorKind.SERVICE_UNAVAILABLE),
        (418, {}, ErrorKind.UNEXPECTED_STATUS),
        (422, {"x-ratelimit-remaining": "0"}, ErrorKind.UNEXPECTED_STATUS),
        (301, {}, ErrorKind.UNEXPECTED_STATUS),
    ],
)
def test_classify_error_kind(status_code: int, headers: dict[str, str], expected_kind: ErrorKind):
    assert classify_error_kind(status_code=status_code, headers=headers) is expected_kind


class TestFormatResetTime:
    def test_epoch(self):
        assert format_reset_time(RESET_EPOCH) == datetime.fromtimestamp(int(RESET_EPOCH)).strftime("%H:%M")  # noqa: DTZ006

    def test_missing(self):
        assert format_reset_time(None) == "later"

    def test_unparsable(self):
        assert format_reset_time("soon") == "later"


class TestErrorForStatus:
    def test_not_found(self):
        error = error_for_status(status_code=404, headers={})
        assert isinstance(error, NotFoundError)
        assert error.message == "User not found. Please check the username and try again."

    def test_rate_limited(self):
        error = error_for_status(status_code=403, headers={"x-ratelimit-remaining": "0", "x-ratelimit-reset": RESET_EPOCH})
        assert isinstance(error, RateLimitedError)
        assert error.reset_at == format_reset_time(RESET_EPOCH)
        assert error.message == f"API rate limit exceeded. Reset at {format_reset_time(RESET_EPOCH)}."

    def test_rate_limited_without_reset(self):
        error = error_for_status(status_code=403, headers={"x-ratelimit-remaining": "0"})
        assert isinstance(error, RateLimitedError)
        assert error.message == "API rate limit exceeded. Reset at later."

    def test_forbidden(self):
        error = error_for_status(status_code=403, headers={"x-ratelimit-remaining": "59"})
        assert isinstance(error, ForbiddenError)
        assert error.message == "Access forbidden. You may have been blocked by GitHub."

    def test_service_unavailable(self):
        error = error_for_status(status_code=502, headers={})
        assert isinstance(error, ServiceUnavailableError)
        assert error.message == "GitHub API is experiencing issues. Please try again later."

    def test_unexpected_status(self):
        error = error_for_status(status_code=418, headers={}, reason="I'm a teapot")
        assert isinstance(error, UnexpectedStatusError)
        assert error.status_code == 418
        assert "418" in error.message
        assert error.message == "GitHub API Error (418): I'm a teapot"

    def test_extra_info_in_str(self):
        error = error_for_status(status_code=404, headers={}, extra_info={"action": "Get user", "handle": "nobody"})
        assert error.message == "User not found. Please check the username and try again."
        assert str(error) == "User not found. Please check the username and try again. (action: Get user, handle: nobody)"


def test_network_error():
    error = NetworkError()
    assert error.kind is ErrorKind.NETWORK_ERROR
    assert error.message == "Network error. Please check your internet connection."


def test_unexpected_error():
    error = UnexpectedError(extra_info={"handle": "torvalds"})

    assert error.kind is ErrorKind.UNEXPECTED_ERROR
    assert error.message == "An unexpected error occurred. Please try again."
    assert str(error) == "An unexpected error occurred. Please try again. (handle: torvalds)"
