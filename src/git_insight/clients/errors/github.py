from collections.abc import Mapping
from datetime import datetime
from enum import Enum

ExtraInfoType = dict[str, str | None]

NOT_FOUND_STATUS = 404
FORBIDDEN_STATUS = 403
SERVER_ERROR_STATUS = 500

RATE_LIMIT_REMAINING_HEADER = "x-ratelimit-remaining"
RATE_LIMIT_RESET_HEADER = "x-ratelimit-reset"

RESET_TIME_FALLBACK = "later"


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    FORBIDDEN = "forbidden"
    SERVICE_UNAVAILABLE = "service_unavailable"
    UNEXPECTED_STATUS = "unexpected_status"
    NETWORK_ERROR = "network_error"
    UNEXPECTED_ERROR = "unexpected_error"


class ClientError(Exception):
    """A request error from the GitInsight clients."""

    def __init__(self, message: str, extra_info: ExtraInfoType | None = None):
        msg = message
        if extra_info:
            msg += " (" + ", ".join([f"{key}: {value}" for key, value in extra_info.items() if value is not None]) + ")"
        super().__init__(msg)


class ProfileLookupError(ClientError):
    """A classified failure looking up a profile or its repositories."""

    kind: ErrorKind
    message: str

    def __init__(self, kind: ErrorKind, message: str, extra_info: ExtraInfoType | None = None):
        self.kind = kind
        self.message = message
        super().__init__(message=message, extra_info=extra_info)


class NotFoundError(ProfileLookupError):
    def __init__(self, extra_info: ExtraInfoType | None = None):
        super().__init__(
            kind=ErrorKind.NOT_FOUND,
            message="User not found. Please check the username and try again.",
            extra_info=extra_info,
        )


class RateLimitedError(ProfileLookupError):
    reset_at: str

    def __init__(self, reset_at: str = RESET_TIME_FALLBACK, extra_info: ExtraInfoType | None = None):
        self.reset_at = reset_at
        super().__init__(
            kind=ErrorKind.RATE_LIMITED,
            message=f"API rate limit exceeded. Reset at {reset_at}.",
            extra_info=extra_info,
        )


class ForbiddenError(ProfileLookupError):
    def __init__(self, extra_info: ExtraInfoType | None = None):
        super().__init__(
            kind=ErrorKind.FORBIDDEN,
            message="Access forbidden. You may have been blocked by GitHub.",
            extra_info=extra_info,
        )


class ServiceUnavailableError(ProfileLookupError):
    def __init__(self, extra_info: ExtraInfoType | None = None):
        super().__init__(
            kind=ErrorKind.SERVICE_UNAVAILABLE,
            message="GitHub API is experiencing issues. Please try again later.",
            extra_info=extra_info,
        )


class UnexpectedStatusError(ProfileLookupError):
    status_code: int
    reason: str

    def __init__(self, status_code: int, reason: str = "", extra_info: ExtraInfoType | None = None):
        self.status_code = status_code
        self.reason = reason
        super().__init__(
            kind=ErrorKind.UNEXPECTED_STATUS,
            message=f"GitHub API Error ({status_code}): {reason}",
            extra_info=extra_info,
        )


class NetworkError(ProfileLookupError):
    def __init__(self, extra_info: ExtraInfoType | None = None):
        super().__init__(
            kind=ErrorKind.NETWORK_ERROR,
            message="Network error. Please check your internet connection.",
            extra_info=extra_info,
        )


class UnexpectedError(ProfileLookupError):
    """A lookup failure no other kind describes, such as a response body that cannot be parsed."""

    def __init__(self, extra_info: ExtraInfoType | None = None):
        super().__init__(
            kind=ErrorKind.UNEXPECTED_ERROR,
            message="An unexpected error occurred. Please try again.",
            extra_info=extra_info,
        )


def _lower_keys(headers: Mapping[str, str]) -> dict[str, str]:
    return {key.lower(): value for key, value in headers.items()}


def is_rate_limited(headers: Mapping[str, str]) -> bool:
    return _lower_keys(headers).get(RATE_LIMIT_REMAINING_HEADER) == "0"


def format_reset_time(reset_epoch: str | None) -> str:
    """Format the rate limit reset epoch as a local HH:MM time, or `later` when it cannot be read."""

    if reset_epoch is None:
        return RESET_TIME_FALLBACK

    try:
        return datetime.fromtimestamp(int(reset_epoch)).strftime("%H:%M")  # noqa: DTZ006
    except (ValueError, OverflowError, OSError):
        return RESET_TIME_FALLBACK


def classify_error_kind(status_code: int, headers: Mapping[str, str]) -> ErrorKind:
    """Map a failed response status and its headers to an error kind."""

    if status_code == NOT_FOUND_STATUS:
        return ErrorKind.NOT_FOUND

    if status_code == FORBIDDEN_STATUS:
        return ErrorKind.RATE_LIMITED if is_rate_limited(headers) else ErrorKind.FORBIDDEN

    if status_code >= SERVER_ERROR_STATUS:
        return ErrorKind.SERVICE_UNAVAILABLE

    return ErrorKind.UNEXPECTED_STATUS


def error_for_status(
    status_code: int, headers: Mapping[str, str], reason: str = "", extra_info: ExtraInfoType | None = None
) -> ProfileLookupError:
    """Build the classified error for a failed response."""

    kind: ErrorKind = classify_error_kind(status_code=status_code, headers=headers)

    match kind:
        case ErrorKind.NOT_FOUND:
            return NotFoundError(extra_info=extra_info)
        case ErrorKind.RATE_LIMITED:
            reset_at = format_reset_time(_lower_keys(headers).get(RATE_LIMIT_RESET_HEADER))
            return RateLimitedError(reset_at=reset_at, extra_info=extra_info)
        case ErrorKind.FORBIDDEN:
            return ForbiddenError(extra_info=extra_info)
        case ErrorKind.SERVICE_UNAVAILABLE:
            return ServiceUnavailableError(extra_info=extra_info)
        case _:
            return UnexpectedStatusError(status_code=status_code, reason=reason, extra_info=extra_info)
