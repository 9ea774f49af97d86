ExtraInfoType = dict[str, str | None]


class ServerError(Exception):
    """An error from the GitInsight server."""

    def __init__(self, message: str, extra_info: ExtraInfoType | None = None):
        msg = message
        if extra_info:
            msg += " (" + ", ".join([f"{key}: {value}" for key, value in extra_info.items() if value is not None]) + ")"
        super().__init__(msg)


class NoSearchToRetryError(ServerError):
    """Raised when a retry is requested before any search was submitted."""

    def __init__(self):
        super().__init__(message="There is no previous search to retry. Search for a GitHub user first.")
