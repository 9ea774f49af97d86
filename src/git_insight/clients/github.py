import os
from collections.abc import Awaitable, Callable
from logging import Logger, getLogger
from typing import Any

import httpx
from githubkit import GitHub as GitHubKit
from githubkit.auth.token import TokenAuthStrategy
from githubkit.exception import RequestError as GitHubKitRequestError
from githubkit.exception import RequestFailed as GitHubKitRequestFailed
from githubkit.exception import RequestTimeout as GitHubKitRequestTimeout
from githubkit.response import Response as GitHubKitResponse

from git_insight.clients.errors.github import NetworkError, ProfileLookupError, UnexpectedError, error_for_status
from git_insight.clients.models.github import Profile, RepositoryRecord

REPOSITORIES_SORT = "updated"
REPOSITORIES_PER_PAGE = 100


def get_github_token() -> str | None:
    env_vars: list[str] = ["GITHUB_TOKEN", "GITHUB_PERSONAL_ACCESS_TOKEN"]
    for env_var in env_vars:
        if env_var in os.environ:
            return os.environ[env_var]
    return None


def get_githubkit_client(token: str | None = None) -> GitHubKit[Any]:
    # Every lookup is a single exchange, failures are reported instead of retried
    if token := token or get_github_token():
        return GitHubKit[TokenAuthStrategy](auth=TokenAuthStrategy(token=token), auto_retry=False)

    return GitHubKit(auto_retry=False)


class GitHubProfileClient:
    """Looks up GitHub users and their repositories, classifying any failure into a `ProfileLookupError`."""

    githubkit_client: GitHubKit[Any]
    logger: Logger

    log_requests: bool
    log_responses: bool
    log_on_error: bool

    def __init__(
        self,
        githubkit_client: GitHubKit[Any] | None = None,
        logger: Logger | None = None,
        log_requests: bool = True,
        log_responses: bool = False,
        log_on_error: bool = True,
    ):
        self.githubkit_client = githubkit_client or get_githubkit_client()
        self.logger = logger or getLogger(__name__)
        self.log_requests = log_requests
        self.log_responses = log_responses
        self.log_on_error = log_on_error

    def _get_loggers(self) -> tuple[Callable[[str], Any], Callable[[str], Any], Callable[[str], Any]]:
        request_logger = self.logger.info if self.log_requests else self.logger.debug
        response_logger = self.logger.info if self.log_responses else self.logger.debug
        error_logger = self.logger.exception if self.log_on_error else self.logger.debug
        return request_logger, response_logger, error_logger

    async def _perform_rest_request[T](
        self,
        action: str,
        handle: str,
        *,
        method: Callable[..., Awaitable[GitHubKitResponse[Any]]],
        parse: Callable[[Any], T],
        **request_args: Any,  # pyright: ignore[reportAny]
    ) -> T:
        """Perform a request and parse the decoded JSON body.

        Raises:
            ProfileLookupError: The request failed with an error status, never reached GitHub, or returned a body
                that could not be parsed.
        """

        request_logger, response_logger, error_logger = self._get_loggers()

        request_logger(f"Performing {action} for {handle} with kwargs {request_args}")

        extra_info = {"action": action, "handle": handle}

        try:
            response: GitHubKitResponse[Any] = await method(**request_args)
        except ProfileLookupError:
            raise
        except GitHubKitRequestFailed as e:
            error_logger(f"{action} for {handle} failed with status {e.response.status_code}")

            raise error_for_status(
                status_code=e.response.status_code,
                headers=e.response.headers,
                reason=e.response.raw_response.reason_phrase,
                extra_info=extra_info,
            ) from e
        except (GitHubKitRequestError, GitHubKitRequestTimeout, httpx.TransportError) as e:
            error_logger(f"{action} for {handle} could not reach GitHub: {e}")

            raise NetworkError(extra_info=extra_info) from e

        try:
            response_json: Any = response.json()  # pyright: ignore[reportAny]

            response_logger(f"Completed {action} for {handle}: {response_json}")

            return parse(response_json)
        # JSON decoding and pydantic validation errors are both ValueErrors
        except (ValueError, TypeError, AttributeError) as e:
            error_logger(f"{action} for {handle} returned a response that could not be parsed")

            raise UnexpectedError(extra_info=extra_info) from e

    async def fetch_profile(self, handle: str) -> Profile:
        """Get the profile of a GitHub user."""

        return await self._perform_rest_request(
            action="Get user",
            handle=handle,
            method=self.githubkit_client.rest.users.async_get_by_username,
            parse=lambda user_json: Profile.from_user_json(user_json=user_json, handle=handle),  # pyright: ignore[reportAny]
            username=handle,
        )

    async def fetch_repositories(self, handle: str) -> list[RepositoryRecord]:
        """Get the most recently updated public repositories of a GitHub user.

        Only the first page is requested, accounts with more than 100 repositories are truncated.
        """

        return await self._perform_rest_request(
            action="List user repositories",
            handle=handle,
            method=self.githubkit_client.rest.repos.async_list_for_user,
            parse=RepositoryRecord.from_repositories_json,
            username=handle,
            sort=REPOSITORIES_SORT,
            per_page=REPOSITORIES_PER_PAGE,
        )
