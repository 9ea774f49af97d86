from collections.abc import Sequence
from typing import Any, overload
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from githubkit.exception import RequestFailed
from pydantic import BaseModel

from git_insight.clients.github import GitHubProfileClient

GITHUB_API_URL = "https://api.github.com"


def make_githubkit_response(
    status_code: int = 200,
    json_body: Any = None,  # pyright: ignore[reportAny]
    headers: dict[str, str] | None = None,
    reason_phrase: str = "OK",
    path: str = "/users/torvalds",
) -> MagicMock:
    """A stand-in for a githubkit `Response` carrying just what the profile client reads."""

    response = MagicMock()
    response.status_code = status_code
    response.headers = httpx.Headers(headers or {})
    response.raw_request = httpx.Request("GET", GITHUB_API_URL + path)
    response.raw_response.reason_phrase = reason_phrase
    response.json.return_value = json_body
    return response


def make_request_failed(status_code: int, headers: dict[str, str] | None = None, reason_phrase: str = "") -> RequestFailed:
    return RequestFailed(make_githubkit_response(status_code=status_code, headers=headers, reason_phrase=reason_phrase))


def make_githubkit_client(
    user: Any = None,  # pyright: ignore[reportAny]
    repositories: Any = None,  # pyright: ignore[reportAny]
) -> MagicMock:
    """A githubkit client whose user and repository endpoints return (or raise) the provided values."""

    githubkit_client = MagicMock()

    if isinstance(user, BaseException):
        githubkit_client.rest.users.async_get_by_username = AsyncMock(side_effect=user)
    else:
        githubkit_client.rest.users.async_get_by_username = AsyncMock(return_value=make_githubkit_response(json_body=user))

    if isinstance(repositories, BaseException):
        githubkit_client.rest.repos.async_list_for_user = AsyncMock(side_effect=repositories)
    else:
        githubkit_client.rest.repos.async_list_for_user = AsyncMock(
            return_value=make_githubkit_response(json_body=repositories, path="/users/torvalds/repos")
        )

    return githubkit_client


@pytest.fixture
def torvalds_user_json() -> dict[str, Any]:
    return {
        "login": "torvalds",
        "id": 1024025,
        "avatar_url": "https://avatars.githubusercontent.com/u/1024025?v=4",
        "html_url": "https://github.com/torvalds",
        "name": "Linus Torvalds",
        "company": "Linux Foundation",
        "blog": "",
        "location": "Portland, OR",
        "email": None,
        "bio": None,
        "twitter_username": None,
        "public_repos": 3,
        "followers": 250000,
        "following": 0,
    }


@pytest.fixture
def torvalds_repositories_json() -> list[dict[str, Any]]:
    return [
        {
            "id": 1,
            "name": "repoA",
            "description": "The first repository",
            "private": False,
            "language": "C",
            "stargazers_count": 100,
            "forks_count": 10,
            "updated_at": "2026-10-01T12:00:00Z",
            "html_url": "https://github.com/torvalds/repoA",
            "topics": ["kernel"],
        },
        {
            "id": 2,
            "name": "repoB",
            "description": None,
            "private": False,
            "language": None,
            "stargazers_count": 5,
            "forks_count": 1,
            "updated_at": "2026-09-01T12:00:00Z",
            "html_url": "https://github.com/torvalds/repoB",
            "topics": [],
        },
        {
            "id": 3,
            "name": "repoC",
            "description": None,
            "private": False,
            "language": None,
            "stargazers_count": 0,
            "forks_count": 0,
            "updated_at": "2026-08-01T12:00:00Z",
            "html_url": "https://github.com/torvalds/repoC",
        },
    ]


@pytest.fixture
def githubkit_client(torvalds_user_json: dict[str, Any], torvalds_repositories_json: list[dict[str, Any]]) -> MagicMock:
    return make_githubkit_client(user=torvalds_user_json, repositories=torvalds_repositories_json)


@pytest.fixture
def github_profile_client(githubkit_client: MagicMock) -> GitHubProfileClient:
    return GitHubProfileClient(githubkit_client=githubkit_client)


def handle_exclude_keys(dictionary: dict[str, Any], exclude_keys: list[str] | None = None) -> dict[str, Any]:
    if exclude_keys is None:
        return dictionary
    return {key: value for key, value in dictionary.items() if key not in exclude_keys}


@overload
def dump_for_snapshot(
    basemodel: None,
    /,
    exclude_keys: list[str] | None = None,
    exclude_none: bool = True,
    **dump_kwargs: Any,
) -> None: ...


@overload
def dump_for_snapshot(
    basemodel: BaseModel,
    /,
    exclude_keys: list[str] | None = None,
    exclude_none: bool = True,
    **dump_kwargs: Any,
) -> dict[str, Any]: ...


def dump_for_snapshot(
    basemodel: None | BaseModel,
    /,
    exclude_keys: list[str] | None = None,
    exclude_none: bool = True,
    **dump_kwargs: Any,
) -> dict[str, Any] | None:
    if basemodel is None:
        return None

    return handle_exclude_keys(basemodel.model_dump(mode="json", exclude_none=exclude_none, **dump_kwargs), exclude_keys)


def dump_list_for_snapshot(
    basemodel: None | Sequence[BaseModel],
    /,
    exclude_keys: list[str] | None = None,
    exclude_none: bool = True,
    **dump_kwargs: Any,
) -> list[dict[str, Any]]:
    if basemodel is None:
        return []

    return [dump_for_snapshot(item, exclude_keys, exclude_none, **dump_kwargs) for item in basemodel]
