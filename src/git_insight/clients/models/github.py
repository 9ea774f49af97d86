from datetime import datetime
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, computed_field

TWITTER_BASE_URL = "https://twitter.com"


class Profile(BaseModel):
    """A GitHub user profile."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    login: str = Field(description="The handle of the user.")
    name: str | None = Field(default=None, description="The display name of the user.")
    avatar_url: str | None = Field(default=None, description="The URL of the user's avatar.")
    html_url: str | None = Field(default=None, description="The URL of the user's GitHub page.")
    bio: str | None = Field(default=None, description="The biography of the user.")
    company: str | None = Field(default=None, description="The company of the user.")
    location: str | None = Field(default=None, description="The location of the user.")
    blog: str | None = Field(default=None, description="The website of the user.")
    twitter_username: str | None = Field(default=None, description="The Twitter username of the user.")
    email: str | None = Field(default=None, description="The public email of the user.")
    followers: int = Field(default=0, description="The number of followers the user has.")
    following: int = Field(default=0, description="The number of users the user follows.")
    public_repos: int = Field(default=0, description="The total number of public repositories the user owns.")

    @classmethod
    def from_user_json(cls, user_json: dict[str, Any], handle: str) -> Self:
        """Build a profile from a raw user response. The handle is used when the response omits the login."""

        return cls.model_validate({"login": handle, **{key: value for key, value in user_json.items() if value is not None}})

    @computed_field
    @property
    def display_name(self) -> str:
        return self.name or self.login

    @computed_field
    @property
    def website_url(self) -> str | None:
        if not self.blog:
            return None

        return self.blog if self.blog.startswith("http") else f"https://{self.blog}"

    @computed_field
    @property
    def twitter_url(self) -> str | None:
        return f"{TWITTER_BASE_URL}/{self.twitter_username}" if self.twitter_username else None


class RepositoryRecord(BaseModel):
    """A repository belonging to a profile."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int | None = Field(default=None, description="The id of the repository.")
    name: str = Field(default="", description="The name of the repository.")
    description: str | None = Field(default=None, description="The description of the repository.")
    private: bool = Field(default=False, description="Whether the repository is private.")
    language: str | None = Field(default=None, description="The primary language of the repository.")
    stars: int = Field(default=0, description="The number of stars the repository has.")
    forks: int = Field(default=0, description="The number of forks of the repository.")
    updated_at: datetime | None = Field(default=None, description="The date and time the repository was last updated.")
    html_url: str | None = Field(default=None, description="The URL of the repository's GitHub page.")
    topics: list[str] = Field(default_factory=list, description="The topics of the repository.")

    @classmethod
    def from_repository_json(cls, repository_json: dict[str, Any]) -> Self:
        present: dict[str, Any] = {key: value for key, value in repository_json.items() if value is not None}

        return cls.model_validate(
            {
                **present,
                "stars": present.get("stargazers_count", 0),
                "forks": present.get("forks_count", 0),
            }
        )

    @classmethod
    def from_repositories_json(cls, repositories_json: list[dict[str, Any]]) -> list[Self]:
        return [cls.from_repository_json(repository_json=repository_json) for repository_json in repositories_json]
