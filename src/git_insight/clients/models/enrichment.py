from typing import Self

from pydantic import BaseModel, ConfigDict, Field

from git_insight.clients.models.github import Profile, RepositoryRecord

DEFAULT_TOP_REPOSITORIES = 10


class EnrichmentResult(BaseModel):
    """An AI-generated assessment of a developer profile."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    professionalSummary: str = Field(description="A 2-3 sentence professional summary of the developer based on their work.")  # noqa: N815
    topSkills: list[str] = Field(description="Top 5 technical skills or languages derived from their repositories.")  # noqa: N815
    suggestedRoles: list[str] = Field(  # noqa: N815
        description="3 potential job titles that fit this profile (e.g., Frontend Engineer, DevOps Specialist)."
    )
    funFact: str = Field(  # noqa: N815
        description="A lighthearted observation or 'vibe check' based on their coding interests (e.g., 'Likely dreams in Rust')."
    )

    @classmethod
    def fallback(cls) -> Self:
        return cls(
            professionalSummary="AI analysis unavailable at the moment.",
            topSkills=[],
            suggestedRoles=[],
            funFact="Only human intelligence available right now.",
        )


class RepositoryDigest(BaseModel):
    """A condensed repository summary sent to the model."""

    name: str
    description: str | None
    language: str | None
    topics: list[str]
    stars: int

    @classmethod
    def from_repository(cls, repository: RepositoryRecord) -> Self:
        return cls(
            name=repository.name,
            description=repository.description,
            language=repository.language,
            topics=repository.topics,
            stars=repository.stars,
        )


class EnrichmentContext(BaseModel):
    """The condensed profile and repository data the model is asked to assess."""

    username: str
    name: str | None
    bio: str | None
    location: str | None
    company: str | None
    followers: int
    top_repositories: list[RepositoryDigest]
    all_languages: list[str]

    @classmethod
    def from_profile(cls, profile: Profile, repositories: list[RepositoryRecord], top_n: int = DEFAULT_TOP_REPOSITORIES) -> Self:
        top_repositories = sorted(repositories, key=lambda repository: repository.stars, reverse=True)[:top_n]

        # distinct languages across every repository, in first-seen order
        all_languages: list[str] = list(dict.fromkeys(repository.language for repository in repositories if repository.language))

        return cls(
            username=profile.login,
            name=profile.name,
            bio=profile.bio,
            location=profile.location,
            company=profile.company,
            followers=profile.followers,
            top_repositories=[RepositoryDigest.from_repository(repository=repository) for repository in top_repositories],
            all_languages=all_languages,
        )
