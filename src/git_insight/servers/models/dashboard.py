from typing import Self

from pydantic import BaseModel, Field

from git_insight.dashboard.state import QueryState
from git_insight.utilities.aggregates import ChartEntry, language_distribution, star_ranking


class DashboardView(BaseModel):
    """Everything the dashboard shows for the current search."""

    state: QueryState = Field(description="The state of the current search.")
    language_distribution: list[ChartEntry] = Field(
        default_factory=list, description="The number of repositories per primary language, most common first."
    )
    star_ranking: list[ChartEntry] = Field(default_factory=list, description="The most starred repositories.")
    total_public_repositories: int | None = Field(default=None, description="The number of public repositories the user owns.")

    @classmethod
    def from_state(cls, state: QueryState) -> Self:
        if not state.is_ready or state.profile is None or state.repositories is None:
            return cls(state=state)

        return cls(
            state=state,
            language_distribution=language_distribution(repositories=state.repositories),
            star_ranking=star_ranking(repositories=state.repositories),
            total_public_repositories=state.profile.public_repos,
        )
