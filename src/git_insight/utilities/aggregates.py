from collections.abc import Sequence
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, computed_field

from git_insight.clients.models.github import RepositoryRecord

DEFAULT_TOP_LANGUAGES = 6
DEFAULT_TOP_STARRED = 5

MAX_LABEL_LENGTH = 15
TRUNCATED_LABEL_LENGTH = 12


def truncate_label(label: str) -> str:
    if len(label) > MAX_LABEL_LENGTH:
        return label[:TRUNCATED_LABEL_LENGTH] + "..."

    return label


class ChartEntry(BaseModel):
    """A labelled value in a ranked chart."""

    model_config = ConfigDict(frozen=True)

    label: str = Field(description="The label of the entry.")
    value: int = Field(description="The value of the entry.")

    @classmethod
    def from_pair(cls, label: str, value: int) -> Self:
        return cls(label=label, value=value)

    @computed_field
    @property
    def display_label(self) -> str:
        return truncate_label(self.label)


def language_distribution(repositories: Sequence[RepositoryRecord], top_n: int = DEFAULT_TOP_LANGUAGES) -> list[ChartEntry]:
    """Count repositories per primary language, most common first.

    Repositories without a language are not counted. Ties keep the order in which the language was first seen.
    """

    counts: dict[str, int] = {}

    for repository in repositories:
        if repository.language:
            counts[repository.language] = counts.get(repository.language, 0) + 1

    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)

    return [ChartEntry.from_pair(label=language, value=count) for language, count in ranked[:top_n]]


def star_ranking(repositories: Sequence[RepositoryRecord], top_n: int = DEFAULT_TOP_STARRED) -> list[ChartEntry]:
    """Rank the most starred repositories.

    Zero-star repositories are dropped after truncating to `top_n`, so fewer than `top_n` entries may be returned.
    """

    top_repositories = sorted(repositories, key=lambda repository: repository.stars, reverse=True)[:top_n]

    return [
        ChartEntry.from_pair(label=repository.name, value=repository.stars) for repository in top_repositories if repository.stars > 0
    ]
