from enum import Enum
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from git_insight.clients.errors.github import ErrorKind, ProfileLookupError
from git_insight.clients.models.enrichment import EnrichmentResult
from git_insight.clients.models.github import Profile, RepositoryRecord


class LookupPhase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class EnrichmentPhase(str, Enum):
    ABSENT = "absent"
    PENDING = "pending"
    DONE = "done"


class QueryState(BaseModel):
    """The state of the current search.

    Exactly one of loading, failed (error present) or ready (profile present) describes the visible state.
    The enrichment phase only advances once the lookup is ready.
    """

    model_config = ConfigDict(frozen=True)

    query: str | None = Field(default=None, description="The handle being looked up.")
    generation: int = Field(default=0, description="Identifies the query, increases with every submitted search.")
    phase: LookupPhase = Field(default=LookupPhase.IDLE, description="The phase of the lookup.")
    profile: Profile | None = Field(default=None, description="The profile, once the lookup is ready.")
    repositories: list[RepositoryRecord] | None = Field(default=None, description="The repositories, once the lookup is ready.")
    error: str | None = Field(default=None, description="The error message, if the lookup failed.")
    error_kind: ErrorKind | None = Field(default=None, description="The kind of error, if the lookup failed.")
    enrichment_phase: EnrichmentPhase = Field(default=EnrichmentPhase.ABSENT, description="The phase of the profile analysis.")
    enrichment: EnrichmentResult | None = Field(default=None, description="The profile analysis, once done.")

    @model_validator(mode="after")
    def check_phase_invariants(self) -> Self:
        has_result: bool = self.profile is not None or self.repositories is not None
        has_error: bool = self.error is not None or self.error_kind is not None

        match self.phase:
            case LookupPhase.IDLE | LookupPhase.LOADING:
                if has_result or has_error:
                    msg = f"A {self.phase.value} query cannot carry a profile or an error."
                    raise ValueError(msg)
            case LookupPhase.READY:
                if self.profile is None or self.repositories is None or has_error:
                    msg = "A ready query must carry a profile and repositories and no error."
                    raise ValueError(msg)
            case LookupPhase.FAILED:
                if self.error is None or has_result:
                    msg = "A failed query must carry an error and no profile."
                    raise ValueError(msg)

        if self.enrichment_phase is not EnrichmentPhase.ABSENT and self.phase is not LookupPhase.READY:
            msg = "Profile analysis only starts once the query is ready."
            raise ValueError(msg)

        if (self.enrichment is not None) != (self.enrichment_phase is EnrichmentPhase.DONE):
            msg = "A profile analysis result is present exactly when the analysis is done."
            raise ValueError(msg)

        return self

    def _transition(self, **update: object) -> Self:
        # model_copy skips validation, transitions must pass the phase invariants
        return type(self)(**{**dict(self), **update})

    @classmethod
    def idle(cls) -> Self:
        return cls()

    def loading(self, query: str) -> Self:
        """Start a new query, discarding everything from the previous one."""

        return type(self)(query=query, generation=self.generation + 1, phase=LookupPhase.LOADING)

    def ready(self, profile: Profile, repositories: list[RepositoryRecord]) -> Self:
        return self._transition(phase=LookupPhase.READY, profile=profile, repositories=repositories)

    def failed(self, error: ProfileLookupError) -> Self:
        return type(self)(
            query=self.query,
            generation=self.generation,
            phase=LookupPhase.FAILED,
            error=error.message,
            error_kind=error.kind,
        )

    def enrichment_pending(self) -> Self:
        return self._transition(enrichment_phase=EnrichmentPhase.PENDING)

    def enriched(self, enrichment: EnrichmentResult) -> Self:
        return self._transition(enrichment_phase=EnrichmentPhase.DONE, enrichment=enrichment)

    @property
    def is_loading(self) -> bool:
        return self.phase is LookupPhase.LOADING

    @property
    def is_ready(self) -> bool:
        return self.phase is LookupPhase.READY

    @property
    def is_failed(self) -> bool:
        return self.phase is LookupPhase.FAILED
