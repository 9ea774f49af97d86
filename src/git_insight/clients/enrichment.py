from logging import Logger

from fastmcp.utilities.logging import get_logger

from git_insight.clients.models.enrichment import EnrichmentContext, EnrichmentResult
from git_insight.clients.models.github import Profile, RepositoryRecord
from git_insight.sampling.base import StructuredGenerationBackend
from git_insight.sampling.prompts import ANALYSIS_PROMPT_PREFIX, ANALYSIS_SYSTEM_PROMPT


def build_analysis_prompt(profile: Profile, repositories: list[RepositoryRecord]) -> str:
    context: EnrichmentContext = EnrichmentContext.from_profile(profile=profile, repositories=repositories)

    return ANALYSIS_PROMPT_PREFIX + context.model_dump_json()


class ProfileEnrichmentClient:
    """Asks a generative model for a narrative assessment of a profile.

    `analyze` never raises: every failure resolves to `EnrichmentResult.fallback()`.
    """

    def __init__(self, backend: StructuredGenerationBackend | None, logger: Logger | None = None):
        self.backend: StructuredGenerationBackend | None = backend
        self.logger: Logger = logger or get_logger(name=__name__)

    async def analyze(self, profile: Profile, repositories: list[RepositoryRecord]) -> EnrichmentResult:
        if self.backend is None:
            self.logger.warning(f"No generation backend configured, skipping analysis of {profile.login}.")
            return EnrichmentResult.fallback()

        prompt: str = build_analysis_prompt(profile=profile, repositories=repositories)

        self.logger.info(f"Analyzing profile {profile.login} with {self.backend.default_model}.")

        try:
            text: str | None = await self.backend.generate_json(
                system_prompt=ANALYSIS_SYSTEM_PROMPT,
                prompt=prompt,
                response_model=EnrichmentResult,
            )

            if not text:
                msg = "No response from the generation backend."
                raise ValueError(msg)  # noqa: TRY301

            return EnrichmentResult.model_validate_json(text)
        except Exception:
            self.logger.exception(f"Analysis of profile {profile.login} failed, returning the fallback result.")
            return EnrichmentResult.fallback()
