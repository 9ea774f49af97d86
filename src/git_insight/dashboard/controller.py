import asyncio
from collections.abc import Coroutine
from logging import Logger
from typing import Any

from fastmcp.utilities.logging import get_logger

from git_insight.clients.enrichment import ProfileEnrichmentClient
from git_insight.clients.errors.github import ProfileLookupError, UnexpectedError
from git_insight.clients.github import GitHubProfileClient
from git_insight.clients.models.enrichment import EnrichmentResult
from git_insight.clients.models.github import Profile, RepositoryRecord
from git_insight.dashboard.state import QueryState


class DashboardController:
    """Owns the single `QueryState` and sequences the lookup and profile analysis for each query.

    A query runs in two phases. The lookup fetches the profile and then its repositories. Once both have
    arrived the state is ready and the analysis starts in the background. Every result is tagged with the
    generation of the query that produced it and is dropped when a newer query has been submitted since.
    """

    def __init__(
        self,
        profile_client: GitHubProfileClient,
        enrichment_client: ProfileEnrichmentClient | None = None,
        logger: Logger | None = None,
    ):
        self.profile_client: GitHubProfileClient = profile_client
        self.enrichment_client: ProfileEnrichmentClient | None = enrichment_client
        self.logger: Logger = logger or get_logger(name=__name__)

        self._state: QueryState = QueryState.idle()
        self._lookup_task: asyncio.Task[None] | None = None
        self._enrichment_task: asyncio.Task[None] | None = None
        self._background_tasks: set[asyncio.Task[None]] = set()

    @property
    def state(self) -> QueryState:
        return self._state

    def submit(self, query: str) -> asyncio.Task[None] | None:
        """Start looking up a handle. Blank queries leave the state unchanged and return None."""

        handle: str = query.strip()

        if not handle:
            return None

        self._state = self._state.loading(query=handle)
        self._enrichment_task = None

        self.logger.info(f"Looking up {handle} (query {self._state.generation}).")

        self._lookup_task = self._spawn(self._lookup(handle=handle, generation=self._state.generation), name=f"lookup-{handle}")

        return self._lookup_task

    def retry(self) -> asyncio.Task[None] | None:
        """Look up the current query again. Returns None when nothing has been searched yet."""

        if self._state.query is None:
            return None

        return self.submit(self._state.query)

    async def wait_for_lookup(self) -> QueryState:
        """Wait until the most recent lookup has settled."""

        while (task := self._lookup_task) is not None and not task.done():
            await asyncio.wait([task])

        return self._state

    async def wait_for_enrichment(self) -> QueryState:
        """Wait until the most recent lookup and its profile analysis have settled."""

        _ = await self.wait_for_lookup()

        while (task := self._enrichment_task) is not None and not task.done():
            await asyncio.wait([task])

        return self._state

    def _is_current(self, generation: int) -> bool:
        return self._state.generation == generation

    def _discard(self, generation: int, what: str) -> None:
        self.logger.debug(f"Discarding {what} from query {generation}, query {self._state.generation} is current.")

    def _spawn(self, coroutine: Coroutine[Any, Any, None], name: str) -> asyncio.Task[None]:
        task: asyncio.Task[None] = asyncio.create_task(coroutine, name=name)

        self._background_tasks.add(task)
        task.add_done_callback(self._on_task_done)

        return task

    def _on_task_done(self, task: asyncio.Task[None]) -> None:
        self._background_tasks.discard(task)

        if not task.cancelled() and (exception := task.exception()):
            self.logger.error(f"Task {task.get_name()} failed", exc_info=exception)

    async def _lookup(self, handle: str, generation: int) -> None:
        try:
            profile: Profile = await self.profile_client.fetch_profile(handle=handle)

            if not self._is_current(generation):
                self._discard(generation, what="profile")
                return

            repositories: list[RepositoryRecord] = await self.profile_client.fetch_repositories(handle=handle)
        except ProfileLookupError as e:
            if not self._is_current(generation):
                self._discard(generation, what="lookup error")
                return

            self.logger.warning(f"Lookup of {handle} failed: {e}")
            self._state = self._state.failed(error=e)
            return
        except Exception:
            if not self._is_current(generation):
                self._discard(generation, what="lookup error")
                return

            self.logger.exception(f"Lookup of {handle} failed unexpectedly")
            self._state = self._state.failed(error=UnexpectedError(extra_info={"handle": handle}))
            return

        if not self._is_current(generation):
            self._discard(generation, what="repositories")
            return

        self._state = self._state.ready(profile=profile, repositories=repositories)

        self.logger.info(f"Lookup of {handle} is ready with {len(repositories)} repositories.")

        if (enrichment_client := self.enrichment_client) is None:
            return

        self._state = self._state.enrichment_pending()
        self._enrichment_task = self._spawn(
            self._enrich(enrichment_client=enrichment_client, profile=profile, repositories=repositories, generation=generation),
            name=f"enrich-{handle}",
        )

    async def _enrich(
        self, enrichment_client: ProfileEnrichmentClient, profile: Profile, repositories: list[RepositoryRecord], generation: int
    ) -> None:
        enrichment: EnrichmentResult = await enrichment_client.analyze(profile=profile, repositories=repositories)

        if not self._is_current(generation):
            self._discard(generation, what="profile analysis")
            return

        self._state = self._state.enriched(enrichment=enrichment)
