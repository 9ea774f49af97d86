import os
from logging import Logger
from typing import Any

from fastmcp import FastMCP
from fastmcp.tools import Tool
from fastmcp.utilities.logging import get_logger

from git_insight.dashboard.controller import DashboardController
from git_insight.servers.models.dashboard import DashboardView
from git_insight.servers.shared.annotations import HANDLE, WAIT_FOR_ENRICHMENT
from git_insight.servers.shared.errors import NoSearchToRetryError

DEFAULT_HANDLE = "google"


def get_default_handle() -> str | None:
    return os.getenv("DEFAULT_HANDLE", DEFAULT_HANDLE).strip() or None


class DashboardServer:
    """Exposes the GitInsight dashboard as tools backed by a single `DashboardController`."""

    controller: DashboardController
    default_handle: str | None
    logger: Logger

    def __init__(self, controller: DashboardController, default_handle: str | None = None, logger: Logger | None = None):
        self.logger = logger or get_logger(name=__name__)
        self.controller = controller
        self.default_handle = default_handle

    def register_tools(self, fastmcp: FastMCP[Any]) -> FastMCP[Any]:
        _ = fastmcp.add_tool(tool=Tool.from_function(fn=self.search_profile))
        _ = fastmcp.add_tool(tool=Tool.from_function(fn=self.retry_search))
        _ = fastmcp.add_tool(tool=Tool.from_function(fn=self.get_dashboard))

        return fastmcp

    def current_view(self) -> DashboardView:
        return DashboardView.from_state(state=self.controller.state)

    async def search_profile(self, handle: HANDLE) -> DashboardView:
        """Look up a GitHub user's profile and repositories. The AI profile analysis continues in the background."""

        if self.controller.submit(query=handle) is None:
            self.logger.info("Ignoring a blank search.")
            return self.current_view()

        _ = await self.controller.wait_for_lookup()

        return self.current_view()

    async def retry_search(self) -> DashboardView:
        """Repeat the most recent search, for example after it failed."""

        if self.controller.retry() is None:
            raise NoSearchToRetryError

        _ = await self.controller.wait_for_lookup()

        return self.current_view()

    async def get_dashboard(self, wait_for_enrichment: WAIT_FOR_ENRICHMENT = False) -> DashboardView:
        """Get the dashboard for the current search, including the language and star charts."""

        if self.controller.state.query is None and self.default_handle:
            self.logger.info(f"No search yet, looking up the default user {self.default_handle}.")
            _ = self.controller.submit(query=self.default_handle)

        if wait_for_enrichment:
            _ = await self.controller.wait_for_enrichment()
        else:
            _ = await self.controller.wait_for_lookup()

        return self.current_view()
