from typing import Any
from unittest.mock import AsyncMock

import pytest
from fastmcp import FastMCP

from git_insight.clients.enrichment import ProfileEnrichmentClient
from git_insight.clients.github import GitHubProfileClient
from git_insight.clients.models.enrichment import EnrichmentResult
from git_insight.dashboard.controller import DashboardController


@pytest.fixture
def fastmcp() -> FastMCP[Any]:
    return FastMCP(name="GitInsight MCP")


@pytest.fixture
def enrichment_result() -> EnrichmentResult:
    return EnrichmentResult(
        professionalSummary="A systems programmer with a long record of kernel work.",
        topSkills=["C", "Operating Systems"],
        suggestedRoles=["Kernel Engineer"],
        funFact="Likely dreams in C.",
    )


@pytest.fixture
def enrichment_client(enrichment_result: EnrichmentResult) -> AsyncMock:
    enrichment_client: AsyncMock = AsyncMock(spec=ProfileEnrichmentClient)
    enrichment_client.analyze = AsyncMock(return_value=enrichment_result)
    return enrichment_client


@pytest.fixture
def dashboard_controller(github_profile_client: GitHubProfileClient, enrichment_client: AsyncMock) -> DashboardController:
    return DashboardController(profile_client=github_profile_client, enrichment_client=enrichment_client)
