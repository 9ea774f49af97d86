import asyncio
import os
from logging import Logger
from typing import Literal

import click
from fastmcp import FastMCP
from fastmcp.server.middleware.logging import LoggingMiddleware
from fastmcp.utilities.logging import get_logger

from git_insight.clients.enrichment import ProfileEnrichmentClient
from git_insight.clients.github import GitHubProfileClient
from git_insight.dashboard.controller import DashboardController
from git_insight.sampling.handler import get_generation_backend
from git_insight.servers.dashboard import DashboardServer, get_default_handle
from git_insight.servers.models.dashboard import DashboardView
from git_insight.servers.shared.utility import dump_model_as_yaml

logger: Logger = get_logger(name=__name__)

enable_enrichment: bool = not bool(os.getenv("DISABLE_ENRICHMENT"))


def build_controller() -> DashboardController:
    enrichment_client = ProfileEnrichmentClient(backend=get_generation_backend(), logger=logger) if enable_enrichment else None

    return DashboardController(profile_client=GitHubProfileClient(logger=logger), enrichment_client=enrichment_client, logger=logger)


mcp: FastMCP[None] = FastMCP[None](name="GitInsight MCP")

mcp.add_middleware(middleware=LoggingMiddleware(include_payloads=True, logger=logger))

dashboard_server: DashboardServer = DashboardServer(controller=build_controller(), default_handle=get_default_handle(), logger=logger)
_ = dashboard_server.register_tools(fastmcp=mcp)


async def lookup_handle(handle: str, wait_for_enrichment: bool) -> DashboardView:
    controller: DashboardController = build_controller()

    _ = controller.submit(query=handle)

    if wait_for_enrichment:
        _ = await controller.wait_for_enrichment()
    else:
        _ = await controller.wait_for_lookup()

    return DashboardView.from_state(state=controller.state)


@click.group()
def cli():
    pass


@cli.command(name="serve")
@click.option(
    "--mcp-transport",
    type=click.Choice(["stdio", "streamable-http"]),
    default="stdio",
    help="The transport to run the MCP server on",
)
def run_mcp(mcp_transport: Literal["stdio", "streamable-http"]):
    mcp.run(transport=mcp_transport)


@cli.command(name="lookup")
@click.argument("handle")
@click.option(
    "--wait-for-enrichment/--no-wait-for-enrichment",
    default=True,
    help="Whether to wait for the AI profile analysis before printing the dashboard",
)
def run_lookup(handle: str, wait_for_enrichment: bool):
    view: DashboardView = asyncio.run(lookup_handle(handle=handle, wait_for_enrichment=wait_for_enrichment))

    click.echo(dump_model_as_yaml(view))

    if view.state.is_failed:
        raise SystemExit(1)


if __name__ == "__main__":
    cli()
