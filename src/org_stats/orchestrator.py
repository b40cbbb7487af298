"""Orchestrator: wires together client, aggregator, and renderer."""

from __future__ import annotations

from .aggregator import organization_stats, pull_request_stats, repo_contribution_stats
from .config import Command, ReportConfig
from .github.client import GitHubClient
from .renderer import Report, render_json, render_summary


async def collect(client: GitHubClient, config: ReportConfig) -> Report:
    """Build the report the configured command asks for."""
    repo = config.repo_id
    if config.command is Command.PULL_REQUEST_STATS:
        return await pull_request_stats(
            client, repo, milestone=config.milestone, abort_budget=config.abort_budget
        )
    if repo is None:
        return await organization_stats(
            client,
            config.owner,
            since=config.since,
            until=config.until,
            max_concurrency=config.max_concurrency,
        )
    return await repo_contribution_stats(client, repo, since=config.since, until=config.until)


async def run(config: ReportConfig) -> Report:
    """Main pipeline: fetch data, aggregate, render."""
    async with GitHubClient(token=config.token, base_url=config.api_url) as client:
        report = await collect(client, config)

    render_json(report, output_file=config.output_path)
    render_summary(report)
    return report
