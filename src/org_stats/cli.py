"""Command-line interface for org-stats."""

from __future__ import annotations

import asyncio
import logging
import re
from datetime import datetime, timedelta, timezone

import click
import httpx

from . import __version__
from .config import Command, ConfigurationError, ReportConfig
from .fetcher import DEFAULT_ABORT_BUDGET
from .github.client import DEFAULT_API_URL, GitHubAPIError
from .orchestrator import run

logger = logging.getLogger(__name__)

_RELATIVE_DATE = re.compile(r"^(\d+)([dwmy])$")
_UNIT_DAYS = {"d": 1, "w": 7, "m": 30, "y": 365}


def _parse_relative_date(value: str) -> str | None:
    """Turn ``7d``, ``2w``, ``3m`` or ``1y`` into a ``YYYY-MM-DD`` date."""
    match = _RELATIVE_DATE.match(value)
    if not match:
        return None
    amount, unit = int(match.group(1)), match.group(2)
    today = datetime.now(timezone.utc)
    return (today - timedelta(days=amount * _UNIT_DAYS[unit])).strftime("%Y-%m-%d")


def _resolve_date(value: str | None) -> str | None:
    """Normalise a relative or ISO-8601 date to a UTC timestamp string."""
    if value is None:
        return None
    text = _parse_relative_date(value) or value
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        raise ConfigurationError(
            f"Invalid date {value!r}: use YYYY-MM-DD, ISO-8601 or 7d/2w/3m/1y."
        ) from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _execute(ctx: click.Context, config: ReportConfig) -> None:
    config.validate(ctx)
    try:
        asyncio.run(run(config))
    except (GitHubAPIError, httpx.HTTPError, OSError) as exc:
        logger.error("Failed to collect stats: %s", exc)
        ctx.exit(1)


class _CommandGroup(click.Group):
    """Accept ``pull-request-stats`` as well as ``pull_request_stats``."""

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        return super().get_command(ctx, cmd_name.replace("-", "_"))

    def resolve_command(self, ctx: click.Context, args: list[str]):
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as exc:
            raise ConfigurationError(exc.message, ctx=ctx) from None


_COMMON_OPTIONS = [
    click.option("--owner", "--org", "owner", default="", help="Organization or repository owner."),
    click.option("--repo", default=None, help="Narrow the report to one repository."),
    click.option("--out", "out_file", default=None, help="Output JSON file (default: out/<command>.json)."),
    click.option("--token", envvar="GITHUB_TOKEN", default="", help="GitHub token (or GITHUB_TOKEN)."),
    click.option("--api-url", envvar="GITHUB_API_URL", default=DEFAULT_API_URL, show_default=True,
                 help="GitHub API base URL."),
]


def _common_options(f):
    for option in reversed(_COMMON_OPTIONS):
        f = option(f)
    return f


@click.group(cls=_CommandGroup)
@click.version_option(version=__version__, prog_name="org-stats")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
def main(verbose: bool) -> None:
    """Contribution and pull request label statistics for GitHub organizations."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )
    # keep per-request noise out of debug output
    logging.getLogger("httpx").setLevel(logging.WARNING)


@main.command(name=Command.CONTRIBUTION_STATS.value)
@_common_options
@click.option("--since", default=None, help="Start date (YYYY-MM-DD, ISO-8601 or 7d/2w/3m/1y).")
@click.option("--until", default=None, help="End date (YYYY-MM-DD, ISO-8601 or 7d/2w/3m/1y).")
@click.option("--max-concurrency", type=int, default=None,
              help="Limit repositories fetched at once (default: no limit).")
@click.pass_context
def contribution_stats(
    ctx: click.Context,
    owner: str,
    repo: str | None,
    out_file: str | None,
    token: str,
    api_url: str,
    since: str | None,
    until: str | None,
    max_concurrency: int | None,
) -> None:
    """Commit and contributor stats for an organization or one repository."""
    config = ReportConfig(
        command=Command.CONTRIBUTION_STATS,
        owner=owner,
        token=token,
        repo=repo,
        since=_resolve_date(since),
        until=_resolve_date(until),
        out_file=out_file,
        api_url=api_url,
        max_concurrency=max_concurrency,
    )
    _execute(ctx, config)


@main.command(name=Command.PULL_REQUEST_STATS.value)
@_common_options
@click.option("--milestone", default=None, help="Only count pull requests in this milestone.")
@click.option("--abort-budget", type=int, default=DEFAULT_ABORT_BUDGET, show_default=True,
              help="Stop after this many pull requests outside the milestone.")
@click.pass_context
def pull_request_stats(
    ctx: click.Context,
    owner: str,
    repo: str | None,
    out_file: str | None,
    token: str,
    api_url: str,
    milestone: str | None,
    abort_budget: int,
) -> None:
    """Label counts over merged pull requests of one repository."""
    config = ReportConfig(
        command=Command.PULL_REQUEST_STATS,
        owner=owner,
        token=token,
        repo=repo,
        milestone=milestone,
        out_file=out_file,
        api_url=api_url,
        abort_budget=abort_budget,
    )
    _execute(ctx, config)
