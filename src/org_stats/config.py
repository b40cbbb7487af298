"""Run configuration, built once by the CLI."""

from __future__ import annotations

import enum
from dataclasses import dataclass

import click

from .fetcher import DEFAULT_ABORT_BUDGET
from .github.client import DEFAULT_API_URL
from .models import RepoId, TimeRange

OUT_DIR = "out"


class Command(str, enum.Enum):
    CONTRIBUTION_STATS = "contribution_stats"
    PULL_REQUEST_STATS = "pull_request_stats"

    def default_out_file(self) -> str:
        return f"{OUT_DIR}/{self.value}.json"


class ConfigurationError(click.UsageError):
    """Invalid or missing startup configuration."""

    exit_code = 1


@dataclass(frozen=True)
class ReportConfig:
    command: Command
    owner: str
    token: str
    repo: str | None = None
    since: str | None = None
    until: str | None = None
    milestone: str | None = None
    out_file: str | None = None
    api_url: str = DEFAULT_API_URL
    max_concurrency: int | None = None
    abort_budget: int = DEFAULT_ABORT_BUDGET

    @property
    def repo_id(self) -> RepoId | None:
        if not self.repo:
            return None
        return RepoId(owner=self.owner, name=self.repo)

    @property
    def time_range(self) -> TimeRange | None:
        return TimeRange.from_bounds(self.since, self.until)

    @property
    def output_path(self) -> str:
        return self.out_file or self.command.default_out_file()

    def validate(self, ctx: click.Context | None = None) -> None:
        """Raise ConfigurationError before any request is made."""
        if not self.token:
            raise ConfigurationError(
                "GITHUB_TOKEN is not set. Set it in your environment or pass --token.",
                ctx=ctx,
            )
        if not self.owner:
            raise ConfigurationError("Missing --owner.", ctx=ctx)
        if self.command is Command.PULL_REQUEST_STATS and not self.repo:
            raise ConfigurationError(
                f"Repository name is required for {self.command.value}.", ctx=ctx
            )
        if self.max_concurrency is not None and self.max_concurrency < 1:
            raise ConfigurationError("--max-concurrency must be at least 1.", ctx=ctx)
        if self.abort_budget < 1:
            raise ConfigurationError("--abort-budget must be at least 1.", ctx=ctx)
