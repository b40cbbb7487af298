"""JSON report output with a rich terminal summary."""

from __future__ import annotations

import json
import os
from dataclasses import asdict
from typing import Union

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import OrgStats, PullRequestStats, RepoStats

Report = Union[OrgStats, RepoStats, PullRequestStats]


def _format_number(n: int) -> str:
    return f"{n:,}"


def _write_to_file(content: str, output_file: str) -> None:
    """Write content to a file and print confirmation."""
    parent = os.path.dirname(output_file)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(output_file, "w", encoding="utf-8") as f:
        f.write(content)
    Console().print(f"\n===== Stats written to {output_file} =====")


def to_json(report: Report) -> str:
    return json.dumps(asdict(report), indent=2, ensure_ascii=False)


def render_json(report: Report, output_file: str | None = None) -> None:
    """Render a report as JSON, to a file when one is given."""
    content = to_json(report)
    if output_file:
        _write_to_file(content, output_file)
    else:
        print(content)


def load_json(path: str, kind: type[Report]) -> Report:
    """Read a report written by render_json back into its model."""
    with open(path, encoding="utf-8") as f:
        return kind.from_dict(json.load(f))


def _period(report: OrgStats | RepoStats) -> str:
    if report.time_range is None:
        return ""
    return f"\nPeriod: {report.time_range.since} ~ {report.time_range.until}"


def _contributor_table(top: dict[str, int]) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Contributor")
    table.add_column("Commits ▼", justify="right")
    for i, (name, commits) in enumerate(top.items(), 1):
        table.add_row(str(i), name, _format_number(commits))
    return table


def render_summary(report: Report, console: Console | None = None) -> None:
    """Print a short summary of a report to the terminal."""
    console = console or Console()

    if isinstance(report, OrgStats):
        console.print(Panel(
            Text(f"org-stats: organization contributions{_period(report)}", justify="center"),
            style="bold cyan",
        ))
        summary = Table(show_header=False, box=None, padding=(0, 2))
        summary.add_column("label", style="dim")
        summary.add_column("value", style="bold")
        summary.add_row("Repositories", _format_number(report.repository_count))
        summary.add_row("Unique Contributors", _format_number(report.unique_contributor_count))
        summary.add_row("Total Commits", _format_number(report.total_commit_count))
        console.print(summary)

        if report.repositories:
            console.print()
            repo_table = Table(show_header=True, header_style="bold")
            repo_table.add_column("Repo")
            repo_table.add_column("Commits", justify="right")
            repo_table.add_column("Contributors", justify="right")
            repo_table.add_column("Top Contributor")
            ranked = sorted(report.repositories, key=lambda r: r.commit_count, reverse=True)
            for r in ranked:
                top = next(iter(r.top_contributors_by_commits), "-")
                repo_table.add_row(
                    r.repo.name,
                    _format_number(r.commit_count),
                    _format_number(r.contributor_count),
                    top,
                )
            console.print(repo_table)

    elif isinstance(report, RepoStats):
        console.print(Panel(
            Text(f"org-stats: {report.repo.full_name}{_period(report)}", justify="center"),
            style="bold cyan",
        ))
        console.print(
            f"Commits: [bold]{_format_number(report.commit_count)}[/bold]  "
            f"Contributors: [bold]{_format_number(report.contributor_count)}[/bold]"
        )
        if report.top_contributors_by_commits:
            console.print(_contributor_table(report.top_contributors_by_commits))

    else:
        milestone = f"\nMilestone: {report.milestone}" if report.milestone else ""
        console.print(Panel(
            Text(f"org-stats: {report.repo.full_name} pull requests{milestone}", justify="center"),
            style="bold cyan",
        ))
        console.print(f"Merged PRs: [bold]{_format_number(report.pr_count)}[/bold]")
        if report.tags:
            tag_table = Table(show_header=True, header_style="bold")
            tag_table.add_column("Label")
            tag_table.add_column("PRs ▼", justify="right")
            for name, count in sorted(report.tags.items(), key=lambda t: t[1], reverse=True):
                tag_table.add_row(name, _format_number(count))
            console.print(tag_table)
