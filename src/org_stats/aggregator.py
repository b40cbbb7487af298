"""Aggregate commits and pull requests into repository and organization stats."""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from .fetcher import (
    DEFAULT_ABORT_BUDGET,
    fetch_all_commits,
    fetch_all_pull_requests,
    fetch_all_repos,
)
from .github.source import ActivitySource
from .models import OrgStats, PullRequestStats, RepoId, RepoStats, TimeRange

logger = logging.getLogger(__name__)

TOP_CONTRIBUTORS = 5


@dataclass
class ContributorTally:
    unique: set[str] = field(default_factory=set)
    commits_per_contributor: dict[str, int] = field(default_factory=dict)
    top: list[tuple[str, int]] = field(default_factory=list)


@dataclass
class LabelTally:
    tags: dict[str, int] = field(default_factory=dict)
    total: int = 0


def contributor_identity(commit: dict[str, Any]) -> str | None:
    """Return the author's login, falling back to the raw author email."""
    login = (commit.get("author") or {}).get("login")
    if login:
        return login
    email = ((commit.get("commit") or {}).get("author") or {}).get("email")
    return email or None


def aggregate_contributors(
    commits: Iterable[dict[str, Any]], top_n: int = TOP_CONTRIBUTORS
) -> ContributorTally:
    """Count commits per contributor and rank the busiest ones.

    Commits without any identity are skipped. Contributors with equal counts
    keep the order in which they were first seen.
    """
    counts: Counter[str] = Counter()
    for commit in commits:
        identity = contributor_identity(commit)
        if identity is not None:
            counts[identity] += 1

    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return ContributorTally(
        unique=set(counts),
        commits_per_contributor=dict(counts),
        top=ranked[:top_n],
    )


def aggregate_labels(
    pull_requests: Iterable[dict[str, Any]], milestone: str | None = None
) -> LabelTally:
    """Count label occurrences over merged pull requests."""
    tally = LabelTally()
    for pr in pull_requests:
        if pr.get("merged_at") is None:
            continue
        if milestone and (pr.get("milestone") or {}).get("title") != milestone:
            continue
        tally.total += 1
        for label in pr.get("labels") or []:
            name = label["name"]
            tally.tags[name] = tally.tags.get(name, 0) + 1
    return tally


async def repo_contribution_stats(
    source: ActivitySource,
    repo: RepoId,
    since: str | None = None,
    until: str | None = None,
) -> RepoStats:
    commits = await fetch_all_commits(source, repo, since=since, until=until)
    tally = aggregate_contributors(commits)
    logger.debug(
        "%s: %d commits, %d contributors", repo.full_name, len(commits), len(tally.unique)
    )
    return RepoStats(
        repo=repo,
        contributor_count=len(tally.unique),
        commit_count=len(commits),
        contributors=sorted(tally.unique),
        top_contributors_by_commits=dict(tally.top),
        time_range=TimeRange.from_bounds(since, until),
    )


async def pull_request_stats(
    source: ActivitySource,
    repo: RepoId,
    milestone: str | None = None,
    abort_budget: int = DEFAULT_ABORT_BUDGET,
) -> PullRequestStats:
    pull_requests = await fetch_all_pull_requests(
        source, repo, state="merged", milestone=milestone, abort_budget=abort_budget
    )
    tally = aggregate_labels(pull_requests, milestone=milestone)
    logger.debug("%s: %d merged pull requests counted", repo.full_name, tally.total)
    return PullRequestStats(
        repo=repo,
        pr_count=tally.total,
        tags=tally.tags,
        milestone=milestone,
    )


def rollup_org_stats(
    repositories: list[RepoStats], time_range: TimeRange | None = None
) -> OrgStats:
    """Reduce per-repository stats into organization totals.

    Contributors active in several repositories are counted once.
    """
    unique: set[str] = set()
    for stats in repositories:
        unique.update(stats.contributors)
    return OrgStats(
        repository_count=len(repositories),
        unique_contributor_count=len(unique),
        total_commit_count=sum(stats.commit_count for stats in repositories),
        repositories=list(repositories),
        time_range=time_range,
    )


async def organization_stats(
    source: ActivitySource,
    org: str,
    since: str | None = None,
    until: str | None = None,
    max_concurrency: int | None = None,
) -> OrgStats:
    """Collect contribution stats for every public repository of ``org``.

    All repositories are fetched at once unless ``max_concurrency`` caps the
    number in flight. Any failing repository fails the whole rollup.
    """
    logger.info(
        "Gathering stats for org %s in time range %s to %s",
        org,
        since or "all time",
        until or "now",
    )
    repos = await fetch_all_repos(source, org)
    logger.debug(
        "Repos for org %s (%d): %s", org, len(repos), ", ".join(r["name"] for r in repos)
    )

    semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency else None

    async def _one(name: str) -> RepoStats:
        repo = RepoId(owner=org, name=name)
        if semaphore is None:
            return await repo_contribution_stats(source, repo, since, until)
        async with semaphore:
            return await repo_contribution_stats(source, repo, since, until)

    repositories = await asyncio.gather(*(_one(r["name"]) for r in repos))
    return rollup_org_stats(list(repositories), TimeRange.from_bounds(since, until))
