"""Drain paged GitHub listings into lists."""

from __future__ import annotations

import logging
import time
from contextlib import aclosing
from typing import Any

from .github.source import ActivitySource
from .models import RepoId

logger = logging.getLogger(__name__)

PR_STATES = ("open", "closed", "merged", "all")
DEFAULT_ABORT_BUDGET = 500


def _milestone_title(pr: dict[str, Any]) -> str | None:
    milestone = pr.get("milestone") or {}
    return milestone.get("title")


async def fetch_all_repos(source: ActivitySource, org: str) -> list[dict[str, Any]]:
    """Fetch every public repository of an organization."""
    logger.debug("Fetching all repos for organization %s ...", org)
    started = time.perf_counter()
    results: list[dict[str, Any]] = []
    async for page in source.repo_pages(org, type="public"):
        results.extend(page)
    logger.debug(
        "Fetched %d repos for %s in %.2fs", len(results), org, time.perf_counter() - started
    )
    return results


async def fetch_all_commits(
    source: ActivitySource,
    repo: RepoId,
    since: str | None = None,
    until: str | None = None,
) -> list[dict[str, Any]]:
    """Fetch every commit of a repository, optionally bounded in time."""
    logger.debug("Fetching all commits for %s ...", repo.full_name)
    started = time.perf_counter()
    results: list[dict[str, Any]] = []
    async for page in source.commit_pages(repo.owner, repo.name, since=since, until=until):
        results.extend(page)
    logger.debug(
        "Fetched %d commits for %s in %.2fs",
        len(results),
        repo.full_name,
        time.perf_counter() - started,
    )
    return results


async def fetch_all_pull_requests(
    source: ActivitySource,
    repo: RepoId,
    state: str = "all",
    milestone: str | None = None,
    abort_budget: int = DEFAULT_ABORT_BUDGET,
) -> list[dict[str, Any]]:
    """Fetch the pull requests of a repository.

    ``state="merged"`` is requested as ``closed`` and narrowed to pull
    requests with a merge timestamp.

    With a ``milestone``, pull requests are requested most recently updated
    first and only those with that milestone title are kept. Every mismatch
    decrements a countdown starting at ``abort_budget``; once it reaches
    zero no further pull requests are read, even if more pages exist.
    Matching pull requests older than that point are missed.
    """
    if state not in PR_STATES:
        raise ValueError(f"Unknown pull request state: {state!r}")

    logger.debug("Fetching all pull requests for %s ...", repo.full_name)
    started = time.perf_counter()
    remote_state = "closed" if state == "merged" else state
    sort, direction = ("updated", "desc") if milestone else (None, None)

    results: list[dict[str, Any]] = []
    countdown = abort_budget
    pages = source.pull_request_pages(
        repo.owner, repo.name, state=remote_state, sort=sort, direction=direction
    )
    async with aclosing(pages):
        async for page in pages:
            for pr in page:
                if milestone and _milestone_title(pr) != milestone:
                    countdown -= 1
                    if countdown <= 0:
                        break
                    continue
                if state == "merged" and pr.get("merged_at") is None:
                    continue
                results.append(pr)
            if milestone and countdown <= 0:
                logger.debug(
                    "Stopped fetching pull requests for %s after %d without milestone %r",
                    repo.full_name,
                    abort_budget,
                    milestone,
                )
                break

    logger.debug(
        "Fetched %d pull requests for %s in %.2fs",
        len(results),
        repo.full_name,
        time.perf_counter() - started,
    )
    return results
