"""Shared fixtures: an in-memory stand-in for the GitHub listings."""

from __future__ import annotations

from typing import Any

import pytest


def commit(login: str | None = None, email: str | None = None) -> dict[str, Any]:
    return {
        "sha": "0" * 40,
        "author": {"login": login} if login else None,
        "commit": {"author": {"email": email} if email else None},
    }


def pull(
    merged_at: str | None = "2024-07-01T00:00:00Z",
    milestone: str | None = None,
    labels: list[str] | None = None,
) -> dict[str, Any]:
    return {
        "merged_at": merged_at,
        "milestone": {"title": milestone} if milestone else None,
        "labels": [{"name": name} for name in labels or []],
    }


def pages_of(items: list[dict[str, Any]], size: int = 100) -> list[list[dict[str, Any]]]:
    return [items[i:i + size] for i in range(0, len(items), size)]


class FakeSource:
    """Serves canned pages and records every listing call."""

    def __init__(
        self,
        repos: list[dict[str, Any]] | None = None,
        commits: dict[str, list[dict[str, Any]]] | None = None,
        pulls: list[dict[str, Any]] | None = None,
        page_size: int = 100,
        failing_repos: set[str] | None = None,
    ) -> None:
        self.repos = repos or []
        self.commits = commits or {}
        self.pulls = pulls or []
        self.page_size = page_size
        self.failing_repos = failing_repos or set()
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.pages_served = 0

    async def _serve(self, items):
        for page in pages_of(items, self.page_size):
            self.pages_served += 1
            yield page

    def repo_pages(self, org, *, type="public"):
        self.calls.append(("repos", {"org": org, "type": type}))
        return self._serve(self.repos)

    def commit_pages(self, owner, repo, *, since=None, until=None):
        self.calls.append(
            ("commits", {"owner": owner, "repo": repo, "since": since, "until": until})
        )
        if repo in self.failing_repos:
            return self._fail(repo)
        return self._serve(self.commits.get(repo, []))

    def pull_request_pages(self, owner, repo, *, state="all", sort=None, direction=None):
        self.calls.append(
            ("pulls", {"owner": owner, "repo": repo, "state": state,
                       "sort": sort, "direction": direction})
        )
        return self._serve(self.pulls)

    async def _fail(self, repo):
        raise RuntimeError(f"API error for {repo}")
        yield  # pragma: no cover


@pytest.fixture
def fake_source():
    return FakeSource(
        repos=[{"name": "repo1"}, {"name": "repo2"}],
        commits={
            "repo1": [commit("alice"), commit("bob"), commit("alice")],
            "repo2": [commit("alice"), commit(email="carol@example.com"), commit()],
        },
    )
