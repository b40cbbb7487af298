"""Data models for org-stats."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RepoId:
    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RepoId:
        return cls(owner=data["owner"], name=data["name"])


@dataclass(frozen=True)
class TimeRange:
    since: str
    until: str

    @classmethod
    def from_bounds(cls, since: str | None, until: str | None) -> TimeRange | None:
        """Build a range only when both bounds are given."""
        if since and until:
            return cls(since=since, until=until)
        return None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> TimeRange | None:
        if data is None:
            return None
        return cls(since=data["since"], until=data["until"])


@dataclass(frozen=True)
class RepoStats:
    repo: RepoId
    contributor_count: int
    commit_count: int
    contributors: list[str] = field(default_factory=list)
    top_contributors_by_commits: dict[str, int] = field(default_factory=dict)
    time_range: TimeRange | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RepoStats:
        return cls(
            repo=RepoId.from_dict(data["repo"]),
            contributor_count=data["contributor_count"],
            commit_count=data["commit_count"],
            contributors=list(data.get("contributors", [])),
            top_contributors_by_commits=dict(data.get("top_contributors_by_commits", {})),
            time_range=TimeRange.from_dict(data.get("time_range")),
        )


@dataclass(frozen=True)
class PullRequestStats:
    repo: RepoId
    pr_count: int
    tags: dict[str, int] = field(default_factory=dict)
    milestone: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PullRequestStats:
        return cls(
            repo=RepoId.from_dict(data["repo"]),
            pr_count=data["pr_count"],
            tags=dict(data.get("tags", {})),
            milestone=data.get("milestone"),
        )


@dataclass(frozen=True)
class OrgStats:
    repository_count: int
    unique_contributor_count: int
    total_commit_count: int
    repositories: list[RepoStats] = field(default_factory=list)
    time_range: TimeRange | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OrgStats:
        return cls(
            repository_count=data["repository_count"],
            unique_contributor_count=data["unique_contributor_count"],
            total_commit_count=data["total_commit_count"],
            repositories=[RepoStats.from_dict(r) for r in data.get("repositories", [])],
            time_range=TimeRange.from_dict(data.get("time_range")),
        )
