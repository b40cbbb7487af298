"""Tests for the data models."""

from __future__ import annotations

import dataclasses
import json

import pytest

from org_stats.models import OrgStats, PullRequestStats, RepoId, RepoStats, TimeRange


def test_time_range_needs_both_bounds():
    assert TimeRange.from_bounds(None, None) is None
    assert TimeRange.from_bounds("2024-01-01T00:00:00Z", None) is None
    assert TimeRange.from_bounds(None, "2024-01-01T00:00:00Z") is None
    assert TimeRange.from_bounds("a", "b") == TimeRange(since="a", until="b")


def test_repo_id_full_name():
    assert RepoId(owner="org", name="repo").full_name == "org/repo"


def test_models_are_immutable():
    stats = PullRequestStats(repo=RepoId("org", "repo"), pr_count=1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        stats.pr_count = 2


def test_org_stats_json_round_trip():
    org = OrgStats(
        repository_count=2,
        unique_contributor_count=3,
        total_commit_count=15,
        repositories=[
            RepoStats(
                repo=RepoId("org", "r1"),
                contributor_count=2,
                commit_count=10,
                contributors=["alice", "bob"],
                top_contributors_by_commits={"alice": 7, "bob": 3},
                time_range=TimeRange("2024-01-01T00:00:00Z", "2024-12-31T00:00:00Z"),
            ),
            RepoStats(
                repo=RepoId("org", "r2"),
                contributor_count=2,
                commit_count=5,
                contributors=["alice", "carol@example.com"],
                top_contributors_by_commits={"carol@example.com": 4, "alice": 1},
                time_range=TimeRange("2024-01-01T00:00:00Z", "2024-12-31T00:00:00Z"),
            ),
        ],
        time_range=TimeRange("2024-01-01T00:00:00Z", "2024-12-31T00:00:00Z"),
    )
    restored = OrgStats.from_dict(json.loads(json.dumps(dataclasses.asdict(org))))
    assert restored == org


def test_pull_request_stats_from_dict_without_milestone():
    data = {"repo": {"owner": "org", "name": "repo"}, "pr_count": 2, "tags": {"bug": 2}}
    stats = PullRequestStats.from_dict(data)
    assert stats.milestone is None
    assert stats.tags == {"bug": 2}
