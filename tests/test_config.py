"""Tests for the run configuration."""

from __future__ import annotations

import pytest

from org_stats.config import Command, ConfigurationError, ReportConfig
from org_stats.models import RepoId, TimeRange


def _config(**kwargs) -> ReportConfig:
    defaults = dict(command=Command.CONTRIBUTION_STATS, owner="org", token="t")
    defaults.update(kwargs)
    return ReportConfig(**defaults)


def test_default_output_path_per_command():
    assert _config().output_path == "out/contribution_stats.json"
    assert _config(command=Command.PULL_REQUEST_STATS).output_path == "out/pull_request_stats.json"
    assert _config(out_file="report.json").output_path == "report.json"


def test_repo_id_and_time_range():
    config = _config(repo="repo", since="s", until="u")
    assert config.repo_id == RepoId("org", "repo")
    assert config.time_range == TimeRange("s", "u")
    assert _config().repo_id is None
    assert _config(since="s").time_range is None


def test_configuration_error_exit_code():
    assert ConfigurationError("x").exit_code == 1


@pytest.mark.parametrize(
    "kwargs",
    [
        {"token": ""},
        {"owner": ""},
        {"command": Command.PULL_REQUEST_STATS},
        {"max_concurrency": 0},
        {"abort_budget": 0},
    ],
)
def test_validate_rejects(kwargs):
    with pytest.raises(ConfigurationError):
        _config(**kwargs).validate()


def test_validate_accepts_complete_config():
    _config().validate()
    _config(command=Command.PULL_REQUEST_STATS, repo="repo").validate()


def test_empty_repo_means_whole_organization():
    assert _config(repo="").repo_id is None
