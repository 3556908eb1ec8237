"""Tests for the command-line entry point."""

from unittest.mock import patch

import pytest
import requests

import delete_old_workflows
from workflow_retention.errors import GitHubAPIError
from workflow_retention.runner import RetentionReport

ACTION_ENV = (
    "INPUT_TOKEN",
    "INPUT_REPOSITORY",
    "INPUT_RETAIN_DAYS",
    "INPUT_KEEP_MINIMUM_RUNS",
    "INPUT_DRY_RUN",
    "GITHUB_TOKEN",
    "GITHUB_REPOSITORY",
    "GITHUB_API_URL",
    "GITHUB_ACTIONS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    for name in ACTION_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def mock_run():
    with patch("delete_old_workflows.run_retention", return_value=RetentionReport()) as mock:
        yield mock


def test_flags_become_options(mock_run) -> None:
    """Test that command-line flags reach the retention pass."""
    code = delete_old_workflows.main(
        [
            "octo/hello",
            "--token", "t",
            "--retain-days", "14",
            "--keep-minimum-runs", "2",
            "--conclusions", "failure,cancelled",
            "--states", "active",
            "--workflow-pattern", "ci",
            "--check-branch-existence",
            "--dry-run",
        ]
    )
    assert code == 0
    options = mock_run.call_args.args[0]
    assert options.repository == "octo/hello"
    assert options.token == "t"
    assert options.retain_days == 14.0
    assert options.keep_minimum_runs == 2
    assert options.delete_run_by_conclusion_pattern == "failure,cancelled"
    assert options.delete_workflow_by_state_pattern == "active"
    assert options.delete_workflow_pattern == "ci"
    assert options.check_branch_existence is True
    assert options.check_pullrequest_exist is False
    assert options.dry_run is True


def test_action_inputs_are_defaults(mock_run, monkeypatch) -> None:
    """Test that INPUT_* variables are used when no flag is given."""
    monkeypatch.setenv("INPUT_REPOSITORY", "octo/hello")
    monkeypatch.setenv("INPUT_RETAIN_DAYS", "3")
    monkeypatch.setenv("INPUT_DRY_RUN", "true")
    assert delete_old_workflows.main([]) == 0
    options = mock_run.call_args.args[0]
    assert options.repository == "octo/hello"
    assert options.retain_days == 3.0
    assert options.dry_run is True


def test_invalid_repository_fails() -> None:
    """Test that a malformed repository exits with 1 before any request."""
    with patch("workflow_retention.runner.GitHubClient") as client_cls:
        assert delete_old_workflows.main(["not-a-repo"]) == 1
    client_cls.assert_not_called()


def test_api_error_fails(mock_run, caplog) -> None:
    """Test that API errors are reported and give exit code 1."""
    mock_run.side_effect = GitHubAPIError(401, "Bad credentials")
    assert delete_old_workflows.main(["octo/hello"]) == 1
    assert "Bad credentials" in caplog.text


def test_connection_error_fails(mock_run) -> None:
    """Test that transport errors give exit code 1."""
    mock_run.side_effect = requests.ConnectionError("boom")
    assert delete_old_workflows.main(["octo/hello"]) == 1


def test_actions_error_annotation(mock_run, monkeypatch, capsys) -> None:
    """Test the ::error:: workflow command inside GitHub Actions."""
    monkeypatch.setenv("GITHUB_ACTIONS", "true")
    mock_run.side_effect = GitHubAPIError(404, "Not Found")
    assert delete_old_workflows.main(["octo/hello"]) == 1
    assert "::error::GitHub API request failed (404: Not Found)" in capsys.readouterr().out


def test_negative_retain_days_rejected() -> None:
    """Test that argparse refuses a negative retention."""
    with pytest.raises(SystemExit) as exc_info:
        delete_old_workflows.main(["octo/hello", "--retain-days", "-1"])
    assert exc_info.value.code == 2
