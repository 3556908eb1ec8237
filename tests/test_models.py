"""Tests for the API record models."""

from datetime import datetime, timezone

from workflow_retention.models import Workflow, WorkflowRun, parse_timestamp


def test_parse_timestamp_with_z_suffix() -> None:
    """Test parsing GitHub's UTC timestamps."""
    assert parse_timestamp("2024-05-01T10:20:30Z") == datetime(
        2024, 5, 1, 10, 20, 30, tzinfo=timezone.utc
    )


def test_parse_timestamp_naive_is_utc() -> None:
    """Test that naive timestamps are taken as UTC."""
    assert parse_timestamp("2024-05-01T10:20:30").tzinfo == timezone.utc


def test_workflow_from_api() -> None:
    """Test building a Workflow from an API payload."""
    wf = Workflow.from_api(
        {
            "id": 161335,
            "node_id": "MDg6V29ya2Zsb3cxNjEzMzU=",
            "name": "CI",
            "path": ".github/workflows/blank.yaml",
            "state": "active",
        }
    )
    assert wf == Workflow(161335, "CI", ".github/workflows/blank.yaml", "active")
    assert wf.filename == "blank.yaml"


def test_workflow_filename_without_directory() -> None:
    """Test that a bare path is its own file name."""
    assert Workflow(1, "x", "ci.yml", "active").filename == "ci.yml"


def test_run_from_api() -> None:
    """Test building a WorkflowRun from an API payload."""
    run = WorkflowRun.from_api(
        {
            "id": 30433642,
            "name": "Build",
            "head_branch": "master",
            "status": "completed",
            "conclusion": "failure",
            "workflow_id": 159038,
            "created_at": "2020-01-22T19:33:08Z",
            "pull_requests": [{"id": 1, "number": 7}],
        }
    )
    assert run.id == 30433642
    assert run.workflow_id == 159038
    assert run.name == "Build"
    assert run.head_branch == "master"
    assert run.conclusion == "failure"
    assert run.is_completed is True
    assert run.pull_requests == (7,)
    assert run.created_at == datetime(2020, 1, 22, 19, 33, 8, tzinfo=timezone.utc)


def test_run_from_api_in_progress() -> None:
    """Test defaults for a run that has not finished."""
    run = WorkflowRun.from_api(
        {
            "id": 1,
            "workflow_id": 2,
            "status": "in_progress",
            "conclusion": None,
            "created_at": "2020-01-22T19:33:08Z",
        }
    )
    assert run.is_completed is False
    assert run.conclusion is None
    assert run.pull_requests == ()
    assert run.name == ""
