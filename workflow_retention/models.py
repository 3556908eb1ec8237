"""Workflow and workflow run records, as read from the GitHub API."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Self

COMPLETED = "completed"


def parse_timestamp(value: str | datetime) -> datetime:
    """Parse a GitHub ISO-8601 timestamp into an aware datetime (UTC if naive)."""
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class Workflow:
    """A CI pipeline definition."""

    id: int
    name: str
    path: str
    state: str

    @property
    def filename(self) -> str:
        """Return the workflow file name without its directory prefix."""
        return self.path.rsplit("/", 1)[-1]

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Self:
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            path=data.get("path") or "",
            state=data.get("state") or "",
        )


@dataclass(frozen=True)
class WorkflowRun:
    """One execution record of a workflow."""

    id: int
    workflow_id: int
    status: str
    created_at: datetime
    conclusion: str | None = None
    head_branch: str | None = None
    name: str = ""  # run label, used when the owning workflow is gone
    pull_requests: tuple[int, ...] = ()  # associated pull request numbers

    @property
    def is_completed(self) -> bool:
        return self.status == COMPLETED

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Self:
        return cls(
            id=data["id"],
            workflow_id=data["workflow_id"],
            status=data.get("status") or "",
            created_at=parse_timestamp(data["created_at"]),
            conclusion=data.get("conclusion"),
            head_branch=data.get("head_branch"),
            name=data.get("name") or "",
            pull_requests=tuple(
                pr["number"] for pr in data.get("pull_requests") or ()
            ),
        )


@dataclass(frozen=True)
class RetentionPolicy:
    """Per-run deletion criteria shared by every workflow of one invocation."""

    retain_days: float
    delete_run_by_conclusion_pattern: str = ""
    check_branch_existence: bool = False
    check_pullrequest_exist: bool = False
    branch_names: frozenset[str] = frozenset()


@dataclass
class RunPartition:
    """Runs of one workflow split into the ones to delete and the ones to keep."""

    del_runs: list[WorkflowRun] = field(default_factory=list)
    skip_runs: list[WorkflowRun] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.del_runs) + len(self.skip_runs)
