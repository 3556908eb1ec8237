"""Retention decisions for workflow runs.

Everything in this module is a pure function of its arguments: it decides
which runs should go and never talks to the API or writes log output.
"""

from collections.abc import Callable, Iterable
from datetime import datetime, timedelta, timezone

from workflow_retention.models import (
    RetentionPolicy,
    RunPartition,
    Workflow,
    WorkflowRun,
)
from workflow_retention.patterns import is_all_sentinel, parse_pattern_list

Clock = Callable[[], datetime]

ONE_DAY = timedelta(days=1)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def filter_workflows(
    workflows: Iterable[Workflow],
    name_pattern: str | None = None,
    state_pattern: str | None = None,
) -> list[Workflow]:
    """Narrow the workflow catalog by name/file name and by state.

    A workflow passes the name filter when its name or its file name contains
    ``name_pattern``. The state filter keeps workflows whose state is listed
    in ``state_pattern`` unless the pattern is ``ALL``. Missing patterns do
    not filter anything.
    """
    selected = list(workflows)
    if name_pattern:
        selected = [
            wf
            for wf in selected
            if name_pattern in wf.name or name_pattern in wf.filename
        ]
    if state_pattern and not is_all_sentinel(state_pattern):
        states = parse_pattern_list(state_pattern)
        selected = [wf for wf in selected if wf.state in states]
    return selected


def detect_orphans(
    all_runs: Iterable[WorkflowRun], known_workflow_ids: Iterable[int]
) -> list[WorkflowRun]:
    """Return runs whose workflow no longer exists in the repository."""
    known = set(known_workflow_ids)
    return [run for run in all_runs if run.workflow_id not in known]


def should_skip(
    run: WorkflowRun,
    policy: RetentionPolicy,
    conclusions: frozenset[str] | None = None,
) -> bool:
    """Return True if the run must be kept whatever its age."""
    if conclusions is None:
        conclusions = parse_pattern_list(policy.delete_run_by_conclusion_pattern)
    return (
        not run.is_completed
        or (policy.check_pullrequest_exist and len(run.pull_requests) > 0)
        or (policy.check_branch_existence and run.head_branch in policy.branch_names)
        or (
            bool(policy.delete_run_by_conclusion_pattern)
            and run.conclusion not in conclusions
        )
    )


def elapsed_days(run: WorkflowRun, now: datetime) -> float:
    return (now - run.created_at) / ONE_DAY


def classify_runs(
    runs: Iterable[WorkflowRun],
    policy: RetentionPolicy,
    clock: Clock = utc_now,
) -> RunPartition:
    """Split one workflow's runs into deletion candidates and kept runs.

    Runs excluded by :func:`should_skip` are kept without looking at their
    age. The rest are deletion candidates once they are at least
    ``policy.retain_days`` old. ``clock`` is read once per aged run.
    """
    conclusions = parse_pattern_list(policy.delete_run_by_conclusion_pattern)
    partition = RunPartition()
    for run in runs:
        if should_skip(run, policy, conclusions):
            partition.skip_runs.append(run)
        elif elapsed_days(run, clock()) >= policy.retain_days:
            partition.del_runs.append(run)
        else:
            partition.skip_runs.append(run)
    return partition


def apply_floor(partition: RunPartition, keep_minimum_runs: int) -> RunPartition:
    """Spare the newest ``keep_minimum_runs`` deletion candidates.

    Candidates are ordered by id, the largest ids being the newest runs. The
    guard only ever moves runs from ``del_runs`` to ``skip_runs``.
    """
    if len(partition.del_runs) <= keep_minimum_runs:
        return RunPartition(list(partition.del_runs), list(partition.skip_runs))

    candidates = sorted(partition.del_runs, key=lambda run: run.id)
    cut = len(candidates) - keep_minimum_runs
    return RunPartition(
        del_runs=candidates[:cut],
        skip_runs=list(partition.skip_runs) + candidates[cut:],
    )


def partition_runs(
    runs: Iterable[WorkflowRun],
    policy: RetentionPolicy,
    keep_minimum_runs: int,
    clock: Clock = utc_now,
) -> RunPartition:
    """Final delete/keep split for the runs of a single workflow."""
    return apply_floor(classify_runs(runs, policy, clock), keep_minimum_runs)
