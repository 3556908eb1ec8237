"""One retention pass over a repository."""

import logging
from dataclasses import dataclass

from workflow_retention.client import GitHubClient
from workflow_retention.config import RetentionOptions, parse_repository
from workflow_retention.driver import DeletionDriver
from workflow_retention.retention import (
    Clock,
    detect_orphans,
    filter_workflows,
    partition_runs,
    utc_now,
)

logger = logging.getLogger(__name__)


@dataclass
class RetentionReport:
    orphans_deleted: int = 0
    runs_deleted: int = 0
    runs_skipped: int = 0
    workflows_processed: int = 0


def run_retention(
    options: RetentionOptions,
    client: GitHubClient | None = None,
    driver: DeletionDriver | None = None,
    clock: Clock = utc_now,
) -> RetentionReport:
    """Delete orphan runs, then apply the retention policy workflow by workflow.

    The repository is validated before any request is made. Any error raised
    while listing or deleting aborts the pass.
    """
    owner, repo = parse_repository(options.repository)
    if client is None:
        client = GitHubClient(options.token, owner, repo, base_url=options.base_url)
    if driver is None:
        driver = DeletionDriver(client, dry_run=options.dry_run)
    report = RetentionReport()

    workflows = client.list_workflows()
    workflow_ids = [wf.id for wf in workflows]
    logger.debug("Found %d workflow(s) in %s/%s", len(workflows), owner, repo)

    orphans = detect_orphans(client.list_runs(), workflow_ids)
    driver.sink(
        f"💬 found total of {len(orphans)} workflow run(s) to delete without associated workflows"
    )
    for run in orphans:
        driver.delete(run.id, run.name)
        report.orphans_deleted += 1

    selected = filter_workflows(
        workflows,
        options.delete_workflow_pattern,
        options.delete_workflow_by_state_pattern,
    )
    logger.debug("%d workflow(s) selected by the workflow filters", len(selected))

    policy = options.policy(frozenset(client.list_branch_names()))

    for workflow in selected:
        runs = client.list_workflow_runs(workflow.id)
        partition = partition_runs(runs, policy, options.keep_minimum_runs, clock)

        for run in partition.del_runs:
            driver.delete(run.id, workflow.name)
            report.runs_deleted += 1

        for run in partition.skip_runs:
            driver.report_skipped(run, workflow.name)
            report.runs_skipped += 1

        report.workflows_processed += 1

    return report
