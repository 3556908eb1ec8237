"""Deletion of selected runs and reporting of the runs that stay."""

import logging
from collections.abc import Callable
from typing import Protocol

from workflow_retention.models import WorkflowRun

logger = logging.getLogger(__name__)

Sink = Callable[[str], None]


class RunDeleter(Protocol):
    def delete_run(self, run_id: int) -> None: ...


class DeletionDriver:
    """Delete runs one at a time, or only announce it in dry-run mode.

    Messages go to ``sink``; a failing delete call propagates to the caller.
    """

    def __init__(self, client: RunDeleter, dry_run: bool = False, sink: Sink | None = None):
        self.client = client
        self.dry_run = dry_run
        self.sink = sink if sink is not None else logger.info

    def delete(self, run_id: int, workflow_name: str) -> None:
        if self.dry_run:
            self.sink(f"[dry-run] 🚀 Delete run {run_id} of '{workflow_name}' workflow")
        else:
            self.client.delete_run(run_id)
            self.sink(f"🚀 Delete run {run_id} of '{workflow_name}' workflow")

    def report_skipped(self, run: WorkflowRun, workflow_name: str) -> None:
        created_at = run.created_at.isoformat().replace("+00:00", "Z")
        self.sink(f"👻 Skipped '{workflow_name}' workflow run {run.id}: created at {created_at}")
