"""Retention policy for GitHub Actions workflow runs."""

from workflow_retention.client import GitHubClient
from workflow_retention.config import RetentionOptions, options_from_env, parse_repository
from workflow_retention.driver import DeletionDriver
from workflow_retention.errors import (
    ConfigurationError,
    GitHubAPIError,
    InvalidRepositoryError,
    RateLimitError,
    RetentionError,
)
from workflow_retention.models import RetentionPolicy, RunPartition, Workflow, WorkflowRun
from workflow_retention.patterns import parse_pattern_list
from workflow_retention.retention import (
    apply_floor,
    classify_runs,
    detect_orphans,
    filter_workflows,
    partition_runs,
)
from workflow_retention.runner import RetentionReport, run_retention

__version__ = "1.0.0"

__all__ = [
    "ConfigurationError",
    "DeletionDriver",
    "GitHubAPIError",
    "GitHubClient",
    "InvalidRepositoryError",
    "RateLimitError",
    "RetentionError",
    "RetentionOptions",
    "RetentionPolicy",
    "RetentionReport",
    "RunPartition",
    "Workflow",
    "WorkflowRun",
    "apply_floor",
    "classify_runs",
    "detect_orphans",
    "filter_workflows",
    "options_from_env",
    "parse_pattern_list",
    "parse_repository",
    "partition_runs",
    "run_retention",
]
