"""Delete old GitHub Actions workflow runs according to a retention policy.

Every option can also be given as an action input (INPUT_<NAME> environment
variable), which is how the GitHub Actions runner passes them:

    delete-old-workflows owner/repo --retain-days 14 --keep-minimum-runs 2
    delete-old-workflows owner/repo --conclusions failure,cancelled --dry-run
"""

import argparse
import logging
import os
import sys

import requests

from workflow_retention import __version__
from workflow_retention.config import (
    RetentionOptions,
    env_defaults,
    parse_bool,
    parse_count,
    parse_days,
)
from workflow_retention.errors import RetentionError
from workflow_retention.runner import run_retention

logger = logging.getLogger("delete_old_workflows")


def build_parser(env=None) -> argparse.ArgumentParser:
    defaults = env_defaults(env)
    parser = argparse.ArgumentParser(
        prog="delete-old-workflows",
        description="Delete GitHub Actions workflow runs older than a retention period.",
    )
    parser.add_argument(
        "repository",
        nargs="?",
        default=defaults["repository"],
        help="Repository as owner/repo (or INPUT_REPOSITORY / GITHUB_REPOSITORY)",
    )
    parser.add_argument(
        "--token",
        default=defaults["token"],
        help="GitHub token (or INPUT_TOKEN / GITHUB_TOKEN)",
    )
    parser.add_argument(
        "--base-url",
        default=defaults["base_url"],
        help="API base URL, for GitHub Enterprise (or INPUT_BASEURL / GITHUB_API_URL)",
    )
    parser.add_argument(
        "--retain-days",
        type=parse_days,
        default=defaults["retain_days"],
        help="Runs younger than this many days are kept",
    )
    parser.add_argument(
        "--keep-minimum-runs",
        type=parse_count,
        default=defaults["keep_minimum_runs"],
        help="Minimum number of old runs kept per workflow",
    )
    parser.add_argument(
        "--workflow-pattern",
        dest="delete_workflow_pattern",
        default=defaults["delete_workflow_pattern"],
        help="Only process workflows whose name or file name contains this text",
    )
    parser.add_argument(
        "--states",
        dest="delete_workflow_by_state_pattern",
        default=defaults["delete_workflow_by_state_pattern"],
        help="Comma-separated workflow states to process, or ALL (default)",
    )
    parser.add_argument(
        "--conclusions",
        dest="delete_run_by_conclusion_pattern",
        default=defaults["delete_run_by_conclusion_pattern"],
        help="Comma-separated run conclusions eligible for deletion (default: all)",
    )
    parser.add_argument(
        "--check-branch-existence",
        action="store_true",
        default=parse_bool(defaults["check_branch_existence"]),
        help="Keep runs whose head branch still exists",
    )
    parser.add_argument(
        "--check-pullrequest-exist",
        action="store_true",
        default=parse_bool(defaults["check_pullrequest_exist"]),
        help="Keep runs linked to a pull request",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=parse_bool(defaults["dry_run"]),
        help="Log what would be deleted without deleting anything",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def options_from_args(args: argparse.Namespace) -> RetentionOptions:
    return RetentionOptions(
        repository=args.repository or "",
        token=args.token,
        base_url=args.base_url,
        retain_days=parse_days(args.retain_days),
        keep_minimum_runs=parse_count(args.keep_minimum_runs),
        delete_workflow_pattern=args.delete_workflow_pattern,
        delete_workflow_by_state_pattern=args.delete_workflow_by_state_pattern,
        delete_run_by_conclusion_pattern=args.delete_run_by_conclusion_pattern,
        dry_run=args.dry_run,
        check_branch_existence=args.check_branch_existence,
        check_pullrequest_exist=args.check_pullrequest_exist,
    )


def set_failed(message: str) -> None:
    logger.error(message)
    if os.environ.get("GITHUB_ACTIONS") == "true":
        # workflow command understood by the Actions runner
        print(f"::error::{message}", flush=True)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s")
    else:
        logging.basicConfig(level=logging.INFO, format="%(message)s")

    try:
        options = options_from_args(args)
        report = run_retention(options)
    except (RetentionError, requests.RequestException) as exc:
        set_failed(str(exc))
        return 1

    logger.debug(
        "Deleted %d orphan run(s) and %d run(s), kept %d run(s) across %d workflow(s)",
        report.orphans_deleted,
        report.runs_deleted,
        report.runs_skipped,
        report.workflows_processed,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
