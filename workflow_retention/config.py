"""Options of a retention invocation and how they are read from the environment."""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from workflow_retention.client import DEFAULT_BASE_URL
from workflow_retention.errors import ConfigurationError, InvalidRepositoryError
from workflow_retention.models import RetentionPolicy

DEFAULT_RETAIN_DAYS = 30.0
DEFAULT_KEEP_MINIMUM_RUNS = 6


@dataclass(frozen=True)
class RetentionOptions:
    repository: str
    token: str = ""
    base_url: str = DEFAULT_BASE_URL
    retain_days: float = DEFAULT_RETAIN_DAYS
    keep_minimum_runs: int = DEFAULT_KEEP_MINIMUM_RUNS
    delete_workflow_pattern: str = ""
    delete_workflow_by_state_pattern: str = "ALL"
    delete_run_by_conclusion_pattern: str = ""
    dry_run: bool = False
    check_branch_existence: bool = False
    check_pullrequest_exist: bool = False

    def __post_init__(self) -> None:
        if self.retain_days < 0:
            raise ConfigurationError("retain_days must be 0 or greater")
        if self.keep_minimum_runs < 0:
            raise ConfigurationError("keep_minimum_runs must be 0 or greater")

    def policy(self, branch_names: frozenset[str] = frozenset()) -> RetentionPolicy:
        return RetentionPolicy(
            retain_days=self.retain_days,
            delete_run_by_conclusion_pattern=self.delete_run_by_conclusion_pattern,
            check_branch_existence=self.check_branch_existence,
            check_pullrequest_exist=self.check_pullrequest_exist,
            branch_names=branch_names,
        )


def parse_repository(repository: str) -> tuple[str, str]:
    """Split 'owner/name' into its two parts."""
    parts = repository.split("/")
    if len(parts) != 2 or not all(parts):
        raise InvalidRepositoryError(repository)
    return parts[0], parts[1]


def parse_bool(value: str | bool | None) -> bool:
    if isinstance(value, bool):
        return value
    return (value or "").strip().lower() == "true"


def parse_days(value: str | float) -> float:
    try:
        days = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"retain_days must be a number, got '{value}'") from exc
    if days < 0:
        raise ConfigurationError("retain_days must be 0 or greater")
    return days


def parse_count(value: str | int) -> int:
    try:
        count = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(
            f"keep_minimum_runs must be an integer, got '{value}'"
        ) from exc
    if count < 0:
        raise ConfigurationError("keep_minimum_runs must be 0 or greater")
    return count


def get_input(name: str, env: Mapping[str, str] | None = None, default: str = "") -> str:
    """Read an action input the way the Actions runner exposes it (INPUT_<NAME>)."""
    env = os.environ if env is None else env
    key = "INPUT_" + name.replace(" ", "_").upper()
    return env.get(key, "").strip() or default


def env_defaults(env: Mapping[str, str] | None = None) -> dict[str, str]:
    """Option defaults taken from action inputs, then from the Actions runner context."""
    env = os.environ if env is None else env
    return {
        "token": get_input("token", env) or env.get("GITHUB_TOKEN", ""),
        "base_url": get_input("baseUrl", env) or env.get("GITHUB_API_URL", DEFAULT_BASE_URL),
        "repository": get_input("repository", env) or env.get("GITHUB_REPOSITORY", ""),
        "retain_days": get_input("retain_days", env, str(DEFAULT_RETAIN_DAYS)),
        "keep_minimum_runs": get_input(
            "keep_minimum_runs", env, str(DEFAULT_KEEP_MINIMUM_RUNS)
        ),
        "delete_workflow_pattern": get_input("delete_workflow_pattern", env),
        "delete_workflow_by_state_pattern": get_input(
            "delete_workflow_by_state_pattern", env, "ALL"
        ),
        "delete_run_by_conclusion_pattern": get_input("delete_run_by_conclusion_pattern", env),
        "dry_run": get_input("dry_run", env, "false"),
        "check_branch_existence": get_input("check_branch_existence", env, "false"),
        "check_pullrequest_exist": get_input("check_pullrequest_exist", env, "false"),
    }


def options_from_env(env: Mapping[str, str] | None = None) -> RetentionOptions:
    values = env_defaults(env)
    return RetentionOptions(
        repository=values["repository"],
        token=values["token"],
        base_url=values["base_url"],
        retain_days=parse_days(values["retain_days"]),
        keep_minimum_runs=parse_count(values["keep_minimum_runs"]),
        delete_workflow_pattern=values["delete_workflow_pattern"],
        delete_workflow_by_state_pattern=values["delete_workflow_by_state_pattern"],
        delete_run_by_conclusion_pattern=values["delete_run_by_conclusion_pattern"],
        dry_run=parse_bool(values["dry_run"]),
        check_branch_existence=parse_bool(values["check_branch_existence"]),
        check_pullrequest_exist=parse_bool(values["check_pullrequest_exist"]),
    )
