"""Minimal GitHub REST client for listing and deleting workflow runs."""

import logging
import time
from collections.abc import Callable, Iterator
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from workflow_retention.errors import GitHubAPIError, RateLimitError
from workflow_retention.models import Workflow, WorkflowRun

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.github.com"
API_VERSION = "2022-11-28"
PER_PAGE = 100
TIMEOUT = 30.0
# Primary rate limit exhaustion is retried this many times.
RATE_LIMIT_RETRIES = 1


class GitHubClient:
    """Paginated reads and run deletion for one repository.

    Transient 5xx answers are retried by the transport. A primary rate
    limit is waited out and retried once; a secondary rate limit or a
    second exhaustion raises :class:`RateLimitError`. Every other error
    status raises :class:`GitHubAPIError` straight away.
    """

    def __init__(
        self,
        token: str,
        owner: str,
        repo: str,
        base_url: str = DEFAULT_BASE_URL,
        session: requests.Session | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.owner = owner
        self.repo = repo
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self._sleep = sleep
        self.session = session if session is not None else self._make_session()

        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self.session.headers.update(headers)

    @staticmethod
    def _make_session() -> requests.Session:
        session = requests.Session()
        retry = Retry(
            total=3,
            backoff_factor=0.5,
            status_forcelist=(500, 502, 503, 504),
            allowed_methods=frozenset({"GET", "DELETE"}),
        )
        adapter = HTTPAdapter(max_retries=retry)
        session.mount("https://", adapter)
        session.mount("http://", adapter)
        return session

    @property
    def repo_url(self) -> str:
        return f"{self.base_url}/repos/{self.owner}/{self.repo}"

    def _request(
        self, method: str, url: str, params: dict[str, Any] | None = None
    ) -> requests.Response:
        retries = 0
        while True:
            resp = self.session.request(method, url, params=params, timeout=TIMEOUT)
            if resp.ok:
                return resp

            if _is_primary_rate_limit(resp):
                logger.warning("Request quota exhausted for request %s %s", method, url)
                if retries < RATE_LIMIT_RETRIES:
                    retries += 1
                    delay = _retry_after(resp)
                    logger.info("Retrying after %.0f seconds!", delay)
                    self._sleep(delay)
                    continue
                raise RateLimitError(resp.status_code, _error_message(resp), url)

            if _is_secondary_rate_limit(resp):
                logger.warning("SecondaryRateLimit detected for request %s %s", method, url)
                raise RateLimitError(resp.status_code, _error_message(resp), url)

            raise GitHubAPIError(resp.status_code, _error_message(resp), url)

    def _paginate(self, path: str, key: str | None = None) -> Iterator[dict[str, Any]]:
        url: str | None = f"{self.repo_url}/{path}"
        params: dict[str, Any] | None = {"per_page": PER_PAGE}
        while url:
            resp = self._request("GET", url, params=params)
            data = resp.json()
            yield from (data if key is None else data.get(key, []))
            url = resp.links.get("next", {}).get("url")
            # the next link already carries the query string
            params = None

    def list_workflows(self) -> list[Workflow]:
        return [Workflow.from_api(w) for w in self._paginate("actions/workflows", "workflows")]

    def list_runs(self) -> list[WorkflowRun]:
        return [WorkflowRun.from_api(r) for r in self._paginate("actions/runs", "workflow_runs")]

    def list_workflow_runs(self, workflow_id: int) -> list[WorkflowRun]:
        return [
            WorkflowRun.from_api(r)
            for r in self._paginate(f"actions/workflows/{workflow_id}/runs", "workflow_runs")
        ]

    def list_branch_names(self) -> list[str]:
        return [branch["name"] for branch in self._paginate("branches")]

    def delete_run(self, run_id: int) -> None:
        self._request("DELETE", f"{self.repo_url}/actions/runs/{run_id}")


def _is_rate_limit_status(resp: requests.Response) -> bool:
    return resp.status_code in (403, 429)


def _is_primary_rate_limit(resp: requests.Response) -> bool:
    return _is_rate_limit_status(resp) and resp.headers.get("x-ratelimit-remaining") == "0"


def _is_secondary_rate_limit(resp: requests.Response) -> bool:
    if not _is_rate_limit_status(resp):
        return False
    return "retry-after" in resp.headers or "secondary rate limit" in _error_message(resp).lower()


def _retry_after(resp: requests.Response) -> float:
    retry_after = resp.headers.get("retry-after")
    if retry_after is not None:
        try:
            return max(float(retry_after), 0.0)
        except ValueError:
            pass
    reset = resp.headers.get("x-ratelimit-reset")
    if reset is not None:
        try:
            return max(float(reset) - time.time(), 0.0)
        except ValueError:
            pass
    return 60.0


def _error_message(resp: requests.Response) -> str:
    try:
        payload = resp.json()
    except ValueError:
        return resp.reason or ""
    if isinstance(payload, dict) and isinstance(payload.get("message"), str):
        return payload["message"]
    return resp.reason or ""
