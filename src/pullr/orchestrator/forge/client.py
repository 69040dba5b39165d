"""Forge REST API dispatcher.

Wraps a `requests.Session` so HTTP stays out of the orchestration code and
tests can inject a fake session. One call, one request: nothing is retried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import requests

from pullr import __version__
from pullr.orchestrator.credentials import Credentials
from pullr.orchestrator.errors import TransportError

logger = logging.getLogger(__name__)

USER_AGENT = f"pullr/{__version__}"


@dataclass(frozen=True, slots=True)
class ApiResponse:
    """Status and body of one forge response.

    `body` is the decoded JSON value, or the raw text when the body is not
    JSON (None when empty).
    """

    status_code: int
    body: Any


class ForgeClient:
    """Authenticated calls against `<api_url>/repos/...`."""

    def __init__(
        self,
        *,
        api_url: str,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        if not api_url.strip():
            raise ValueError("Forge API URL is required")

        self._api_url = api_url.strip().rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Accept": "application/json",
                "User-Agent": USER_AGENT,
            }
        )

    def _repo_url(self, *, owner: str, repo: str, path: str = "") -> str:
        owner = owner.strip("/")
        repo = repo.strip("/")
        if not owner or not repo:
            raise ValueError("owner and repo are required")
        url = f"{self._api_url}/repos/{owner}/{repo}"
        path = path.strip("/")
        return f"{url}/{path}" if path else url

    def request(
        self,
        method: str,
        url: str,
        credentials: Credentials,
        body: Any = None,
    ) -> ApiResponse:
        """Perform one request.

        Raises:
            TransportError: On DNS, connection or timeout failures.
        """

        logger.debug("Forge request", extra={"method": method.upper(), "url": url})
        kwargs: dict[str, Any] = {
            "auth": (credentials.identity, credentials.secret),
            "timeout": self._timeout,
        }
        if body is not None:
            kwargs["json"] = body

        try:
            resp = self._session.request(method.upper(), url, **kwargs)
        except requests.RequestException as e:
            logger.debug("Forge request failed", extra={"url": url, "error": str(e)})
            raise TransportError(e) from e

        logger.debug(
            "Forge response", extra={"url": url, "status_code": resp.status_code}
        )
        return ApiResponse(status_code=resp.status_code, body=_decode_body(resp))

    def create_pull_request(
        self,
        *,
        owner: str,
        repo: str,
        credentials: Credentials,
        head: str,
        base: str,
        title: str,
        body: str | None,
    ) -> ApiResponse:
        url = self._repo_url(owner=owner, repo=repo, path="pulls")
        payload = {"head": head, "base": base, "title": title, "body": body}
        return self.request("post", url, credentials, payload)

    def assign_issue(
        self,
        *,
        owner: str,
        repo: str,
        credentials: Credentials,
        issue: str,
        assignee: str,
    ) -> ApiResponse:
        url = self._repo_url(owner=owner, repo=repo, path=f"issues/{issue}")
        return self.request("patch", url, credentials, {"assignee": assignee})

    def list_assignees(self, *, owner: str, repo: str, credentials: Credentials) -> ApiResponse:
        url = self._repo_url(owner=owner, repo=repo, path="assignees")
        return self.request("get", url, credentials)

    def close(self) -> None:
        self._session.close()


def _decode_body(resp: requests.Response) -> Any:
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        return resp.text
