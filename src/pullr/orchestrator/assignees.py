"""Assign issues and list assignable users on the `origin` repository."""

from __future__ import annotations

import logging

from pullr.orchestrator.credentials import CredentialSource, Credentials
from pullr.orchestrator.errors import ApiError, TransportError
from pullr.orchestrator.forge.client import ForgeClient
from pullr.orchestrator.forge.responses import (
    AssigneeResponse,
    IssueResponse,
    decode,
    decode_list,
    failure_reason,
)
from pullr.orchestrator.gather import gather
from pullr.orchestrator.git.introspect import RepositoryIntrospector
from pullr.orchestrator.git.remotes import RemoteDescriptor, parse_remotes
from pullr.orchestrator.workflow.outcome import Failed, Opened, Outcome

logger = logging.getLogger(__name__)


class AssigneeService:
    """Issue-assignment and assignee-listing workflows.

    Both resolve the target repository from a single fixed remote and fetch
    credentials concurrently with the remote listing.
    """

    def __init__(
        self,
        *,
        credentials: CredentialSource,
        repository: RepositoryIntrospector,
        forge: ForgeClient,
        remote: str = "origin",
    ) -> None:
        self._credentials = credentials
        self._repository = repository
        self._forge = forge
        self._remote = remote

    def _resolve(self) -> tuple[RemoteDescriptor, Credentials]:
        gathered = gather(
            remotes=lambda: parse_remotes(self._repository.list_remotes()),
            credentials=lambda: self._credentials.get(force_refresh=False),
        )
        return gathered["remotes"].require(self._remote), gathered["credentials"]

    def assign_issue(self, *, issue: str, login: str) -> Outcome:
        target, credentials = self._resolve()

        try:
            response = self._forge.assign_issue(
                owner=target.owner,
                repo=target.repo,
                credentials=credentials,
                issue=issue,
                assignee=login,
            )
        except TransportError as e:
            return Failed(reason=str(e))

        if response.status_code == 404:
            return Failed(reason=f"Issue {issue} was not found!")

        body = decode(IssueResponse, response.body)
        if response.status_code != 200:
            reason = body.message or f"Assignment failed (HTTP {response.status_code})"
            details = tuple(
                entry.message or entry.field or entry.model_dump_json(exclude_none=True)
                for entry in body.errors
            )
            logger.info(
                "Issue assignment rejected",
                extra={"issue": issue, "status_code": response.status_code},
            )
            return Failed(reason=reason, details=details)

        logger.info("Issue assigned", extra={"issue": issue, "assignee": login})
        return Opened(message=f"PR {issue} was assigned to {login}", url=body.html_url)

    def list_assignees(self) -> list[tuple[int, str]]:
        """Assignable logins as ``(index, login)`` pairs, in the forge's order.

        Raises:
            ApiError: If the forge answers with a non-200 status.
            TransportError: If the request cannot be sent.
        """

        target, credentials = self._resolve()
        response = self._forge.list_assignees(
            owner=target.owner, repo=target.repo, credentials=credentials
        )
        if response.status_code != 200:
            error = decode(IssueResponse, response.body)
            reason = error.message or failure_reason(error, {}) or "cannot list assignees"
            raise ApiError(response.status_code, reason)

        assignees = decode_list(AssigneeResponse, response.body)
        return list(enumerate(a.login for a in assignees))
