"""Open or preflight a pull request from local repository state.

A run moves through GATHERING -> VALIDATING -> one of LOGIN_ONLY,
PREFLIGHTING or SUBMITTING -> DONE and returns exactly one `Outcome`.

Errors raised while gathering or validating (`PullrError` subclasses)
propagate to the caller untouched; nothing is sent to the forge in that
case. A submit makes exactly one API call.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pullr.orchestrator.credentials import CredentialSource, Credentials
from pullr.orchestrator.errors import MissingOptionsError, RepoMismatchError, TransportError
from pullr.orchestrator.forge.client import ForgeClient
from pullr.orchestrator.forge.responses import (
    DEFAULT_ERROR_TRANSLATIONS,
    PullRequestResponse,
    decode,
    failure_reason,
)
from pullr.orchestrator.gather import gather
from pullr.orchestrator.git.introspect import RepositoryIntrospector
from pullr.orchestrator.git.remotes import RemoteRegistry, parse_remotes
from pullr.orchestrator.workflow.outcome import Failed, LoginOnly, Opened, Outcome, Preflighted
from pullr.orchestrator.workflow.state_machine import PullRequestState, RunSnapshot, transition

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PullRequestOptions:
    """What the user asked for. Unset fields are filled in while gathering."""

    new: bool = False
    title: str | None = None
    description: str | None = None
    into_branch: str | None = None
    from_branch: str | None = None
    into_remote: str | None = None
    from_remote: str | None = None
    force_login: bool = False
    preflight: bool = False
    plaintext: bool = False

    @property
    def opens_pull_request(self) -> bool:
        return bool(self.new or self.into_branch or self.from_branch)


@dataclass(frozen=True, slots=True)
class PullRequestDescriptor:
    title: str
    description: str | None
    from_branch: str
    from_repo: str
    from_owner: str
    into_branch: str
    into_repo: str
    into_owner: str
    credentials: Credentials = field(repr=False)
    preflight: bool = False
    plaintext: bool = False
    login_only: bool = False

    @property
    def head(self) -> str:
        return f"{self.from_owner}:{self.from_branch}"


class PullRequestOrchestrator:
    def __init__(
        self,
        *,
        credentials: CredentialSource,
        repository: RepositoryIntrospector,
        forge: ForgeClient,
        default_branch: str = "master",
        default_remote: str = "origin",
        error_translations: Mapping[str, str] = DEFAULT_ERROR_TRANSLATIONS,
    ) -> None:
        self._credentials = credentials
        self._repository = repository
        self._forge = forge
        self._default_branch = default_branch
        self._default_remote = default_remote
        self._error_translations = error_translations
        self._snapshot = RunSnapshot()

    @property
    def state(self) -> PullRequestState:
        return self._snapshot.state

    def _enter(self, to: PullRequestState) -> None:
        self._snapshot = transition(current=self._snapshot, to=to)
        logger.debug("Pull request run state changed", extra=self._snapshot.to_json())

    def run(self, options: PullRequestOptions) -> Outcome:
        self._snapshot = RunSnapshot()

        gathered = self._gather(options)

        self._enter(PullRequestState.VALIDATING)
        if not options.opens_pull_request:
            if not options.force_login:
                raise MissingOptionsError()
            self._enter(PullRequestState.LOGIN_ONLY)
            self._enter(PullRequestState.DONE)
            return LoginOnly()

        descriptor = self._build_descriptor(options, gathered)

        if descriptor.preflight:
            self._enter(PullRequestState.PREFLIGHTING)
            outcome: Outcome = Preflighted(
                message=(
                    f"Success: Preflighted a pull request from {descriptor.head} "
                    f"into {descriptor.into_branch} for {descriptor.into_repo}."
                )
            )
        else:
            self._enter(PullRequestState.SUBMITTING)
            outcome = self._submit(descriptor)

        self._enter(PullRequestState.DONE)
        return outcome

    def _gather(self, options: PullRequestOptions) -> dict[str, Any]:
        tasks: dict[str, Callable[[], Any]] = {
            "credentials": lambda: self._credentials.get(force_refresh=options.force_login),
            "remotes": lambda: parse_remotes(self._repository.list_remotes()),
        }
        # Empty strings count as unset.
        if not options.title:
            tasks["title"] = lambda: self._repository.last_commit_subject(
                options.from_branch or ""
            )
        if not options.from_branch:
            tasks["from_branch"] = self._repository.current_branch

        gathered = gather(**tasks)
        if options.title:
            gathered["title"] = options.title
        if options.from_branch:
            gathered["from_branch"] = options.from_branch
        return gathered

    def _build_descriptor(
        self, options: PullRequestOptions, gathered: dict[str, Any]
    ) -> PullRequestDescriptor:
        remotes: RemoteRegistry = gathered["remotes"]
        source = remotes.require(options.from_remote or self._default_remote)
        target = remotes.require(options.into_remote or self._default_remote)

        if source.repo != target.repo:
            raise RepoMismatchError(source.repo, target.repo)

        descriptor = PullRequestDescriptor(
            title=gathered["title"],
            description=options.description,
            from_branch=gathered["from_branch"],
            from_repo=source.repo,
            from_owner=source.owner,
            into_branch=options.into_branch or self._default_branch,
            into_repo=target.repo,
            into_owner=target.owner,
            credentials=gathered["credentials"],
            preflight=options.preflight,
            plaintext=options.plaintext,
        )
        logger.debug("Pull request descriptor built", extra={"descriptor": repr(descriptor)})
        return descriptor

    def _submit(self, descriptor: PullRequestDescriptor) -> Outcome:
        try:
            response = self._forge.create_pull_request(
                owner=descriptor.into_owner,
                repo=descriptor.into_repo,
                credentials=descriptor.credentials,
                head=descriptor.head,
                base=descriptor.into_branch,
                title=descriptor.title,
                body=descriptor.description,
            )
        except TransportError as e:
            logger.warning("Pull request submission failed", extra={"error": str(e)})
            return Failed(reason=str(e))

        created = decode(PullRequestResponse, response.body)
        if created.state == "open":
            logger.info(
                "Pull request opened",
                extra={"number": created.number, "url": created.html_url},
            )
            return Opened(
                message=(
                    f"Success: Opened a pull request from {descriptor.head} "
                    f"into {descriptor.into_branch} for {descriptor.into_repo}."
                ),
                url=created.html_url,
            )

        reason = failure_reason(created, self._error_translations)
        if reason is None:
            reason = f"Unexpected response from forge (HTTP {response.status_code})"
        logger.info(
            "Pull request rejected",
            extra={"status_code": response.status_code, "reason": reason},
        )
        return Failed(reason=reason)
