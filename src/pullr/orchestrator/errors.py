"""Error taxonomy for pull-request orchestration.

Every error the core raises derives from `PullrError` and carries one
`ErrorKind`. Messages never include credentials.
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar


class ErrorKind(str, Enum):
    PARSE = "parse"
    NOT_A_REPOSITORY = "not_a_repository"
    UNKNOWN_REMOTE = "unknown_remote"
    REPO_MISMATCH = "repo_mismatch"
    MISSING_OPTIONS = "missing_options"
    CREDENTIAL = "credential"
    TRANSPORT = "transport"
    API = "api"


class PullrError(Exception):
    """Base class for all orchestration errors."""

    kind: ClassVar[ErrorKind]


class ParseError(PullrError):
    """Raised when a `git remote -v` line cannot be parsed."""

    kind = ErrorKind.PARSE

    def __init__(self, line: str, reason: str = "missing segments") -> None:
        super().__init__(f"Cannot parse remote line {line!r}: {reason}")
        self.line = line
        self.reason = reason


class NotARepositoryError(PullrError):
    kind = ErrorKind.NOT_A_REPOSITORY

    def __init__(self, command: str, detail: str = "") -> None:
        message = f"`{command}` failed"
        if detail:
            message += f": {detail}"
        super().__init__(message)
        self.command = command
        self.detail = detail


class UnknownRemoteError(PullrError):
    kind = ErrorKind.UNKNOWN_REMOTE

    def __init__(self, remote_name: str) -> None:
        super().__init__(f"Unknown remote {remote_name}.")
        self.remote_name = remote_name


class RepoMismatchError(PullrError):
    """Raised when source and target remotes point at different repositories."""

    kind = ErrorKind.REPO_MISMATCH

    def __init__(self, from_repo: str, into_repo: str) -> None:
        super().__init__(
            f"From repo ({from_repo}) does not match into repo ({into_repo})."
        )
        self.from_repo = from_repo
        self.into_repo = into_repo


class MissingOptionsError(PullrError):
    kind = ErrorKind.MISSING_OPTIONS

    def __init__(self, message: str = "Missing required options.") -> None:
        super().__init__(message)


class CredentialError(PullrError):
    kind = ErrorKind.CREDENTIAL


class TransportError(PullrError):
    """Raised for DNS, connection and timeout failures. Never retried."""

    kind = ErrorKind.TRANSPORT

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Request failed: {cause}")
        self.cause = cause


class ApiError(PullrError):
    kind = ErrorKind.API

    def __init__(self, status_code: int, reason: str) -> None:
        super().__init__(f"Forge API error (HTTP {status_code}): {reason}")
        self.status_code = status_code
        self.reason = reason
