"""Terminal results of a workflow run.

An outcome is one of `LoginOnly`, `Preflighted`, `Opened` or `Failed`. The
tag decides the process exit code: 0 for everything except `Failed`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class OutcomeKind(str, Enum):
    LOGIN_ONLY = "login_only"
    PREFLIGHTED = "preflighted"
    OPENED = "opened"
    FAILED = "failed"


class _OutcomeBase:
    __slots__ = ()

    kind: ClassVar[OutcomeKind]

    @property
    def succeeded(self) -> bool:
        return self.kind is not OutcomeKind.FAILED

    @property
    def exit_code(self) -> int:
        return 0 if self.succeeded else 1


@dataclass(frozen=True, slots=True)
class LoginOnly(_OutcomeBase):
    kind: ClassVar[OutcomeKind] = OutcomeKind.LOGIN_ONLY

    message: str = "Login successful"


@dataclass(frozen=True, slots=True)
class Preflighted(_OutcomeBase):
    kind: ClassVar[OutcomeKind] = OutcomeKind.PREFLIGHTED

    message: str


@dataclass(frozen=True, slots=True)
class Opened(_OutcomeBase):
    kind: ClassVar[OutcomeKind] = OutcomeKind.OPENED

    message: str
    url: str | None = None


@dataclass(frozen=True, slots=True)
class Failed(_OutcomeBase):
    kind: ClassVar[OutcomeKind] = OutcomeKind.FAILED

    reason: str
    details: tuple[str, ...] = ()


Outcome = LoginOnly | Preflighted | Opened | Failed
