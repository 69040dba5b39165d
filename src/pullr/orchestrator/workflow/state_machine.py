from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PullRequestState(str, Enum):
    GATHERING = "gathering"
    VALIDATING = "validating"
    LOGIN_ONLY = "login_only"
    PREFLIGHTING = "preflighting"
    SUBMITTING = "submitting"
    DONE = "done"


ALLOWED_TRANSITIONS: dict[PullRequestState, set[PullRequestState]] = {
    PullRequestState.GATHERING: {PullRequestState.VALIDATING},
    PullRequestState.VALIDATING: {
        PullRequestState.LOGIN_ONLY,
        PullRequestState.PREFLIGHTING,
        PullRequestState.SUBMITTING,
    },
    PullRequestState.LOGIN_ONLY: {PullRequestState.DONE},
    PullRequestState.PREFLIGHTING: {PullRequestState.DONE},
    PullRequestState.SUBMITTING: {PullRequestState.DONE},
    PullRequestState.DONE: set(),
}


class IllegalTransitionError(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class RunSnapshot:
    """Where one orchestration run currently is.

    Runs are not persisted; the snapshot only exists so each step is checked
    against the transition table and logged.
    """

    state: PullRequestState = PullRequestState.GATHERING

    def to_json(self) -> dict[str, object]:
        return {"state": self.state.value}


def transition(*, current: RunSnapshot, to: PullRequestState) -> RunSnapshot:
    allowed = ALLOWED_TRANSITIONS.get(current.state, set())
    if to not in allowed:
        raise IllegalTransitionError(f"Illegal transition: {current.state.value} -> {to.value}")
    return RunSnapshot(state=to)
