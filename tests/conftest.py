"""Test configuration and fixtures."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from unittest.mock import Mock

import pytest

from pullr.orchestrator.credentials import Credentials, CredentialSource
from pullr.orchestrator.errors import NotARepositoryError
from pullr.orchestrator.forge.client import ForgeClient
from pullr.orchestrator.git.introspect import RepositoryIntrospector

REMOTE_LISTING = (
    "origin\thttps://forge.example.com/acme/widget.git (fetch)\n"
    "origin\thttps://forge.example.com/acme/widget.git (push)\n"
    "alice\tgit@forge.example.com:alice/widget.git (fetch)\n"
    "alice\tgit@forge.example.com:alice/widget.git (push)\n"
    "docs\thttps://forge.example.com/acme/handbook (fetch)\n"
    "docs\thttps://forge.example.com/acme/handbook (push)\n"
    "\n"
)


class FakeRunner:
    """Canned git output keyed by the joined command line."""

    def __init__(self, outputs: dict[str, str]) -> None:
        self.outputs = outputs
        self.calls: list[str] = []

    def run(self, args: Sequence[str]) -> str:
        command = " ".join(args)
        self.calls.append(command)
        if command not in self.outputs:
            raise NotARepositoryError(command, "fatal: not a git repository")
        return self.outputs[command]


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    """`configure_logging` replaces root handlers; put pytest's back afterwards."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def remote_listing() -> str:
    return REMOTE_LISTING


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(identity="alice@example.com", secret="s3cret")


@pytest.fixture
def credential_source(credentials: Credentials) -> Mock:
    source = Mock(spec=CredentialSource)
    source.get.return_value = credentials
    return source


@pytest.fixture
def git_runner() -> FakeRunner:
    return FakeRunner(
        {
            "git remote -v": REMOTE_LISTING,
            "git rev-parse --abbrev-ref HEAD": "feature\n",
            "git log -n 1 --format=%s": "Add widget frobnication\n",
            "git log -n 1 --format=%s --end-of-options feature": "Add widget frobnication\n",
        }
    )


@pytest.fixture
def repository(git_runner: FakeRunner) -> RepositoryIntrospector:
    return RepositoryIntrospector(git_runner)


@pytest.fixture
def forge() -> Mock:
    return Mock(spec=ForgeClient)
