"""Read branch, commit and remote information from the local git repository.

Git is driven through its command-line interface. Commands run through a
`CommandRunner` so tests can substitute canned output.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from pullr.orchestrator.errors import NotARepositoryError

logger = logging.getLogger(__name__)


class CommandRunner(Protocol):
    def run(self, args: Sequence[str]) -> str:
        """Run a command and return its standard output.

        Raises:
            NotARepositoryError: If the command cannot run or exits non-zero.
        """
        ...


class SubprocessRunner:
    """Run commands with `subprocess.run` in a fixed working directory."""

    def __init__(self, cwd: Path | None = None) -> None:
        self._cwd = cwd

    def run(self, args: Sequence[str]) -> str:
        command = " ".join(args)
        logger.debug("Running command", extra={"command": command})
        try:
            result = subprocess.run(
                list(args),
                cwd=self._cwd,
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError as e:
            raise NotARepositoryError(command, f"{args[0]} is not installed") from e
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or "").strip() or f"exit status {e.returncode}"
            raise NotARepositoryError(command, detail) from e
        return result.stdout


class RepositoryIntrospector:
    """Queries against the repository in the runner's working directory."""

    def __init__(self, runner: CommandRunner | None = None) -> None:
        self._runner = runner or SubprocessRunner()

    def current_branch(self) -> str:
        return self._runner.run(["git", "rev-parse", "--abbrev-ref", "HEAD"]).strip()

    def last_commit_subject(self, ref: str = "") -> str:
        """Subject line of the newest commit reachable from `ref` (HEAD if empty)."""

        args = ["git", "log", "-n", "1", "--format=%s"]
        if ref:
            args.extend(["--end-of-options", ref])
        return self._runner.run(args).strip()

    def list_remotes(self) -> str:
        """Raw `git remote -v` output, for `parse_remotes`."""

        return self._runner.run(["git", "remote", "-v"])
