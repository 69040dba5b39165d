"""Forge credentials.

The orchestrator only depends on the `CredentialSource` protocol.
`StoredCredentialSource` is the implementation used by the CLI: environment
first, then a JSON file in the user's home directory, then an interactive
prompt whose answer is written back to that file.
"""

from __future__ import annotations

import getpass
import json
import logging
import os
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from pullr.orchestrator.errors import CredentialError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Credentials:
    """Basic-auth pair for the forge API. The secret is kept out of repr()."""

    identity: str
    secret: str = field(repr=False)


class CredentialSource(Protocol):
    def get(self, *, force_refresh: bool = False) -> Credentials:
        """Return credentials, asking the user again when `force_refresh` is set.

        Raises:
            CredentialError: If no credentials can be obtained.
        """
        ...


class StoredCredentialSource:
    def __init__(
        self,
        path: Path,
        *,
        identity: str | None = None,
        secret: str | None = None,
        interactive: bool | None = None,
        prompt: Callable[[str], str] = input,
        secret_prompt: Callable[[str], str] = getpass.getpass,
    ) -> None:
        self._path = path
        self._env_identity = identity
        self._env_secret = secret
        self._interactive = sys.stdin.isatty() if interactive is None else interactive
        self._prompt = prompt
        self._secret_prompt = secret_prompt

    def get(self, *, force_refresh: bool = False) -> Credentials:
        if not force_refresh:
            if self._env_identity and self._env_secret:
                logger.debug("Using credentials from environment")
                return Credentials(identity=self._env_identity, secret=self._env_secret)

            stored = self.load()
            if stored is not None:
                logger.debug("Using stored credentials", extra={"path": str(self._path)})
                return stored

        credentials = self._ask()
        self.save(credentials)
        return credentials

    def load(self) -> Credentials | None:
        if not self._path.exists():
            return None

        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise CredentialError(f"Cannot read credentials file {self._path}: {e}") from e

        if not isinstance(raw, dict):
            logger.warning(
                "Credentials file has unexpected shape; ignoring",
                extra={"path": str(self._path)},
            )
            return None

        identity = raw.get("identity")
        secret = raw.get("secret")
        if not isinstance(identity, str) or not identity or not isinstance(secret, str):
            return None
        return Credentials(identity=identity, secret=secret)

    def save(self, credentials: Credentials) -> None:
        payload = {"identity": credentials.identity, "secret": credentials.secret}
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(self._path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(json.dumps(payload, indent=2) + "\n")
        except OSError as e:
            raise CredentialError(f"Cannot write credentials file {self._path}: {e}") from e
        logger.info("Credentials saved", extra={"path": str(self._path)})

    def _ask(self) -> Credentials:
        if not self._interactive:
            raise CredentialError(
                "No stored credentials and no terminal to prompt on; "
                "set PULLR_USERNAME and PULLR_PASSWORD"
            )

        try:
            identity = self._prompt("Forge login: ").strip()
            secret = self._secret_prompt("Forge password: ")
        except (EOFError, KeyboardInterrupt) as e:
            raise CredentialError("Login aborted") from e

        if not identity or not secret:
            raise CredentialError("Login and password are required")
        return Credentials(identity=identity, secret=secret)
