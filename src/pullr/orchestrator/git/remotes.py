"""Parse `git remote -v` output into a registry of forge repositories."""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass

from pullr.orchestrator.errors import ParseError, UnknownRemoteError

_URL_SEPARATORS = re.compile(r"[:/]")


@dataclass(frozen=True, slots=True)
class RemoteDescriptor:
    """A named remote resolved to its forge owner and repository."""

    name: str
    owner: str
    repo: str


class RemoteRegistry(Mapping[str, RemoteDescriptor]):
    """Read-only mapping from remote name to `RemoteDescriptor`."""

    def __init__(self, remotes: Mapping[str, RemoteDescriptor] | None = None) -> None:
        self._remotes: dict[str, RemoteDescriptor] = dict(remotes or {})

    def __getitem__(self, name: str) -> RemoteDescriptor:
        return self._remotes[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._remotes)

    def __len__(self) -> int:
        return len(self._remotes)

    def __repr__(self) -> str:
        return f"RemoteRegistry({self._remotes!r})"

    def require(self, name: str) -> RemoteDescriptor:
        try:
            return self._remotes[name]
        except KeyError:
            raise UnknownRemoteError(name) from None


def _split_owner_repo(line: str, url: str) -> tuple[str, str]:
    segments = [s for s in _URL_SEPARATORS.split(url) if s]
    if len(segments) < 2:
        raise ParseError(line, "URL has no owner/repo path")
    owner, repo = segments[-2], segments[-1]
    repo = repo.removesuffix(".git")
    if not repo:
        raise ParseError(line, "URL has an empty repository name")
    return owner, repo


def parse_remotes(text: str) -> RemoteRegistry:
    """Build a `RemoteRegistry` from `git remote -v` output.

    Each line has the form ``<name> <url> (<type>)``. Only ``(fetch)`` entries
    are kept; a remote configured for push only has no entry.

    Raises:
        ParseError: If a non-blank line does not have all three segments.
    """

    remotes: dict[str, RemoteDescriptor] = {}
    for line in text.splitlines():
        if not line.strip():
            continue

        parts = line.split()
        if len(parts) < 3:
            raise ParseError(line)

        name, url, raw_type = parts[0], parts[1], parts[2]
        if not (raw_type.startswith("(") and raw_type.endswith(")")):
            raise ParseError(line, f"unexpected remote type {raw_type!r}")

        if raw_type[1:-1] != "fetch":
            continue

        owner, repo = _split_owner_repo(line, url)
        remotes[name] = RemoteDescriptor(name=name, owner=owner, repo=repo)

    return RemoteRegistry(remotes)
