"""Local git repository access (command-line based)."""

from pullr.orchestrator.git.introspect import (
    CommandRunner,
    RepositoryIntrospector,
    SubprocessRunner,
)
from pullr.orchestrator.git.remotes import RemoteDescriptor, RemoteRegistry, parse_remotes

__all__ = [
    "CommandRunner",
    "RemoteDescriptor",
    "RemoteRegistry",
    "RepositoryIntrospector",
    "SubprocessRunner",
    "parse_remotes",
]
