#!/usr/bin/env python3
"""Programmatic pull request preflight example.

This demonstrates using the orchestrator components directly:

* load settings from `.env`
* read the current branch and `origin` remote from the local repository
* preflight (or, with --submit, open) a pull request

Run it from inside a git checkout whose `origin` points at the forge.
"""

from __future__ import annotations

import argparse
from typing import Sequence

from pullr.orchestrator.config import PullrSettings
from pullr.orchestrator.credentials import StoredCredentialSource
from pullr.orchestrator.errors import PullrError
from pullr.orchestrator.forge.client import ForgeClient
from pullr.orchestrator.git.introspect import RepositoryIntrospector
from pullr.orchestrator.logging import configure_logging
from pullr.orchestrator.pull_request import PullRequestOptions, PullRequestOrchestrator
from pullr.orchestrator.workflow.outcome import Failed, Opened


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Preflight a pull request (programmatic example).")
    parser.add_argument("--into", default=None, help="Target branch (defaults to PULLR_DEFAULT_BRANCH)")
    parser.add_argument("--title", default=None, help="Title (defaults to the last commit subject)")
    parser.add_argument("--submit", action="store_true", help="Actually open the pull request")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = PullrSettings()
    configure_logging(settings.log_level)

    forge = ForgeClient(api_url=settings.api_url, timeout=settings.request_timeout)
    orchestrator = PullRequestOrchestrator(
        credentials=StoredCredentialSource(
            settings.credentials_path, identity=settings.username, secret=settings.password
        ),
        repository=RepositoryIntrospector(),
        forge=forge,
        default_branch=settings.default_branch,
        default_remote=settings.default_remote,
    )

    try:
        outcome = orchestrator.run(
            PullRequestOptions(
                new=True, title=args.title, into_branch=args.into, preflight=not args.submit
            )
        )
    except PullrError as exc:
        print(f"Error: {exc}")
        return 1
    finally:
        forge.close()

    if isinstance(outcome, Failed):
        print(f"Failed: {outcome.reason}")
    else:
        print(outcome.message)
    if isinstance(outcome, Opened) and outcome.url:
        print(f"URL: {outcome.url}")
    return outcome.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
