"""CLI entrypoint for pullr.

Flags are translated once into `PullRequestOptions`; the workflows never see
argparse state. This module owns everything the core leaves to its caller:
printing, opening a browser and the process exit code.
"""

from __future__ import annotations

import argparse
import logging
import sys
import webbrowser
from dataclasses import dataclass

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from pullr import __version__
from pullr.orchestrator.assignees import AssigneeService
from pullr.orchestrator.config import PullrSettings
from pullr.orchestrator.credentials import StoredCredentialSource
from pullr.orchestrator.errors import MissingOptionsError, PullrError
from pullr.orchestrator.forge.client import ForgeClient
from pullr.orchestrator.git.introspect import RepositoryIntrospector
from pullr.orchestrator.logging import configure_logging
from pullr.orchestrator.pull_request import PullRequestOptions, PullRequestOrchestrator
from pullr.orchestrator.workflow.outcome import Failed, Opened, Outcome

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pullr",
        description="Open and manage pull requests from the current git repository",
    )
    parser.add_argument("--version", action="version", version=f"pullr {__version__}")

    parser.add_argument("-n", "--new", action="store_true", help="open a new pull request")
    parser.add_argument("-t", "--title", default=None, help="pull request title")
    parser.add_argument("-d", "--description", default=None, help="pull request description")
    parser.add_argument(
        "-i", "--into", dest="into_branch", default=None, help="target branch, defaults to 'master'"
    )
    parser.add_argument(
        "-f", "--from", dest="from_branch", default=None, help="source branch, defaults to current"
    )
    parser.add_argument(
        "-I",
        "--into-remote",
        default=None,
        help="target remote server, defaults to 'origin'",
    )
    parser.add_argument(
        "-F",
        "--from-remote",
        default=None,
        help="source remote server, defaults to 'origin'",
    )
    parser.add_argument(
        "-l",
        "--force-login",
        action="store_true",
        help="request credentials even if already logged in",
    )
    parser.add_argument(
        "-p",
        "--preflight",
        action="store_true",
        help="preflight pull request without actually submitting",
    )
    parser.add_argument(
        "--plaintext",
        action="store_true",
        help="print success / error messages without ansi codes",
    )
    parser.add_argument(
        "-c",
        "--list-assignees",
        "--list-coders",
        dest="list_assignees",
        action="store_true",
        help="show a list of all assignees available in a repo",
    )
    parser.add_argument(
        "-s",
        "--set-assignee",
        "--set-coder",
        dest="set_assignee",
        action="store_true",
        help="set the assignee on an open issue (needs --issue and --login)",
    )
    parser.add_argument("--login", default=None, help="the assignee login")
    parser.add_argument("--issue", default=None, help="the issue or pull request number")
    parser.add_argument("--debug", action="store_true", help="verbose debugging info")
    parser.add_argument(
        "--open-pr",
        action="store_true",
        help="open the new pull request in the default browser",
    )
    return parser


def options_from_args(args: argparse.Namespace) -> PullRequestOptions:
    return PullRequestOptions(
        new=args.new,
        title=args.title,
        description=args.description,
        into_branch=args.into_branch,
        from_branch=args.from_branch,
        into_remote=args.into_remote,
        from_remote=args.from_remote,
        force_login=args.force_login,
        preflight=args.preflight,
        plaintext=args.plaintext,
    )


@dataclass(slots=True)
class Services:
    forge: ForgeClient
    pull_requests: PullRequestOrchestrator
    assignees: AssigneeService

    def close(self) -> None:
        self.forge.close()


def build_services(settings: PullrSettings) -> Services:
    credentials = StoredCredentialSource(
        settings.credentials_path,
        identity=settings.username,
        secret=settings.password,
    )
    repository = RepositoryIntrospector()
    forge = ForgeClient(api_url=settings.api_url, timeout=settings.request_timeout)
    return Services(
        forge=forge,
        pull_requests=PullRequestOrchestrator(
            credentials=credentials,
            repository=repository,
            forge=forge,
            default_branch=settings.default_branch,
            default_remote=settings.default_remote,
        ),
        assignees=AssigneeService(
            credentials=credentials,
            repository=repository,
            forge=forge,
            remote=settings.default_remote,
        ),
    )


def render_outcome(console: Console, outcome: Outcome) -> None:
    if isinstance(outcome, Failed):
        console.print(f"[reverse red] {escape(outcome.reason)} [/]", soft_wrap=True)
        for detail in outcome.details:
            console.print(escape(detail), soft_wrap=True)
        return

    console.print(f"[reverse green] {escape(outcome.message)} [/]", soft_wrap=True)
    if isinstance(outcome, Opened) and outcome.url:
        console.print(f" {escape(outcome.url)}", soft_wrap=True)


def render_error(console: Console, error: BaseException) -> None:
    console.print(f"[reverse red] {escape(str(error))} [/]", soft_wrap=True)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    console = Console(color_system=None if args.plaintext else "auto", highlight=False)

    try:
        settings = PullrSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your environment or .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level, debug=args.debug)

    options = options_from_args(args)
    services = build_services(settings)
    try:
        if options.opens_pull_request or options.force_login or not (
            args.set_assignee or args.list_assignees
        ):
            outcome = services.pull_requests.run(options)
            render_outcome(console, outcome)
            if args.open_pr and isinstance(outcome, Opened) and outcome.url:
                webbrowser.open(outcome.url)
            return outcome.exit_code

        exit_code = 0
        if args.set_assignee:
            if not (args.issue and args.login):
                raise MissingOptionsError("--set-assignee needs --issue and --login.")
            outcome = services.assignees.assign_issue(issue=args.issue, login=args.login)
            render_outcome(console, outcome)
            exit_code = outcome.exit_code

        if args.list_assignees:
            for index, login in services.assignees.list_assignees():
                console.print(f"[green]{index}:[/] {escape(login)}", soft_wrap=True)

        return exit_code

    except MissingOptionsError as e:
        parser.print_help()
        render_error(console, e)
        return 1

    except PullrError as e:
        logger.debug("Command failed", extra={"kind": e.kind.value}, exc_info=True)
        render_error(console, e)
        return 1

    except Exception:
        logger.exception("Command failed")
        return 1

    finally:
        services.close()


if __name__ == "__main__":
    raise SystemExit(main())
