"""Unit tests for CLI routing, rendering and exit codes (mocked workflows)."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import Mock

import pytest

from pullr.orchestrator import main as cli
from pullr.orchestrator.assignees import AssigneeService
from pullr.orchestrator.errors import MissingOptionsError, RepoMismatchError
from pullr.orchestrator.forge.client import ForgeClient
from pullr.orchestrator.pull_request import PullRequestOptions, PullRequestOrchestrator
from pullr.orchestrator.workflow.outcome import Failed, LoginOnly, Opened, Preflighted


@pytest.fixture
def services(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> cli.Services:
    for name in ("PULLR_API_URL", "LOG_LEVEL", "PULLR_USERNAME", "PULLR_PASSWORD"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)

    services = cli.Services(
        forge=Mock(spec=ForgeClient),
        pull_requests=Mock(spec=PullRequestOrchestrator),
        assignees=Mock(spec=AssigneeService),
    )
    monkeypatch.setattr(cli, "build_services", lambda settings: services)
    return services


def test_preflight_prints_message_and_exits_zero(
    services: cli.Services, capsys: pytest.CaptureFixture[str]
) -> None:
    services.pull_requests.run.return_value = Preflighted(
        message="Success: Preflighted a pull request from alice:feature into master for widget."
    )

    exit_code = cli.main(["-n", "-p", "--plaintext", "-t", "Title"])

    assert exit_code == 0
    assert "alice:feature into master for widget" in capsys.readouterr().out
    services.pull_requests.run.assert_called_once_with(
        PullRequestOptions(new=True, title="Title", preflight=True, plaintext=True)
    )
    services.forge.close.assert_called_once()


def test_branch_flags_map_onto_options(services: cli.Services) -> None:
    services.pull_requests.run.return_value = Preflighted(message="ok")

    cli.main(["-f", "topic", "-i", "develop", "-F", "fork", "-I", "upstream", "-d", "Body"])

    options = services.pull_requests.run.call_args.args[0]
    assert options == PullRequestOptions(
        description="Body",
        into_branch="develop",
        from_branch="topic",
        into_remote="upstream",
        from_remote="fork",
    )
    assert options.opens_pull_request


def test_failed_outcome_exits_one(
    services: cli.Services, capsys: pytest.CaptureFixture[str]
) -> None:
    services.pull_requests.run.return_value = Failed(reason="head")

    assert cli.main(["--new", "--plaintext"]) == 1
    assert "head" in capsys.readouterr().out


def test_opened_pull_request_can_be_opened_in_browser(
    services: cli.Services, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    url = "https://forge.example.com/acme/widget/pull/7"
    services.pull_requests.run.return_value = Opened(message="Success: Opened", url=url)
    browser = Mock()
    monkeypatch.setattr(cli.webbrowser, "open", browser)

    assert cli.main(["--new", "--open-pr", "--plaintext"]) == 0

    browser.assert_called_once_with(url)
    out = capsys.readouterr().out
    assert "Success: Opened" in out
    assert url in out


def test_force_login_alone_runs_orchestrator(services: cli.Services) -> None:
    services.pull_requests.run.return_value = LoginOnly()

    assert cli.main(["--force-login"]) == 0
    assert services.pull_requests.run.call_args.args[0].force_login is True


def test_missing_options_prints_usage(
    services: cli.Services, capsys: pytest.CaptureFixture[str]
) -> None:
    services.pull_requests.run.side_effect = MissingOptionsError()

    assert cli.main(["--plaintext"]) == 1

    out = capsys.readouterr().out
    assert "usage: pullr" in out
    assert "Missing required options." in out


def test_orchestration_error_exits_one(
    services: cli.Services, capsys: pytest.CaptureFixture[str]
) -> None:
    services.pull_requests.run.side_effect = RepoMismatchError("handbook", "widget")

    assert cli.main(["--new", "--plaintext"]) == 1
    assert "From repo (handbook) does not match into repo (widget)." in capsys.readouterr().out


def test_set_assignee_requires_issue_and_login(services: cli.Services) -> None:
    assert cli.main(["--set-assignee", "--login", "bob"]) == 1
    services.assignees.assign_issue.assert_not_called()
    services.pull_requests.run.assert_not_called()


def test_set_assignee(services: cli.Services, capsys: pytest.CaptureFixture[str]) -> None:
    services.assignees.assign_issue.return_value = Opened(message="PR 12 was assigned to bob")

    assert cli.main(["-s", "--issue", "12", "--login", "bob", "--plaintext"]) == 0

    services.assignees.assign_issue.assert_called_once_with(issue="12", login="bob")
    assert "PR 12 was assigned to bob" in capsys.readouterr().out


def test_set_assignee_failure_prints_details(
    services: cli.Services, capsys: pytest.CaptureFixture[str]
) -> None:
    services.assignees.assign_issue.return_value = Failed(
        reason="Validation Failed", details=("assignee",)
    )

    assert cli.main(["--set-coder", "--issue", "12", "--login", "x", "--plaintext"]) == 1

    out = capsys.readouterr().out
    assert "Validation Failed" in out
    assert "assignee" in out


def test_list_assignees(services: cli.Services, capsys: pytest.CaptureFixture[str]) -> None:
    services.assignees.list_assignees.return_value = [(0, "carol"), (1, "alice")]

    assert cli.main(["--list-coders", "--plaintext"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines == ["0: carol", "1: alice"]


def test_configuration_error_exits_two(
    services: cli.Services, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("PULLR_API_URL", " ")

    assert cli.main(["--new"]) == 2
    services.pull_requests.run.assert_not_called()
