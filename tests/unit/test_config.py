"""Unit tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from pullr.orchestrator.config import PullrSettings

_ENV_VARS = (
    "PULLR_API_URL",
    "LOG_LEVEL",
    "PULLR_DEFAULT_BRANCH",
    "PULLR_DEFAULT_REMOTE",
    "PULLR_CREDENTIALS_PATH",
    "PULLR_USERNAME",
    "PULLR_PASSWORD",
    "PULLR_REQUEST_TIMEOUT",
)


@pytest.fixture(autouse=True)
def _clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def test_settings_defaults() -> None:
    settings = PullrSettings()

    assert settings.api_url == "https://github.intel.com/api/v3"
    assert settings.repos_url == "https://github.intel.com/api/v3/repos"
    assert settings.default_branch == "master"
    assert settings.default_remote == "origin"
    assert settings.log_level == "WARNING"
    assert settings.request_timeout is None
    assert settings.username is None


def test_settings_loads_from_dotenv(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text(
        "\n".join(
            [
                "PULLR_API_URL=https://forge.example.com/api/v3/",
                "LOG_LEVEL=DEBUG",
                "PULLR_DEFAULT_BRANCH=main",
                "PULLR_REQUEST_TIMEOUT=15",
                "",
            ]
        ),
        encoding="utf-8",
    )

    settings = PullrSettings()

    assert settings.api_url == "https://forge.example.com/api/v3"
    assert settings.log_level == "DEBUG"
    assert settings.default_branch == "main"
    assert settings.request_timeout == 15.0


def test_password_is_not_in_repr(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PULLR_USERNAME", "alice")
    monkeypatch.setenv("PULLR_PASSWORD", "hunter2")

    settings = PullrSettings()

    assert settings.password == "hunter2"
    assert "hunter2" not in repr(settings)


def test_empty_api_url_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PULLR_API_URL", "  ")

    with pytest.raises(ValidationError):
        PullrSettings()


def test_non_positive_timeout_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PULLR_REQUEST_TIMEOUT", "0")

    with pytest.raises(ValidationError):
        PullrSettings()
