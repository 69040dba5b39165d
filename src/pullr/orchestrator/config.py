"""Configuration for the pullr CLI.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

Command-line flags are not settings; they are collected into
`PullRequestOptions` at the CLI boundary and passed explicitly.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PullrSettings(BaseSettings):
    """Settings for the pullr CLI.

    Environment variables:
    - PULLR_API_URL           (optional)
    - LOG_LEVEL               (optional)
    - PULLR_DEFAULT_BRANCH    (optional)
    - PULLR_DEFAULT_REMOTE    (optional)
    - PULLR_CREDENTIALS_PATH  (optional)
    - PULLR_USERNAME / PULLR_PASSWORD (optional, skip the credentials file)
    - PULLR_REQUEST_TIMEOUT   (optional, seconds)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `PullrSettings(_env_file=path_to_env)`.
    """

    api_url: str = Field(
        default="https://github.intel.com/api/v3",
        validation_alias="PULLR_API_URL",
        description="Forge REST API root; repository endpoints live under `<api_url>/repos`",
    )

    log_level: str = Field(
        default="WARNING",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    default_branch: str = Field(
        default="master",
        validation_alias="PULLR_DEFAULT_BRANCH",
        description="Target branch used when --into is not given",
    )
    default_remote: str = Field(
        default="origin",
        validation_alias="PULLR_DEFAULT_REMOTE",
        description="Remote used when --from-remote/--into-remote are not given",
    )

    credentials_path: Path = Field(
        default=Path.home() / ".pullr" / "credentials.json",
        validation_alias="PULLR_CREDENTIALS_PATH",
        description="File where the forge login is stored after the first prompt",
    )
    username: str | None = Field(
        default=None,
        validation_alias="PULLR_USERNAME",
        description="Forge login; used together with PULLR_PASSWORD",
    )
    password: str | None = Field(
        default=None,
        validation_alias="PULLR_PASSWORD",
        repr=False,
        description="Forge password or token; used together with PULLR_USERNAME",
    )

    request_timeout: float | None = Field(
        default=None,
        gt=0,
        validation_alias="PULLR_REQUEST_TIMEOUT",
        description="Per-request timeout in seconds (unset means wait indefinitely)",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @model_validator(mode="after")
    def _normalise_api_url(self) -> PullrSettings:
        url = self.api_url.strip().rstrip("/")
        if not url:
            raise ValueError("PULLR_API_URL must not be empty")
        self.api_url = url
        return self

    @property
    def repos_url(self) -> str:
        """Root of the per-repository REST endpoints."""

        return f"{self.api_url}/repos"
