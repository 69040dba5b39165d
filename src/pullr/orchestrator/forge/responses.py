"""Per-endpoint schemas for forge API response bodies.

Bodies are decoded leniently: unknown fields are ignored, missing fields take
their defaults and a body of the wrong shape decodes to the empty model.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

# Error vocabulary of GitHub's pulls endpoint. Other forges may need a
# different table; callers pass their own to `failure_reason`.
DEFAULT_ERROR_TRANSLATIONS: Mapping[str, str] = {
    "base": "Remote branch doesn't exist. Did you push?",
}


class _Lenient(BaseModel):
    model_config = ConfigDict(extra="ignore")


class ForgeErrorEntry(_Lenient):
    field: str | None = None
    message: str | None = None
    code: str | int | None = None
    resource: str | None = None


class _ErrorBody(_Lenient):
    message: str | None = None
    errors: list[ForgeErrorEntry] = Field(default_factory=list)

    @field_validator("errors", mode="before")
    @classmethod
    def _coerce_errors(cls, value: Any) -> list[Any]:
        if not isinstance(value, list):
            return []
        entries: list[Any] = []
        for item in value:
            if isinstance(item, str):
                entries.append({"message": item})
            elif isinstance(item, dict):
                entries.append(item)
        return entries


class PullRequestResponse(_ErrorBody):
    state: str = ""
    number: int | None = None
    html_url: str | None = None


class IssueResponse(_ErrorBody):
    number: int | None = None
    html_url: str | None = None


class AssigneeResponse(_Lenient):
    login: str = ""


ModelT = TypeVar("ModelT", bound=BaseModel)


def decode(model: type[ModelT], body: Any) -> ModelT:
    """Decode a JSON body into `model`, falling back to the model's defaults."""

    if not isinstance(body, dict):
        return model()
    try:
        return model.model_validate(body)
    except ValidationError as e:
        logger.debug(
            "Response body does not match schema; using defaults",
            extra={"schema": model.__name__, "errors": e.error_count()},
        )
        return model()


def decode_list(model: type[ModelT], body: Any) -> list[ModelT]:
    if not isinstance(body, list):
        return []
    return [decode(model, item) for item in body if isinstance(item, dict)]


def failure_reason(
    response: _ErrorBody,
    translations: Mapping[str, str] = DEFAULT_ERROR_TRANSLATIONS,
) -> str | None:
    """Pick the human-readable reason from an error body.

    The last entry of `errors` wins (its `field`, else its `message`); without
    one the top-level `message` is used. The result is passed through
    `translations`.
    """

    reason: str | None = None
    if response.errors:
        last = response.errors[-1]
        reason = last.field or last.message
    if not reason:
        reason = response.message
    if reason is None:
        return None
    return translations.get(reason, reason)
