"""Pydantic models and targets describing a render call."""

import re
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


def coerce_status(value: Any) -> int:
    """Coerce a status code or named alias to an integer.

    Accepts integers, ``HTTPStatus`` members, digit strings and names such as
    ``"not_found"``, ``"Not Found"`` or ``"NotFound"``.

    Raises:
        ValueError: If the value is not a known status
    """
    if isinstance(value, bool):
        raise ValueError(f"status must be an integer or status name, got {value!r}")
    if isinstance(value, int):
        return int(value)
    if not isinstance(value, str):
        raise ValueError(f"status must be an integer or status name, got {value!r}")

    text = value.strip()
    if text.isdigit():
        return int(text)

    name = re.sub(r"[\s\-]+", "_", text)
    name = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", name).upper()
    try:
        return HTTPStatus[name].value
    except KeyError:
        raise ValueError(f"unknown status name: {value!r}") from None


class RenderOptions(BaseModel):
    """Options accepted by every render entry point."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    format: str | None = Field(default=None, description="Format to render, overriding negotiation")
    template: str | None = Field(default=None, description="Template path relative to the template root")
    status: int | None = Field(default=None, description="Response status, integer or status name")
    layout: str | Literal[False] | None = Field(default=None, description="Layout relative to the layout root, False for none")

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, v: Any) -> int | None:
        """Coerce status names and digit strings to integers."""
        return None if v is None else coerce_status(v)

    @field_validator("format", mode="after")
    @classmethod
    def validate_format(cls, v: str | None) -> str | None:
        """Normalize the format to a bare lowercase name."""
        if v is None:
            return None
        v = v.strip().lower().lstrip(".")
        if not v:
            raise ValueError("format cannot be empty")
        return v


@dataclass(frozen=True)
class ActionTarget:
    """Render an action's template; None means the current action."""

    action: str | None = None


@dataclass(frozen=True)
class TemplateTarget:
    """Render the template at a path relative to the template root."""

    path: str


@dataclass(frozen=True)
class LiteralTarget:
    """Use a literal string as the rendered content."""

    text: str


@dataclass(frozen=True)
class LayoutOnly:
    """Render no content, only the layout around previously thrown content."""


RenderTarget = ActionTarget | TemplateTarget | LiteralTarget | LayoutOnly
