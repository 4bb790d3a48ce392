"""Request-scoped render state."""

from dataclasses import dataclass, field
from typing import Any

from controller_render.content import ContentAccumulator


@dataclass
class RenderContext:
    """State for one request/response cycle.

    Created fresh per request and passed explicitly to every template and
    layout invocation. Nothing in it is shared between requests.
    """

    action_name: str
    controller_name: str
    accept: str | None = None
    format: str | None = None
    assigns: dict[str, Any] = field(default_factory=dict)
    content: ContentAccumulator = field(default_factory=ContentAccumulator)
    content_type: str | None = None
    status: int | None = None

    def template_variables(self) -> dict[str, Any]:
        """Variables exposed to templates rendered in this context."""
        return {
            **self.assigns,
            "action_name": self.action_name,
            "controller_name": self.controller_name,
            "content_type": self.content_type,
        }
