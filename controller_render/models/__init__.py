"""Controller render models"""

from controller_render.models.render import (
    ActionTarget,
    LayoutOnly,
    LiteralTarget,
    RenderOptions,
    RenderTarget,
    TemplateTarget,
    coerce_status,
)

__all__ = [
    "ActionTarget",
    "LayoutOnly",
    "LiteralTarget",
    "RenderOptions",
    "RenderTarget",
    "TemplateTarget",
    "coerce_status",
]
