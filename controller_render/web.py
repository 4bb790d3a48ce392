"""FastAPI binding: build render contexts from requests and responses from results."""

from fastapi import Request
from fastapi.responses import Response

from controller_render.config import ControllerConfig
from controller_render.context import RenderContext
from controller_render.controller import Controller
from controller_render.dependencies import get_mime_registry, get_template_registry


def build_context(request: Request, action_name: str, controller_name: str) -> RenderContext:
    """Create the render context for a request.

    Args:
        request: The FastAPI request object.
        action_name: Name of the action handling the request.
        controller_name: Name of the controller handling the request.

    Returns:
        A fresh RenderContext carrying the Accept header and ``format`` query parameter.
    """
    return RenderContext(
        action_name=action_name,
        controller_name=controller_name,
        accept=request.headers.get("accept"),
        format=request.query_params.get("format") or None,
    )


async def controller_for(request: Request, config: ControllerConfig, action_name: str) -> Controller:
    """Build a controller for a request from the registries in app state."""
    return Controller(
        build_context(request, action_name, config.name),
        config,
        await get_template_registry(request),
        await get_mime_registry(request),
    )


def to_response(controller: Controller, body: str | None) -> Response:
    """Wrap rendered output in a response with the negotiated media type and status."""
    return Response(
        content=body or "",
        status_code=controller.context.status or 200,
        media_type=controller.mime_types.media_type_for(controller.content_type),
    )
