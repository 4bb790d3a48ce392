"""FastAPI dependencies for dependency injection."""

from fastapi import Request

from controller_render.mime import MimeRegistry
from controller_render.protocols import TemplateRegistry


async def get_template_registry(request: Request) -> TemplateRegistry:
    """
    Get the shared template registry from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        The template registry created at startup.

    Raises:
        RuntimeError: If the template registry is not initialized.
    """
    registry: TemplateRegistry | None = getattr(request.app.state, "template_registry", None)

    if registry is None:
        raise RuntimeError("Template registry not initialized.")

    return registry


async def get_mime_registry(request: Request) -> MimeRegistry:
    """
    Get the shared MIME registry from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        The MIME registry created at startup.

    Raises:
        RuntimeError: If the MIME registry is not initialized.
    """
    mime_types: MimeRegistry | None = getattr(request.app.state, "mime_types", None)

    if mime_types is None:
        raise RuntimeError("MIME registry not initialized.")

    return mime_types
