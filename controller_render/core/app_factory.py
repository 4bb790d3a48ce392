"""Application factory for creating FastAPI apps that render through controllers."""

from fastapi import FastAPI

from controller_render import __version__
from controller_render.config import Settings, get_settings
from controller_render.logging_config import get_logger, log_with_context, setup_logging
from controller_render.middleware.error_handlers import register_error_handlers
from controller_render.mime import MimeRegistry, default_mime_registry
from controller_render.protocols import TemplateRegistry
from controller_render.views.jinja_registry import JinjaTemplateRegistry

logger = get_logger(__name__)


def create_app(
    settings: Settings | None = None,
    registry: TemplateRegistry | None = None,
    mime_types: MimeRegistry | None = None,
    configure_logging: bool = True,
) -> FastAPI:
    """Create a FastAPI application wired for controller rendering.

    Args:
        settings: Settings instance, the cached singleton when omitted
        registry: Template registry, Jinja2 files under ``settings.views_dir`` when omitted
        mime_types: MIME registry, the standard formats when omitted
        configure_logging: Whether to install logging handlers from settings

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or get_settings()

    if configure_logging:
        setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title="Controller Render", version=__version__)

    app.state.template_registry = registry or JinjaTemplateRegistry.from_settings(settings)
    app.state.mime_types = mime_types or default_mime_registry()
    app.state.settings = settings

    register_error_handlers(app)

    log_with_context(
        logger,
        "info",
        "Rendering app created",
        views_dir=str(settings.views_dir),
        layout_root=settings.layout_root,
        event_type="app_created",
    )
    return app
