"""Template and layout resolution against a template registry."""

from typing import Literal

from controller_render.exceptions import TemplateNotFoundException
from controller_render.logging_config import get_logger, log_with_context
from controller_render.protocols import TemplateRegistry
from controller_render.views.registry import TemplateHandle, join_path

logger = get_logger(__name__)

APPLICATION_LAYOUT = "application"


def default_template_location(action: str, content_type: str | None, controller_name: str) -> str:
    """Conventional location of an action template: ``controller/action.format``."""
    location = f"{controller_name}/{action}"
    return f"{location}.{content_type}" if content_type else location


class TemplateResolver:
    """Finds action and explicit templates under the template root."""

    def __init__(self, registry: TemplateRegistry, template_root: str = ""):
        self.registry = registry
        self.template_root = template_root

    def candidate(self, location: str) -> str:
        """Full registry path for a location relative to the template root."""
        return join_path(self.template_root, location)

    def resolve(self, path: str, content_type: str | None = None) -> TemplateHandle | None:
        handle = self.registry.lookup(path, content_type)
        if handle is None:
            log_with_context(
                logger,
                "debug",
                "Template missing",
                template_path=path,
                content_type=content_type,
                event_type="template_missing",
            )
        else:
            log_with_context(
                logger,
                "debug",
                "Template resolved",
                template_path=handle.path,
                content_type=content_type,
                event_type="template_resolved",
            )
        return handle

    def require(self, path: str, content_type: str | None = None) -> TemplateHandle:
        """Resolve a template that must exist.

        Raises:
            TemplateNotFoundException: If the registry has no template at path
        """
        handle = self.resolve(path, content_type)
        if handle is None:
            raise TemplateNotFoundException(f"No template found at {path}", paths=[path])
        return handle


class LayoutResolver:
    """Chooses the layout wrapping rendered content.

    An explicit layout wins over the controller default. Either one must
    exist. Without both, ``{controller}.{format}`` and then
    ``application.{format}`` are tried and a miss means no layout.
    """

    def __init__(self, registry: TemplateRegistry, layout_root: str = "layout", default_layout: str | None = None):
        self.registry = registry
        self.layout_root = layout_root
        self.default_layout = default_layout

    @staticmethod
    def extension_for(name: str | None, content_type: str | None) -> str:
        """``.{content_type}`` unless the name already carries an extension."""
        if content_type and (name is None or "." not in name):
            return f".{content_type}"
        return ""

    def resolve(
        self,
        explicit: str | Literal[False] | None,
        controller_name: str,
        content_type: str | None,
    ) -> TemplateHandle | None:
        """Find the layout for a render.

        Args:
            explicit: Layout requested by the caller, False to disable layouts
            controller_name: Name used for the conventional controller layout
            content_type: Active format

        Returns:
            TemplateHandle of the layout, or None when no layout applies

        Raises:
            TemplateNotFoundException: If an explicit or default layout does not exist
        """
        if explicit is False:
            log_with_context(logger, "debug", "Layout disabled", event_type="layout_none")
            return None

        name = str(explicit) if explicit else self.default_layout
        if name:
            return self.resolve_strict(name, content_type)

        ext = self.extension_for(None, content_type)
        for candidate in (f"{controller_name}{ext}", f"{APPLICATION_LAYOUT}{ext}"):
            path = join_path(self.layout_root, candidate)
            handle = self.registry.lookup(path, content_type)
            if handle is not None:
                log_with_context(
                    logger,
                    "debug",
                    "Layout resolved",
                    layout_path=handle.path,
                    event_type="layout_resolved",
                )
                return handle

        log_with_context(
            logger,
            "debug",
            "No layout found, rendering bare content",
            controller=controller_name,
            content_type=content_type,
            event_type="layout_none",
        )
        return None

    def resolve_strict(self, name: str, content_type: str | None) -> TemplateHandle:
        """Look up one layout under the layout root, with no fallback chain.

        Raises:
            TemplateNotFoundException: If the layout does not exist
        """
        path = join_path(self.layout_root, f"{name}{self.extension_for(name, content_type)}")
        handle = self.registry.lookup(path, content_type)
        if handle is None:
            log_with_context(
                logger,
                "info",
                "Requested layout missing",
                layout_path=path,
                event_type="layout_missing",
            )
            raise TemplateNotFoundException(f"No layout found at {path}", paths=[path])
        log_with_context(
            logger,
            "debug",
            "Layout resolved",
            layout_path=handle.path,
            event_type="layout_resolved",
        )
        return handle
