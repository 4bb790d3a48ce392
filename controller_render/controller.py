"""Controller rendering: templates, layouts and serialization fallbacks.

A :class:`Controller` is built per request from an explicit
:class:`~controller_render.config.ControllerConfig` and a
:class:`~controller_render.context.RenderContext`. Rendering throws the
action's content under ``for_layout`` and then hands control to the layout,
which catches it back.
"""

from typing import Any

from controller_render.config import ControllerConfig
from controller_render.content import FOR_LAYOUT, LAYOUT
from controller_render.context import RenderContext
from controller_render.exceptions import (
    ConfigurationException,
    NotAcceptableException,
    TemplateNotFoundException,
)
from controller_render.logging_config import get_logger, log_with_context
from controller_render.mime import MimeRegistry, default_mime_registry, negotiate
from controller_render.models.render import (
    ActionTarget,
    LayoutOnly,
    LiteralTarget,
    RenderOptions,
    RenderTarget,
    TemplateTarget,
)
from controller_render.protocols import TemplateRegistry
from controller_render.views.resolver import LayoutResolver, TemplateResolver, default_template_location

logger = get_logger(__name__)


class Controller:
    """Renders views for one request."""

    def __init__(
        self,
        context: RenderContext,
        config: ControllerConfig,
        registry: TemplateRegistry,
        mime_types: MimeRegistry | None = None,
    ):
        self.context = context
        self.config = config
        self.registry = registry
        self.mime_types = mime_types or default_mime_registry()

        if context.controller_name != config.name:
            raise ConfigurationException(
                f"Render context belongs to controller {context.controller_name!r}, not {config.name!r}",
                details={"controller": config.name, "context_controller": context.controller_name},
            )

        unknown = [fmt for fmt in config.provides if fmt not in self.mime_types]
        if unknown:
            raise ConfigurationException(
                f"Controller {config.name!r} provides unregistered formats: {unknown}",
                details={"controller": config.name, "formats": unknown},
            )

        self.templates = TemplateResolver(registry, config.template_root)
        self.layouts = LayoutResolver(registry, config.layout_root, config.layout)

    @property
    def action_name(self) -> str:
        return self.context.action_name

    @property
    def controller_name(self) -> str:
        return self.config.name

    @property
    def content_type(self) -> str:
        """Active format, negotiated from the request on first read."""
        if self.context.content_type is None:
            self.context.content_type = negotiate(
                self.context.accept,
                self.config.provides,
                self.mime_types,
                format=self.context.format,
            )
            log_with_context(
                logger,
                "debug",
                "Content type negotiated",
                content_type=self.context.content_type,
                accept=self.context.accept,
                event_type="content_type_negotiated",
            )
        return self.context.content_type

    @content_type.setter
    def content_type(self, value: str) -> None:
        if value not in self.mime_types:
            raise NotAcceptableException(
                f"Unknown format {value!r}",
                content_type=value,
                details={"known_formats": self.mime_types.names()},
            )
        self.context.content_type = value

    def template_location(self, action: str, content_type: str | None = None, controller_name: str | None = None) -> str:
        """Location of an action template relative to the template root.

        Override to customize where a controller keeps its templates.
        """
        return default_template_location(action, content_type, controller_name or self.controller_name)

    def throw_content(self, key: str, text: Any = None, producer=None) -> str:
        """Store content under ``key`` for a layout or later template to catch."""
        return self.context.content.push(key, text, producer)

    def catch_content(self, key: str = LAYOUT) -> str | None:
        """Content thrown under ``key``, None if nothing was thrown."""
        return self.context.content.pull(key)

    def assign(self, **values: Any) -> None:
        """Expose variables to templates rendered for this request."""
        self.context.assigns.update(values)

    def render(self, target: RenderTarget | None = None, options: RenderOptions | None = None) -> str | None:
        """Render a target, wrapped in a layout when one applies.

        Args:
            target: What to render, the current action by default
            options: Format, template, status and layout options

        Returns:
            The layout output, or the content thrown for the layout when no
            layout applies

        Raises:
            TemplateNotFoundException: If the template or a requested layout is missing
            NotAcceptableException: If the format cannot be negotiated
        """
        options = options or RenderOptions()
        target = target or ActionTarget()

        if options.format:
            self.content_type = options.format
        content_type = self.content_type

        # Each render replaces the primary content; a layout-only render wraps what is there
        if options.template or isinstance(target, (ActionTarget, TemplateTarget)):
            path = self._template_path(target, options, content_type)
            handle = self.templates.require(path, content_type)
            self.context.content.reset(FOR_LAYOUT)
            self.throw_content(FOR_LAYOUT, producer=lambda: handle(self.context))
        elif isinstance(target, LiteralTarget):
            self.context.content.reset(FOR_LAYOUT)
            self.throw_content(FOR_LAYOUT, target.text)

        self._handle_options(options)

        layout = self.layouts.resolve(options.layout, self.controller_name, content_type)
        return layout(self.context) if layout else self.catch_content(FOR_LAYOUT)

    def render_action(self, action: str | None = None, **options: Any) -> str | None:
        """Render an action's template, the current action by default."""
        return self.render(ActionTarget(action), RenderOptions(**options))

    def render_template(self, path: str, **options: Any) -> str | None:
        """Render the template at ``path`` relative to the template root."""
        return self.render(TemplateTarget(path), RenderOptions(**options))

    def render_literal(self, text: str, **options: Any) -> str | None:
        """Render a literal string, wrapped in the layout when one applies."""
        return self.render(LiteralTarget(text), RenderOptions(**options))

    def render_layout(self, **options: Any) -> str | None:
        """Render only the layout around content thrown earlier."""
        return self.render(LayoutOnly(), RenderOptions(**options))

    def display(self, obj: Any, template: str | None = None, *, action: str | None = None, **options: Any) -> str | None:
        """Render a template, falling back to serializing ``obj``.

        When no template exists the transform method registered for the
        active format is called on ``obj`` (``to_json`` for json and so on).
        The transformed output only gets a layout when ``layout`` is passed.

        Args:
            obj: Object to serialize when there is no template
            template: Template path to try instead of the action template
            action: Action whose template to try, the current action by default
            **options: Render options

        Returns:
            Rendered template or transformed object

        Raises:
            NotAcceptableException: If there is no template and the object
                cannot be transformed into the active format
            TemplateNotFoundException: If a requested fallback layout is missing
        """
        if template is not None:
            options["template"] = template
        opts = RenderOptions(**options)

        try:
            return self.render(ActionTarget(action), opts)
        except TemplateNotFoundException as exc:
            content_type = self.content_type
            transform = self.mime_types.resolve_transform(obj, content_type)
            if transform is None:
                log_with_context(
                    logger,
                    "info",
                    "No template and no transform for object",
                    content_type=content_type,
                    object_type=type(obj).__name__,
                    missing_paths=exc.paths,
                    event_type="display_not_acceptable",
                )
                raise NotAcceptableException(
                    f"Cannot display {type(obj).__name__} as {content_type}",
                    content_type=content_type,
                    details={"transform": self.mime_types.transform_method_for(content_type)},
                ) from exc

            log_with_context(
                logger,
                "info",
                "Template missing, displaying transformed object",
                content_type=content_type,
                object_type=type(obj).__name__,
                missing_paths=exc.paths,
                event_type="display_fallback",
            )

        self.context.content.reset(FOR_LAYOUT)
        self.throw_content(FOR_LAYOUT, producer=transform)

        if opts.layout:
            layout = self.layouts.resolve_strict(opts.layout, content_type)
            return layout(self.context)
        return self.catch_content(FOR_LAYOUT)

    def _template_path(self, target: RenderTarget, options: RenderOptions, content_type: str) -> str:
        if options.template:
            location = options.template
        elif isinstance(target, TemplateTarget):
            location = target.path
        else:
            action = (target.action if isinstance(target, ActionTarget) else None) or self.action_name
            location = self.template_location(action, content_type)
        return self.templates.candidate(location)

    def _handle_options(self, options: RenderOptions) -> RenderOptions:
        if options.status is not None:
            self.context.status = options.status
        return options
