"""Jinja2-backed template registry."""

from collections.abc import Sequence
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, Template, TemplateNotFound, select_autoescape
from markupsafe import Markup, escape

from controller_render.config import Settings
from controller_render.content import FOR_LAYOUT
from controller_render.context import RenderContext
from controller_render.logging_config import get_logger, log_with_context
from controller_render.views.registry import TemplateHandle, candidate_names

logger = get_logger(__name__)

DEFAULT_EXTENSIONS = (".jinja", ".j2")
ESCAPED_FORMATS = ("html", "htm", "xml")


class JinjaTemplateRegistry:
    """Resolves logical paths like ``posts/show.html`` to Jinja2 template files.

    A logical path matches the first existing file among the path with each
    engine extension appended, then the bare path.
    """

    def __init__(
        self,
        source: Environment | str | Path,
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    ):
        if isinstance(source, Environment):
            self.environment = source
        else:
            escaped = [f"{fmt}{ext}" for fmt in ESCAPED_FORMATS for ext in (*extensions, "")]
            self.environment = Environment(
                loader=FileSystemLoader(str(source)),
                autoescape=select_autoescape(enabled_extensions=escaped, default_for_string=False),
            )
        self.extensions = (*extensions, "")

    @classmethod
    def from_settings(cls, settings: Settings) -> "JinjaTemplateRegistry":
        """Registry over ``settings.views_dir`` with the configured engine extensions."""
        return cls(settings.views_dir, extensions=settings.template_extensions)

    def lookup(self, path: str, content_type: str | None = None) -> TemplateHandle | None:
        for name in candidate_names(path, content_type):
            for ext in self.extensions:
                try:
                    template = self.environment.get_template(name + ext)
                except TemplateNotFound:
                    continue
                log_with_context(
                    logger,
                    "debug",
                    "Jinja template loaded",
                    template_path=name,
                    template_file=template.filename,
                    event_type="jinja_template_loaded",
                )
                return TemplateHandle(name, _renderer_for(template))
        return None


def _renderer_for(template: Template):
    autoescape = template.environment.autoescape
    escaped = autoescape(template.name) if callable(autoescape) else bool(autoescape)

    def render(context: RenderContext) -> str:
        # Thrown content is stored escaped, so caught content is safe to embed.
        # Layouts calling catch_content() with no key get the action content.
        def catch_content(key: str = FOR_LAYOUT) -> str:
            content = context.content.pull(key) or ""
            return Markup(content) if escaped else content

        def throw_content(key: str, text: str) -> str:
            context.content.push(key, escape(text) if escaped else text)
            return ""

        return template.render(
            **context.template_variables(),
            catch_content=catch_content,
            throw_content=throw_content,
        )

    return render
