"""Template handles and the in-memory template registry."""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Any

from controller_render.context import RenderContext
from controller_render.exceptions import InvalidArgumentException

Renderer = Callable[[RenderContext], Any]


@dataclass(frozen=True)
class TemplateHandle:
    """A resolved, invocable template."""

    path: str
    renderer: Renderer

    def __call__(self, context: RenderContext) -> str:
        return str(self.renderer(context))


def normalize_path(path: str) -> str:
    """Collapse duplicate slashes and ``.`` segments and drop leading slashes.

    Raises:
        InvalidArgumentException: If path is not a non-empty string
    """
    if not isinstance(path, str) or not path.strip():
        raise InvalidArgumentException(f"Template path must be a non-empty string, got {path!r}")
    normalized = PurePosixPath(path.strip()).as_posix().lstrip("/")
    if normalized in ("", "."):
        raise InvalidArgumentException(f"Template path must name a template, got {path!r}")
    return normalized


def join_path(root: str, name: str) -> str:
    """Join a registry root and a relative name."""
    return (PurePosixPath(root or ".") / name.lstrip("/")).as_posix()


def has_extension(path: str) -> bool:
    return "." in PurePosixPath(path).name


def candidate_names(path: str, content_type: str | None) -> list[str]:
    """Logical names to try for a path: the exact path, then with the format appended."""
    normalized = normalize_path(path)
    candidates = [normalized]
    if content_type and not has_extension(normalized):
        candidates.append(f"{normalized}.{content_type}")
    return candidates


class InMemoryTemplateRegistry:
    """Template registry backed by a dict of logical paths.

    Sources are either literal strings or callables taking the render context.
    """

    def __init__(self, templates: dict[str, str | Renderer] | None = None):
        self._templates: dict[str, Renderer] = {}
        for path, source in (templates or {}).items():
            self.register(path, source)

    def register(self, path: str, source: str | Renderer) -> TemplateHandle:
        """Register a template under a logical path.

        Args:
            path: Logical path, e.g. ``posts/show.html``
            source: Literal output or callable ``(context) -> str``

        Returns:
            TemplateHandle for the registered template
        """
        normalized = normalize_path(path)
        renderer = source if callable(source) else _literal(source)
        self._templates[normalized] = renderer
        return TemplateHandle(normalized, renderer)

    def template(self, path: str) -> Callable[[Renderer], Renderer]:
        """Decorator form of :meth:`register`."""

        def decorator(func: Renderer) -> Renderer:
            self.register(path, func)
            return func

        return decorator

    def lookup(self, path: str, content_type: str | None = None) -> TemplateHandle | None:
        for name in candidate_names(path, content_type):
            renderer = self._templates.get(name)
            if renderer is not None:
                return TemplateHandle(name, renderer)
        return None

    def paths(self) -> list[str]:
        return sorted(self._templates)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and bool(path.strip()) and normalize_path(path) in self._templates


def _literal(text: str) -> Renderer:
    def render(context: RenderContext) -> str:
        return text

    return render
