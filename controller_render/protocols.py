"""Protocol definitions for dependency injection."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from controller_render.views.registry import TemplateHandle


class TemplateRegistry(Protocol):
    """Lookup service mapping logical template paths to invocable handles.

    Implementations are treated as read-only during a render cycle.
    """

    def lookup(self, path: str, content_type: str | None = None) -> "TemplateHandle | None":
        """Find the template for a logical path.

        Args:
            path: Logical path, relative to the registry root
            content_type: Active format, appended as extension when the path has none

        Returns:
            TemplateHandle, or None when no template exists
        """
        ...
