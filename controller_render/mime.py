"""MIME type registry and content negotiation."""

from collections.abc import Callable, Iterable
from typing import Any

from pydantic import BaseModel, Field, field_validator

from controller_render.exceptions import NotAcceptableException
from controller_render.logging_config import get_logger, log_with_context

logger = get_logger(__name__)


class MimeType(BaseModel):
    """A renderable format and how objects are serialized into it."""

    name: str = Field(min_length=1, description="Format name, also used as template extension")
    media_types: list[str] = Field(min_length=1, description="Media types mapped to this format, preferred first")
    transform_method: str | None = Field(default=None, description="Method objects implement to serialize themselves")

    @field_validator("media_types", mode="after")
    @classmethod
    def validate_media_types(cls, v: list[str]) -> list[str]:
        """Normalize media types to lowercase without parameters."""
        return [mt.split(";", 1)[0].strip().lower() for mt in v]


class MimeRegistry:
    """Registry of formats known to the renderer."""

    def __init__(self, mime_types: Iterable[MimeType] = ()):
        self._types: dict[str, MimeType] = {}
        for mime_type in mime_types:
            self.register(mime_type)

    def register(self, mime_type: MimeType) -> MimeType:
        """Register or replace a format."""
        self._types[mime_type.name] = mime_type
        return mime_type

    def get(self, name: str) -> MimeType | None:
        return self._types.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def names(self) -> list[str]:
        return list(self._types)

    def transform_method_for(self, content_type: str) -> str | None:
        """Name of the transform method registered for a format, if any."""
        mime_type = self._types.get(content_type)
        return mime_type.transform_method if mime_type else None

    def media_type_for(self, content_type: str) -> str:
        """Preferred media type for a format, ``application/octet-stream`` when unknown."""
        mime_type = self._types.get(content_type)
        return mime_type.media_types[0] if mime_type else "application/octet-stream"

    def format_for_media_type(self, media_type: str) -> str | None:
        """Format name owning a media type."""
        media_type = media_type.split(";", 1)[0].strip().lower()
        for mime_type in self._types.values():
            if media_type in mime_type.media_types:
                return mime_type.name
        return None

    def resolve_transform(self, obj: Any, content_type: str) -> Callable[[], Any] | None:
        """Bound transform for ``obj`` in ``content_type``.

        Returns None when the format has no transform or the object does not
        implement it.
        """
        method_name = self.transform_method_for(content_type)
        if method_name is None:
            return None
        transform = getattr(obj, method_name, None)
        return transform if callable(transform) else None


def default_mime_registry() -> MimeRegistry:
    """Registry with the standard web formats."""
    return MimeRegistry(
        [
            MimeType(name="all", media_types=["*/*"]),
            MimeType(name="yaml", media_types=["application/x-yaml", "text/yaml"], transform_method="to_yaml"),
            MimeType(name="text", media_types=["text/plain"], transform_method="to_text"),
            MimeType(
                name="html",
                media_types=["text/html", "application/xhtml+xml", "application/html"],
                transform_method="to_html",
            ),
            MimeType(
                name="xml",
                media_types=["application/xml", "text/xml", "application/x-xml"],
                transform_method="to_xml",
            ),
            MimeType(
                name="js",
                media_types=["text/javascript", "application/javascript", "application/x-javascript"],
                transform_method="to_json",
            ),
            MimeType(name="json", media_types=["application/json", "text/x-json"], transform_method="to_json"),
        ]
    )


def parse_accept(accept: str | None) -> list[str]:
    """Media types from an Accept header ordered by quality.

    Entries with ``q=0`` or an unparsable quality are dropped. Ties keep
    header order.
    """
    if not accept:
        return []
    weighted: list[tuple[float, int, str]] = []
    for index, part in enumerate(accept.split(",")):
        media_type, *params = [piece.strip() for piece in part.split(";")]
        if not media_type:
            continue
        quality = 1.0
        for param in params:
            key, _, value = param.partition("=")
            if key.strip().lower() == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 0.0
        if quality > 0:
            weighted.append((-quality, index, media_type.lower()))
    return [media_type for _, _, media_type in sorted(weighted)]


def negotiate(
    accept: str | None,
    provides: list[str],
    mime_types: MimeRegistry,
    format: str | None = None,
) -> str:
    """Pick the content type for a request.

    Args:
        accept: Raw Accept header
        provides: Formats the controller can render, preferred first
        mime_types: Registry used to map media types to formats
        format: Explicit format requested (e.g. a ``format`` query parameter)

    Returns:
        Negotiated format name

    Raises:
        NotAcceptableException: If nothing the client accepts is provided
    """
    if format:
        if format in provides:
            return format
        raise NotAcceptableException(f"Format {format!r} is not provided", content_type=format)

    media_types = parse_accept(accept)
    if not media_types:
        return provides[0]

    for media_type in media_types:
        if media_type == "*/*":
            return provides[0]
        if media_type.endswith("/*"):
            family = media_type[:-1]
            for name in provides:
                mime_type = mime_types.get(name)
                if mime_type and any(mt.startswith(family) for mt in mime_type.media_types):
                    return name
            continue
        name = mime_types.format_for_media_type(media_type)
        if name in provides:
            return name

    log_with_context(
        logger,
        "info",
        "No provided format matches Accept header",
        accept=accept,
        provides=provides,
        event_type="content_type_rejected",
    )
    raise NotAcceptableException(f"None of {provides} is acceptable for {accept!r}", content_type=None)
