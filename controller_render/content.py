"""Per-request content accumulator.

Templates throw fragments of content under a key and layouts catch them
again. Rendering an action template throws its output under ``FOR_LAYOUT``.
"""

from collections.abc import Callable
from typing import Any

from controller_render.exceptions import InvalidArgumentException

FOR_LAYOUT = "for_layout"
LAYOUT = "layout"


class ContentAccumulator:
    """Mapping from content key to the concatenation of everything pushed under it."""

    def __init__(self):
        self._content: dict[str, str] = {}

    def push(self, key: str, text: Any = None, producer: Callable[[], Any] | None = None) -> str:
        """Append content under ``key``.

        The producer runs first, so anything it pushes under the same key is
        kept and the new fragment lands after it.

        Args:
            key: Content key
            text: Content to append. Bytes are decoded as UTF-8, anything else goes through ``str()``
            producer: Callable whose result is appended after ``text``

        Returns:
            The full content now stored under ``key``

        Raises:
            InvalidArgumentException: If neither text nor producer is given
        """
        if text is None and producer is None:
            raise InvalidArgumentException(
                "You must pass a producer or a string into push",
                details={"key": key},
            )
        fragment = "" if text is None else _as_text(text)
        if producer is not None:
            fragment += _as_text(producer())
        self._content[key] = self._content.get(key, "") + fragment
        return self._content[key]

    def pull(self, key: str = LAYOUT) -> str | None:
        """Return the content stored under ``key``, or None if nothing was pushed."""
        return self._content.get(key)

    def reset(self, key: str) -> None:
        """Drop whatever is stored under ``key``."""
        self._content.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._content)

    def __contains__(self, key: object) -> bool:
        return key in self._content


def _as_text(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8")
    return str(value)
