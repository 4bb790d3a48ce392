"""Controller view rendering: template lookup, layouts and content fallbacks"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("controller-render")
except PackageNotFoundError:
    __version__ = "dev"
