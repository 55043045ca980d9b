"""Works archive: content tree API and rendered markdown pages."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("works-archive")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"
