"""Podcaster - account and podcast catalog services for a podcast platform."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("podcaster")
except PackageNotFoundError:
    # Development environment fallback
    __version__ = "0.1.0-dev"

from podcaster.config import get_logger, settings  # noqa: E402

__all__ = ["__version__", "get_logger", "settings"]
