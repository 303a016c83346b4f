"""watchpkg command-line interface."""

from watchpkg import __version__

__all__ = ["__version__"]
