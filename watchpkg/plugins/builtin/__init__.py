"""Built-in plugins for watchpkg."""

from watchpkg.plugins.builtin.watchpkg import WatchPkgPlugin

__all__ = ["WatchPkgPlugin"]
