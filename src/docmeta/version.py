"""Active tool version lookup."""

from __future__ import annotations

from importlib import metadata

from .config import Config


def compiler_version() -> str:
    """Return the version string that replaces `VERSION` in annotations.

    `Config.VERSION` wins when set; otherwise the installed distribution's
    version is used, falling back to the in-tree `__version__`.
    """
    if Config.VERSION:
        return Config.VERSION
    try:
        return metadata.version("docmeta")
    except metadata.PackageNotFoundError:
        from . import __version__

        return __version__
