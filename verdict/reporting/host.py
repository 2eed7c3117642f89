"""
Host platform identification for report metadata.
"""

from __future__ import annotations

import platform
import sys


def platform_id(system: str | None = None) -> str:
    """
    Map a host platform to the label used in report metadata.

    Args:
        system: A ``sys.platform`` style value (defaults to the host's)

    Returns:
        "osx", "windows" or "linux"
    """
    if system is None:
        system = sys.platform
    if system == "darwin":
        return "osx"
    elif system == "win32":
        return "windows"
    return "linux"


def os_version() -> str:
    """OS type and release, e.g. "Linux 6.1.0"."""
    return f"{platform.system()} {platform.release()}"
