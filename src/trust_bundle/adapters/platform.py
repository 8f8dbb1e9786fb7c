"""Operating system family probes."""

from __future__ import annotations

import sys

from trust_bundle.domain.models import OsFamily


def is_windows() -> bool:
    return sys.platform == "win32"


def is_mac() -> bool:
    return sys.platform == "darwin"


def is_linux() -> bool:
    return sys.platform.startswith("linux")


def detect_os_family() -> OsFamily:
    """Map the three mutually exclusive probes onto an OsFamily."""
    if is_windows():
        return OsFamily.WINDOWS
    if is_mac():
        return OsFamily.MAC
    if is_linux():
        return OsFamily.LINUX
    return OsFamily.OTHER
