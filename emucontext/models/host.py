"""Operating-system model and host detection."""

from __future__ import annotations

import platform
from enum import Enum

from emucontext.errors import UnsupportedPlatformError


class OperatingSystem(str, Enum):
    """Operating systems an emulator build can target."""

    WINDOWS = "windows"
    LINUX = "linux"
    MACOS = "macos"

    @classmethod
    def parse(cls, value: "str | OperatingSystem") -> "OperatingSystem":
        """Normalise *value* (``"Darwin"``, ``"win32"``, ``"linux"`` …)."""
        if isinstance(value, OperatingSystem):
            return value
        key = str(value).strip().lower()
        try:
            return _ALIASES[key]
        except KeyError:
            raise UnsupportedPlatformError("host", None, value, "unknown operating system") from None


_ALIASES: dict[str, OperatingSystem] = {
    "windows": OperatingSystem.WINDOWS,
    "win32": OperatingSystem.WINDOWS,
    "win64": OperatingSystem.WINDOWS,
    "nt": OperatingSystem.WINDOWS,
    "linux": OperatingSystem.LINUX,
    "macos": OperatingSystem.MACOS,
    "darwin": OperatingSystem.MACOS,
    "osx": OperatingSystem.MACOS,
}


def host_os() -> OperatingSystem:
    """Return the operating system this process runs on."""
    return OperatingSystem.parse(platform.system())
