"""Cross-platform path placeholders for configured install paths.

Settings files are shared between machines, so install locations may be
written relative to well-known roots:

    ``${HOME}``          → user's home directory
    ``${DOCUMENTS}``     → ``~/Documents``
    ``${APPDATA}``       → ``%APPDATA%`` (Roaming), ``~`` elsewhere
    ``${LOCALAPPDATA}``  → ``%LOCALAPPDATA%``, ``~`` elsewhere

Usage::

    from emucontext.core.path_resolver import resolve_path

    resolve_path("${HOME}/emulators/fceux")     # Path("/home/me/emulators/fceux")
"""

from __future__ import annotations

import os
import platform
from pathlib import Path


def get_home_dir() -> Path:
    return Path.home()


def get_documents_dir() -> Path:
    return Path.home() / "Documents"


def _windows_env_dir(var: str) -> Path:
    if platform.system() == "Windows":
        env = os.environ.get(var)
        if env:
            return Path(env)
    return Path.home()


def get_appdata_dir() -> Path:
    """Return ``%APPDATA%`` (Roaming) on Windows, ``~`` elsewhere."""
    return _windows_env_dir("APPDATA")


def get_localappdata_dir() -> Path:
    """Return ``%LOCALAPPDATA%`` on Windows, ``~`` elsewhere."""
    return _windows_env_dir("LOCALAPPDATA")


def _placeholder_map() -> list[tuple[str, Path]]:
    return [
        ("${DOCUMENTS}", get_documents_dir()),
        ("${HOME}", get_home_dir()),
        ("${APPDATA}", get_appdata_dir()),
        ("${LOCALAPPDATA}", get_localappdata_dir()),
    ]


def resolve_path(portable: str) -> Path:
    """Expand a leading placeholder (and ``~``) in *portable*."""
    for placeholder, real in _placeholder_map():
        if portable.startswith(placeholder):
            rest = portable[len(placeholder):].lstrip("/").lstrip("\\")
            return real / rest if rest else real
    return Path(portable).expanduser()
