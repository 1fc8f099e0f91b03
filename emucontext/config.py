"""Settings file management for the command-line front end."""

import copy
import json
import os
import platform
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from emucontext.core.path_resolver import resolve_path

ENV_CONFIG_PATH = "EMUCONTEXT_CONFIG"


def _default_data_dir() -> Path:
    """Return the default data directory for the application."""
    if platform.system() == "Windows":
        return Path.home() / "Documents" / "EmuContext"
    elif platform.system() == "Darwin":
        return Path.home() / "Library" / "Application Support" / "EmuContext"
    else:
        return Path.home() / ".config" / "emucontext"


_DEFAULT_CONFIG: dict[str, Any] = {
    "log_level": "INFO",
    "log_dir": "",
    "families": {},
}


class Config:
    """Singleton settings store backed by a JSON file.

    Layout::

        {
            "log_level": "INFO",
            "log_dir": "${HOME}/.cache/emucontext/logs",
            "families": {
                "fceux": {
                    "install_path": "${HOME}/emulators/fceux",
                    "version": "2.6.4",
                    "variant": "sdl"
                }
            }
        }

    The file is chosen from, in order: the explicit *config_path*, the
    ``EMUCONTEXT_CONFIG`` environment variable, ``<data dir>/config.json``.
    """

    _instance: Optional["Config"] = None
    _data: dict[str, Any]
    _path: Path

    def __new__(cls, config_path: Optional[Path] = None) -> "Config":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        if self._initialized:  # type: ignore[has-type]
            return
        self._initialized = True
        env_path = os.environ.get(ENV_CONFIG_PATH)
        self._path = config_path or (Path(env_path) if env_path else _default_data_dir() / "config.json")
        self._data = copy.deepcopy(_DEFAULT_CONFIG)
        self._load()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def path(self) -> Path:
        return self._path

    @property
    def log_level(self) -> str:
        return str(self._data.get("log_level", "INFO"))

    @property
    def log_dir(self) -> Path | None:
        p = self._data.get("log_dir", "")
        return resolve_path(p) if p else None

    def family_settings(self, name: str) -> dict[str, Any]:
        """Return the stored settings for family *name* (may be empty)."""
        return dict(self._data.get("families", {}).get(name.lower(), {}))

    def get_install_path(self, name: str) -> Path | None:
        p = self.family_settings(name).get("install_path", "")
        return resolve_path(p) if p else None

    def get_version(self, name: str) -> str | None:
        return self.family_settings(name).get("version") or None

    def get_variant(self, name: str) -> str | None:
        return self.family_settings(name).get("variant") or None

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _load(self) -> None:
        if not self._path.exists():
            return
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                saved = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Failed to load config, using defaults: {}", e)
            return
        if not isinstance(saved, dict):
            logger.warning("Ignoring config {}: expected a JSON object", self._path)
            return
        self._data.update(saved)
        logger.debug("Configuration loaded from {}", self._path)

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton (for testing)."""
        cls._instance = None
