"""Emulator family discovery and lookup."""

from __future__ import annotations

import importlib
import inspect
import pkgutil
from pathlib import Path
from typing import Any, Type

from loguru import logger

from emucontext.contexts.base import EmulatorContext
from emucontext.models.options import PathLike


class ContextRegistry:
    """Discovers and manages emulator context families."""

    def __init__(self) -> None:
        self._families: dict[str, Type[EmulatorContext]] = {}

    def discover(self) -> None:
        """Auto-discover all families in the ``emucontext.contexts`` package.

        Each sub-package's ``context`` module is scanned for concrete
        ``EmulatorContext`` subclasses.  A family that fails to import is
        logged and skipped.
        """
        contexts_dir = Path(__file__).parent
        for _finder, module_name, is_pkg in pkgutil.iter_modules([str(contexts_dir)]):
            if not is_pkg:
                continue
            full_module = f"emucontext.contexts.{module_name}.context"
            try:
                mod = importlib.import_module(full_module)
            except ImportError as e:
                logger.warning("Failed to load family {}: {}", full_module, e)
                continue
            for _attr_name, attr in inspect.getmembers(mod, inspect.isclass):
                if (
                    issubclass(attr, EmulatorContext)
                    and attr is not EmulatorContext
                    and not inspect.isabstract(attr)
                    and attr.__module__ == mod.__name__
                ):
                    self.register(attr)
                    logger.debug("Discovered family: {} ({})", attr.name, full_module)

    def register(self, family: Type[EmulatorContext]) -> None:
        """Manually register a context class."""
        self._families[family.name.lower()] = family

    def get(self, name: str) -> Type[EmulatorContext] | None:
        """Get a registered family by name (case-insensitive)."""
        return self._families.get(name.lower())

    def create(self, name: str, path: PathLike, **kwargs: Any) -> EmulatorContext:
        """Create a context for family *name* rooted at *path*.

        Raises ``KeyError`` for unknown families.
        """
        family = self.get(name)
        if family is None:
            raise KeyError(f"Unknown emulator family {name!r}; known: {', '.join(self.names())}")
        return family.new(path, **kwargs)

    def all(self) -> list[Type[EmulatorContext]]:
        """Return all registered families."""
        return list(self._families.values())

    def names(self) -> list[str]:
        """Return names of all registered families."""
        return sorted(self._families)
