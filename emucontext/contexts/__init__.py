"""Emulator families.

Each sub-package holds one family: a ``context`` module defining an
:class:`EmulatorContext` subclass and its resolution table.
"""

from emucontext.contexts.base import EmulatorContext
from emucontext.contexts.bizhawk import BizHawkContext
from emucontext.contexts.fceux import FceuxContext
from emucontext.contexts.gens import GensContext
from emucontext.contexts.registry import ContextRegistry

__all__ = [
    "BizHawkContext",
    "ContextRegistry",
    "EmulatorContext",
    "FceuxContext",
    "GensContext",
]
