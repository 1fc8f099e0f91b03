"""Value objects shared by every emulator context."""

from emucontext.models.command import ResolvedCommand
from emucontext.models.host import OperatingSystem, host_os
from emucontext.models.options import Option, OptionKind
from emucontext.models.version import EmulatorVersion, VersionRange

__all__ = [
    "EmulatorVersion",
    "OperatingSystem",
    "Option",
    "OptionKind",
    "ResolvedCommand",
    "VersionRange",
    "host_os",
]
