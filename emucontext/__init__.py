"""Build emulator command lines from a single, consistent set of options.

Typical use::

    from emucontext import FceuxContext

    command = (
        FceuxContext.new("path/to/emulator", version="2.6.4", os="linux")
        .with_rom("Super Mario Bros.nes")
        .with_movie("SuperMario.fm2")
        .with_script("a.lua")
        .produce()
    )
    command.argv   # ['/…/fceux', '--loadlua', '/…/a.lua', '--playmov', …]
"""

from emucontext.contexts import (
    BizHawkContext,
    ContextRegistry,
    EmulatorContext,
    FceuxContext,
    GensContext,
)
from emucontext.core.runner import SubprocessExecutor, run
from emucontext.errors import (
    ConstructionError,
    EmuContextError,
    ExecutableNotFoundError,
    ExecutionError,
    InvalidPathError,
    OptionValidationError,
    PathNotFoundError,
    ResolutionError,
    UnsupportedOptionError,
    UnsupportedPlatformError,
    UnsupportedVersionError,
)
from emucontext.models import (
    EmulatorVersion,
    OperatingSystem,
    Option,
    OptionKind,
    ResolvedCommand,
    VersionRange,
    host_os,
)

__version__ = "0.1.0"

__all__ = [
    "BizHawkContext",
    "ConstructionError",
    "ContextRegistry",
    "EmuContextError",
    "EmulatorContext",
    "EmulatorVersion",
    "ExecutableNotFoundError",
    "ExecutionError",
    "FceuxContext",
    "GensContext",
    "InvalidPathError",
    "OperatingSystem",
    "Option",
    "OptionKind",
    "OptionValidationError",
    "PathNotFoundError",
    "ResolutionError",
    "ResolvedCommand",
    "SubprocessExecutor",
    "UnsupportedOptionError",
    "UnsupportedPlatformError",
    "UnsupportedVersionError",
    "VersionRange",
    "host_os",
    "run",
]
