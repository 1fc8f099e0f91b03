"""FCEUX context — NES/Famicom emulator with SDL, Qt and Win32 builds."""

from __future__ import annotations

from types import MappingProxyType

from emucontext.contexts.base import EmulatorContext
from emucontext.core.resolution import BuildEntry, ResolutionTable, Spelling, spellings
from emucontext.models.host import OperatingSystem
from emucontext.models.options import OptionKind
from emucontext.models.version import EmulatorVersion, VersionRange

LATEST_VERSION = "2.6.6"

# Executables that can make up an install.
#   fceux        native SDL / Qt build (Linux, macOS)
#   fceux.exe    Win32 build
#   fceux64.exe  Win64 build
#   qfceux.exe   Windows Qt/SDL build
_EXECUTABLES = ("fceux", "fceux.exe", "fceux64.exe", "qfceux.exe")

_LEGACY = VersionRange.between("1.0.0", "2.0.0")
_SDL = VersionRange.between("2.0.0", "2.3.0")
_QT = VersionRange.between("2.3.0")

_WINE = ("wine",)
_HOME = MappingProxyType({"HOME": ".fceux"})
_WINE_HOME = MappingProxyType({"WINEPREFIX": ".wine", "HOME": ".fceux"})

# 1.x builds predate movie playback from the command line.
_LEGACY_NATIVE = spellings(
    script=Spelling.separate("--loadlua"),
    extra_args=Spelling.verbatim(),
    rom=Spelling.positional(),
)
_LEGACY_WIN = spellings(
    config=Spelling.separate("-cfg"),
    script=Spelling.separate("-lua"),
    extra_args=Spelling.verbatim(),
    rom=Spelling.positional(),
)

# Native builds read $HOME/.fceux/fceux.cfg instead of taking a flag.
# Their --loadstate takes a slot number, so state files cannot be passed.
_NATIVE = spellings(
    config=Spelling.staged(".fceux/fceux.cfg"),
    script=Spelling.separate("--loadlua"),
    movie=Spelling.separate("--playmov"),
    extra_args=Spelling.verbatim(),
    rom=Spelling.positional(),
)
# The Windows Qt build reads fceux.cfg from beside the executable.
_QT_WIN = spellings(
    config=Spelling.staged("fceux.cfg"),
    script=Spelling.separate("--loadlua"),
    movie=Spelling.separate("--playmov"),
    extra_args=Spelling.verbatim(),
    rom=Spelling.positional(),
)
_WIN = spellings(
    config=Spelling.separate("-cfg"),
    savestate=Spelling.separate("-loadstate"),
    script=Spelling.separate("-lua"),
    movie=Spelling.separate("-playmovie"),
    extra_args=Spelling.verbatim(),
    rom=Spelling.positional(),
)

_W, _L, _M = OperatingSystem.WINDOWS, OperatingSystem.LINUX, OperatingSystem.MACOS

TABLE = ResolutionTable(
    family="FCEUX",
    entries=(
        # 1.x
        BuildEntry(_LEGACY, _L, "sdl", "fceux", _LEGACY_NATIVE, env=_HOME),
        BuildEntry(_LEGACY, _W, "win32", "fceux.exe", _LEGACY_WIN, env=_HOME),
        # 2.0 - 2.2
        BuildEntry(_SDL, _L, "sdl", "fceux", _NATIVE, env=_HOME),
        BuildEntry(_SDL, _L, "win32", "fceux.exe", _WIN, launcher=_WINE, env=_WINE_HOME),
        BuildEntry(_SDL, _W, "win32", "fceux.exe", _WIN, env=_HOME),
        # 2.3+
        BuildEntry(_QT, _L, "sdl", "fceux", _NATIVE, env=_HOME),
        BuildEntry(_QT, _L, "win32", "fceux.exe", _WIN, launcher=_WINE, env=_WINE_HOME),
        BuildEntry(_QT, _L, "win64", "fceux64.exe", _WIN, launcher=_WINE, env=_WINE_HOME),
        BuildEntry(_QT, _L, "qtsdl", "qfceux.exe", _QT_WIN, launcher=_WINE, env=_WINE_HOME),
        BuildEntry(_QT, _W, "win32", "fceux.exe", _WIN, env=_HOME),
        BuildEntry(_QT, _W, "win64", "fceux64.exe", _WIN, env=_HOME),
        BuildEntry(_QT, _W, "qtsdl", "qfceux.exe", _QT_WIN, env=_HOME),
        BuildEntry(_QT, _M, "sdl", "fceux", _NATIVE, env=_HOME),
    ),
    canonical_order=(
        OptionKind.CONFIG,
        OptionKind.SAVESTATE,
        OptionKind.SCRIPT,
        OptionKind.MOVIE,
        OptionKind.PAUSE,
        OptionKind.EXTRA_ARGS,
        OptionKind.ROM,
    ),
)


class FceuxContext(EmulatorContext):
    """Context for FCEUX.

    Any version from 1.0.0 on resolves; versions newer than the last
    table boundary use the newest spellings.  Without an explicit
    variant, the first build in table order whose executable exists in
    the install directory is used, so a native ``fceux`` binary is
    preferred over Windows builds run through wine.
    """

    name = "fceux"
    display_name = "FCEUX"
    install_markers = _EXECUTABLES
    table = TABLE

    def default_version(self) -> EmulatorVersion:
        return EmulatorVersion.parse(LATEST_VERSION)
