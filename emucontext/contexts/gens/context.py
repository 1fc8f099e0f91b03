"""Gens context — Sega Genesis / Mega Drive re-recording emulator (Win32 builds, wine on Linux)."""

from __future__ import annotations

from types import MappingProxyType

from emucontext.contexts.base import EmulatorContext
from emucontext.core.resolution import KEEP_NAME, BuildEntry, ResolutionTable, Spelling, spellings
from emucontext.models.host import OperatingSystem
from emucontext.models.options import OptionKind
from emucontext.models.version import EmulatorVersion, VersionRange

EXECUTABLE = "Gens.exe"

# Known builds; all share one command line.
BUILDS = ("11a", "11b", "git-a2425b5")

_BUILDS = VersionRange.only(*BUILDS)

# Gens only opens ROMs from its own directory, so the ROM is staged there.
_ARGS = spellings(
    pause=Spelling.switch("-pause", "0"),
    rom=Spelling.separate("-rom", stage_as=KEEP_NAME),
    movie=Spelling.separate("-play"),
    script=Spelling.separate("-lua"),
    extra_args=Spelling.verbatim(),
)

TABLE = ResolutionTable(
    family="Gens",
    entries=(
        BuildEntry(_BUILDS, OperatingSystem.WINDOWS, "win32", EXECUTABLE, _ARGS),
        BuildEntry(
            _BUILDS,
            OperatingSystem.LINUX,
            "win32",
            EXECUTABLE,
            _ARGS,
            launcher=("wine",),
            env=MappingProxyType({"WINEPREFIX": ".wine"}),
        ),
    ),
    canonical_order=(
        OptionKind.PAUSE,
        OptionKind.ROM,
        OptionKind.MOVIE,
        OptionKind.SCRIPT,
        OptionKind.CONFIG,
        OptionKind.SAVESTATE,
        OptionKind.EXTRA_ARGS,
    ),
)


class GensContext(EmulatorContext):
    """Context for Gens re-recording builds.

    Builds are identified by tag (see :data:`BUILDS`) and cannot be
    detected, so a version must be given.
    """

    name = "gens"
    display_name = "Gens"
    install_markers = (EXECUTABLE,)
    table = TABLE

    def default_version(self) -> EmulatorVersion | None:
        return None
