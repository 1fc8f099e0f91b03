"""BizHawk context — multi-system emulator (EmuHawk.exe), Mono on Linux."""

from __future__ import annotations

from types import MappingProxyType

from loguru import logger

from emucontext.contexts.base import EmulatorContext
from emucontext.contexts.bizhawk.versions import detect_version
from emucontext.core.resolution import BuildEntry, ResolutionTable, Spelling, spellings
from emucontext.models.host import OperatingSystem
from emucontext.models.options import OptionKind
from emucontext.models.version import EmulatorVersion, VersionRange

LATEST_VERSION = "2.9.1"
EXECUTABLE = "EmuHawk.exe"
LAUNCH_SCRIPT = "start-bizhawk.sh"

_ARGS = spellings(
    config=Spelling.equals("--config"),
    movie=Spelling.equals("--movie"),
    script=Spelling.equals("--lua"),
    savestate=Spelling.equals("--load-state"),
    extra_args=Spelling.verbatim(),
    rom=Spelling.positional(),
)
# --config arrived with 2.3
_ARGS_PRE23 = MappingProxyType({k: v for k, v in _ARGS.items() if k is not OptionKind.CONFIG})


def _mono(versions: VersionRange, script: str) -> BuildEntry:
    return BuildEntry(
        versions,
        OperatingSystem.LINUX,
        "mono",
        LAUNCH_SCRIPT,
        _ARGS,
        launcher=("bash",),
        support_files=MappingProxyType({LAUNCH_SCRIPT: script}),
        probe=(EXECUTABLE,),
    )


TABLE = ResolutionTable(
    family="BizHawk",
    entries=(
        BuildEntry(VersionRange.between("1.0", "2.3"), OperatingSystem.WINDOWS, "win", EXECUTABLE, _ARGS_PRE23),
        BuildEntry(VersionRange.between("2.3"), OperatingSystem.WINDOWS, "win", EXECUTABLE, _ARGS),
        # Mono builds before 2.6 cannot be launched this way
        _mono(VersionRange.between("2.6", "2.9-rc1"), "start-bizhawk-pre290.sh"),
        _mono(VersionRange.between("2.9-rc1"), "start-bizhawk.sh"),
    ),
    canonical_order=(
        OptionKind.CONFIG,
        OptionKind.MOVIE,
        OptionKind.SCRIPT,
        OptionKind.SAVESTATE,
        OptionKind.PAUSE,
        OptionKind.EXTRA_ARGS,
        OptionKind.ROM,
    ),
)


class BizHawkContext(EmulatorContext):
    """Context for BizHawk.

    When no version is set, the release is identified from the SHA-1 of
    ``EmuHawk.exe``; unknown builds are treated as the latest known
    release.  On Linux the emulator is started through a bundled Mono
    launcher script, written next to ``EmuHawk.exe`` by ``prepare()``.
    """

    name = "bizhawk"
    display_name = "BizHawk"
    install_markers = (EXECUTABLE,)
    table = TABLE

    def default_version(self) -> EmulatorVersion:
        detected = detect_version(self.working_dir / EXECUTABLE)
        if detected is None:
            logger.debug("BizHawk version unknown, assuming {}", LATEST_VERSION)
            detected = LATEST_VERSION
        return EmulatorVersion.parse(detected)
