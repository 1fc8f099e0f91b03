"""Resolution tables: (version, OS, variant) → executable and argument spellings.

Each emulator family declares a :class:`ResolutionTable` at import time.
Tables and their entries are frozen and their mappings are read-only,
so any number of contexts can resolve against them concurrently.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping

from emucontext.errors import (
    ExecutableNotFoundError,
    UnsupportedOptionError,
    UnsupportedPlatformError,
    UnsupportedVersionError,
)
from emucontext.models.host import OperatingSystem
from emucontext.models.options import Option, OptionKind
from emucontext.models.version import EmulatorVersion, VersionRange

KEEP_NAME = "{name}"


class SpellingStyle(str, Enum):
    """How an option is rendered on the command line."""

    SEPARATE = "separate"       # -lua FILE
    EQUALS = "equals"           # --lua=FILE
    POSITIONAL = "positional"   # FILE
    SWITCH = "switch"           # -pause [CONSTANT]
    VERBATIM = "verbatim"       # extra arguments copied as-is
    STAGED = "staged"           # no argument; file copied into the working dir


@dataclass(frozen=True)
class Spelling:
    """Literal CLI spelling of one option kind for one build."""

    style: SpellingStyle
    flag: str | None = None
    constant: str | None = None
    stage_as: str | None = None
    """Destination inside the working directory; ``{name}`` keeps the file name."""

    @classmethod
    def separate(cls, flag: str, stage_as: str | None = None) -> "Spelling":
        return cls(SpellingStyle.SEPARATE, flag, stage_as=stage_as)

    @classmethod
    def equals(cls, flag: str) -> "Spelling":
        return cls(SpellingStyle.EQUALS, flag)

    @classmethod
    def positional(cls) -> "Spelling":
        return cls(SpellingStyle.POSITIONAL)

    @classmethod
    def switch(cls, flag: str, constant: str | None = None) -> "Spelling":
        return cls(SpellingStyle.SWITCH, flag, constant=constant)

    @classmethod
    def verbatim(cls) -> "Spelling":
        return cls(SpellingStyle.VERBATIM)

    @classmethod
    def staged(cls, stage_as: str) -> "Spelling":
        return cls(SpellingStyle.STAGED, stage_as=stage_as)

    def staged_path(self, option: Option) -> str | None:
        """Relative destination of *option*'s file, or ``None`` if not staged."""
        if self.stage_as is None or option.path is None:
            return None
        return self.stage_as.replace(KEEP_NAME, option.path.name)

    def render(self, option: Option) -> list[str]:
        """Return the argument tokens for *option*."""
        if self.style is SpellingStyle.VERBATIM:
            return list(option.value)
        if self.style is SpellingStyle.STAGED:
            return []
        if self.style is SpellingStyle.SWITCH:
            return [self.flag] + ([self.constant] if self.constant is not None else [])

        value = self.staged_path(option) or str(option.value)
        if self.style is SpellingStyle.POSITIONAL:
            return [value]
        if self.style is SpellingStyle.EQUALS:
            return [f"{self.flag}={value}"]
        return [self.flag, value]


def spellings(**by_kind: Spelling) -> Mapping[OptionKind, Spelling]:
    """Build a read-only spelling map from ``kind_name=Spelling`` pairs."""
    return MappingProxyType({OptionKind(name): s for name, s in by_kind.items()})


@dataclass(frozen=True)
class BuildEntry:
    """One row of a resolution table."""

    versions: VersionRange
    os: OperatingSystem
    variant: str
    executable: str
    """Emulator binary (or launcher script), relative to the install directory."""

    spellings: Mapping[OptionKind, Spelling]
    launcher: tuple[str, ...] = ()
    """Program prefix, e.g. ``("wine",)``; the executable becomes its first argument."""

    env: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    """Environment variables pointing at directories inside the install directory."""

    support_files: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    """Install-dir file name → bundled resource written there by ``prepare()``."""

    probe: tuple[str, ...] = ()
    """Files whose presence selects this entry; defaults to the executable."""

    def executable_path(self, working_dir: Path) -> Path:
        return working_dir / self.executable

    def probe_paths(self, working_dir: Path) -> list[Path]:
        if self.probe:
            return [working_dir / name for name in self.probe]
        return [self.executable_path(working_dir)]


@dataclass(frozen=True)
class ResolutionTable:
    """Ordered, read-only set of :class:`BuildEntry` rows for one family."""

    family: str
    entries: tuple[BuildEntry, ...]
    canonical_order: tuple[OptionKind, ...]

    def __post_init__(self) -> None:
        missing = set(OptionKind) - set(self.canonical_order)
        if missing:
            # every kind needs a slot so assembly never depends on insertion order
            raise ValueError(
                f"{self.family}: canonical order is missing {sorted(k.value for k in missing)}"
            )

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def for_version(self, version: EmulatorVersion) -> list[BuildEntry]:
        return [e for e in self.entries if version in e.versions]

    def platforms(self, version: EmulatorVersion) -> list[OperatingSystem]:
        seen: list[OperatingSystem] = []
        for entry in self.for_version(version):
            if entry.os not in seen:
                seen.append(entry.os)
        return seen

    def candidates(self, version: EmulatorVersion, os: OperatingSystem) -> list[BuildEntry]:
        """Entries for (version, os) in preference order.

        Raises
        ------
        UnsupportedVersionError
            No entry covers *version* on any OS.
        UnsupportedPlatformError
            Entries exist for *version*, but none for *os*.
        """
        by_version = self.for_version(version)
        if not by_version:
            raise UnsupportedVersionError(self.family, version)
        by_os = [e for e in by_version if e.os is os]
        if not by_os:
            available = ", ".join(o.value for o in self.platforms(version))
            raise UnsupportedPlatformError(
                self.family, version, os, f"available: {available}"
            )
        return by_os

    def resolve(
        self,
        version: EmulatorVersion,
        os: OperatingSystem,
        working_dir: Path,
        variant: str | None = None,
    ) -> BuildEntry:
        """Pick the build entry for *version* on *os*.

        An explicit *variant* must exist in the table.  Without one, the
        first entry whose executable is present in *working_dir* wins; an
        install holding only other builds of the family is a platform error.
        """
        entries = self.candidates(version, os)
        if variant is not None:
            for entry in entries:
                if entry.variant == variant:
                    return entry
            known = ", ".join(e.variant for e in entries)
            raise UnsupportedPlatformError(
                self.family, version, os, f"unknown variant {variant!r}; known: {known}"
            )

        for entry in entries:
            if any(p.is_file() for p in entry.probe_paths(working_dir)):
                return entry

        present = self.present_builds(working_dir)
        if present:
            expected = ", ".join(dict.fromkeys(e.executable for e in entries))
            raise UnsupportedPlatformError(
                self.family,
                version,
                os,
                f"install holds {', '.join(present)}; this build needs {expected}",
            )
        raise ExecutableNotFoundError(entries[0].executable_path(working_dir), self.family)

    def present_builds(self, working_dir: Path) -> list[str]:
        """Names of this family's known executables found in *working_dir*."""
        names: dict[str, None] = {}
        for entry in self.entries:
            for path in entry.probe_paths(working_dir):
                if path.is_file():
                    names[path.name] = None
        return list(names)

    # ------------------------------------------------------------------
    # Assembly
    # ------------------------------------------------------------------

    def ordered(self, options: Iterable[Option]) -> list[Option]:
        rank = {kind: i for i, kind in enumerate(self.canonical_order)}
        return sorted(options, key=lambda o: rank[o.kind])

    def assemble(
        self,
        entry: BuildEntry,
        version: EmulatorVersion,
        options: Iterable[Option],
    ) -> list[str]:
        """Render *options* in canonical order using *entry*'s spellings.

        Raises :class:`UnsupportedOptionError` for the first option the
        build cannot express; nothing is dropped silently.
        """
        args: list[str] = []
        for option in self.ordered(options):
            spelling = entry.spellings.get(option.kind)
            if spelling is None:
                raise UnsupportedOptionError(self.family, version, entry.os, option.kind)
            args.extend(spelling.render(option))
        return args

