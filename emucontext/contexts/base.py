"""Abstract base class for emulator contexts."""

from __future__ import annotations

import dataclasses
import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Optional, Union

from loguru import logger

from emucontext.core.files import copy_if_different, stage_file
from emucontext.core.resolution import BuildEntry, ResolutionTable
from emucontext.errors import ExecutableNotFoundError, InvalidPathError, UnsupportedVersionError
from emucontext.models.command import ResolvedCommand
from emucontext.models.host import OperatingSystem, host_os
from emucontext.models.options import Option, OptionKind, PathLike
from emucontext.models.version import EmulatorVersion

if TYPE_CHECKING:
    import subprocess

    from emucontext.core.runner import CommandExecutor

VersionLike = Union[str, EmulatorVersion]
OsLike = Union[str, OperatingSystem]


@dataclass(frozen=True)
class EmulatorContext(ABC):
    """Base class that every emulator family must implement.

    A context is an immutable value: each ``with_*`` call returns a new
    context and leaves the receiver untouched, so a half-configured
    context is never visible to anyone else.  Nothing is resolved until
    :meth:`produce`, which may be called any number of times.

    Option policy
    ~~~~~~~~~~~~~
    Each :class:`OptionKind` appears at most once.  Attaching a kind that
    is already present replaces the earlier value (last write wins).

    Subclasses provide the class attributes below plus
    :meth:`default_version`; the resolution algorithm itself lives here
    and is driven entirely by :attr:`table`.
    """

    working_dir: Path
    """Emulator install directory; also the child process' working directory."""

    version: Optional[EmulatorVersion] = None
    """Explicit version, or ``None`` to use the family default."""

    os: Optional[OperatingSystem] = None
    """Explicit target OS, or ``None`` for the host OS."""

    variant: Optional[str] = None
    """Explicit build variant, or ``None`` to detect it from the install directory."""

    options: tuple[Option, ...] = ()
    """Attached options in attach order (assembly uses the canonical order)."""

    name: ClassVar[str] = ""
    """Unique family key (e.g. ``'fceux'``)."""

    display_name: ClassVar[str] = ""
    """Human-readable family name."""

    install_markers: ClassVar[tuple[str, ...]] = ()
    """Files whose presence identifies an install directory."""

    table: ClassVar[ResolutionTable]

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def new(
        cls,
        path: PathLike,
        *,
        version: Optional[VersionLike] = None,
        os: Optional[OsLike] = None,
        variant: Optional[str] = None,
    ) -> "EmulatorContext":
        """Create a context rooted at an emulator install.

        *path* may be the install directory or any file inside it (e.g. the
        executable itself).

        Raises
        ------
        InvalidPathError
            *path* is empty.
        ExecutableNotFoundError
            *path* is not a directory containing one of the family's
            executables.
        """
        if path is None or (isinstance(path, str) and not path.strip()):
            raise InvalidPathError(path)

        working_dir = Path(path).expanduser()
        if working_dir.is_file():
            working_dir = working_dir.parent
        if working_dir.exists():
            working_dir = working_dir.resolve()

        if not working_dir.is_dir():
            raise ExecutableNotFoundError(working_dir / cls.install_markers[0], cls.display_name)
        if not any((working_dir / marker).is_file() for marker in cls.install_markers):
            raise ExecutableNotFoundError(working_dir / cls.install_markers[0], cls.display_name)

        ctx = cls(
            working_dir=working_dir,
            version=EmulatorVersion.parse(version) if version is not None else None,
            os=OperatingSystem.parse(os) if os is not None else None,
            variant=variant,
        )
        logger.debug("Created {} context at {}", cls.display_name, working_dir)
        return ctx

    # ------------------------------------------------------------------
    # Fluent configuration
    # ------------------------------------------------------------------

    def with_option(self, option: Option) -> "EmulatorContext":
        kept = tuple(o for o in self.options if o.kind is not option.kind)
        return dataclasses.replace(self, options=kept + (option,))

    def without(self, kind: OptionKind) -> "EmulatorContext":
        kept = tuple(o for o in self.options if o.kind is not kind)
        return dataclasses.replace(self, options=kept)

    def with_rom(self, rom: PathLike) -> "EmulatorContext":
        return self.with_option(Option.rom(rom))

    def with_movie(self, movie: PathLike) -> "EmulatorContext":
        return self.with_option(Option.movie(movie))

    def with_script(self, script: PathLike) -> "EmulatorContext":
        return self.with_option(Option.script(script))

    with_lua = with_script

    def with_savestate(self, state: PathLike) -> "EmulatorContext":
        return self.with_option(Option.savestate(state))

    def with_config(self, config: PathLike) -> "EmulatorContext":
        return self.with_option(Option.config(config))

    def with_pause(self, start_paused: bool = True) -> "EmulatorContext":
        if not start_paused:
            return self.without(OptionKind.PAUSE)
        return self.with_option(Option.pause())

    def with_extra_args(self, *args: str) -> "EmulatorContext":
        return self.with_option(Option.extra_args(*args))

    def with_version(self, version: Optional[VersionLike]) -> "EmulatorContext":
        parsed = EmulatorVersion.parse(version) if version is not None else None
        return dataclasses.replace(self, version=parsed)

    def with_os(self, os: Optional[OsLike]) -> "EmulatorContext":
        parsed = OperatingSystem.parse(os) if os is not None else None
        return dataclasses.replace(self, os=parsed)

    def with_variant(self, variant: Optional[str]) -> "EmulatorContext":
        return dataclasses.replace(self, variant=variant)

    def option(self, kind: OptionKind) -> Option | None:
        for o in self.options:
            if o.kind is kind:
                return o
        return None

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    @abstractmethod
    def default_version(self) -> EmulatorVersion | None:
        """Version used when none was set explicitly.

        Return ``None`` when the family requires an explicit version.
        """
        ...

    def effective_version(self) -> EmulatorVersion:
        version = self.version or self.default_version()
        if version is None:
            raise UnsupportedVersionError(self.display_name, None, "an explicit version is required")
        return version

    def effective_os(self) -> OperatingSystem:
        return self.os or host_os()

    def resolve_build(self) -> tuple[EmulatorVersion, OperatingSystem, BuildEntry]:
        """Resolve the table entry for the effective (version, OS, variant)."""
        version = self.effective_version()
        os = self.effective_os()
        entry = self.table.resolve(version, os, self.working_dir, self.variant)
        return version, os, entry

    def produce(self) -> ResolvedCommand:
        """Resolve and assemble the command for the current configuration.

        No filesystem changes are made; staged files are only named here
        and copied by :meth:`prepare`.
        """
        version, os, entry = self.resolve_build()
        option_args = self.table.assemble(entry, version, self.options)
        for option in self.options:
            option.ensure_exists()

        exe_path = str(entry.executable_path(self.working_dir))
        if entry.launcher:
            executable = entry.launcher[0]
            args = [*entry.launcher[1:], exe_path, *option_args]
        else:
            executable = exe_path
            args = option_args

        command = ResolvedCommand(
            executable=executable,
            args=tuple(args),
            env=tuple(self.environment(entry).items()),
            working_dir=self.working_dir,
        )
        logger.debug(
            "Resolved {} {} on {} ({}): {}",
            self.display_name, version, os.value, entry.variant, command,
        )
        return command

    def environment(self, entry: BuildEntry) -> dict[str, str]:
        """Environment variables for *entry*, rooted in the install directory."""
        return {var: str(self.working_dir / rel) for var, rel in entry.env.items()}

    # ------------------------------------------------------------------
    # Preparation / running
    # ------------------------------------------------------------------

    def prepare(self) -> None:
        """Copy staged option files and support files into the install directory."""
        _, _, entry = self.resolve_build()

        for option in self.options:
            spelling = entry.spellings.get(option.kind)
            if spelling is None:
                continue
            staged = spelling.staged_path(option)
            if staged is not None:
                stage_file(option.path, self.working_dir / staged)

        for dest, resource in entry.support_files.items():
            copy_if_different(self.read_resource(resource), self.working_dir / dest)

    def run(
        self,
        executor: "CommandExecutor | None" = None,
        *,
        check: bool = False,
    ) -> "subprocess.CompletedProcess":
        """Produce, prepare and execute; see :func:`emucontext.core.runner.run`."""
        from emucontext.core.runner import run
        return run(self, executor, check=check)

    @classmethod
    def _context_dir(cls) -> Path:
        """Return filesystem path of the concrete context's package."""
        return Path(inspect.getfile(cls)).parent

    @classmethod
    def read_resource(cls, name: str) -> bytes:
        """Read a file bundled in the ``scripts`` folder of the family package."""
        return (cls._context_dir() / "scripts" / name).read_bytes()
