"""Option model — one value object per piece of user intent.

Path-bearing options are normalised to absolute paths when created,
because contexts start the emulator in its own install directory.

Existence checks
~~~~~~~~~~~~~~~~
``rom``, ``movie``, ``script`` and ``config`` are inputs the emulator
must read, so a missing file is rejected immediately with
:class:`~emucontext.errors.PathNotFoundError`.  ``savestate`` is
checked later, at ``produce()`` time, since the state is commonly
written by an earlier step of the same workflow.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Union

from emucontext.errors import InvalidPathError, PathNotFoundError

PathLike = Union[str, Path]


class OptionKind(str, Enum):
    """Kind of user intent carried by an :class:`Option`."""

    ROM = "rom"                 # Game image to load
    MOVIE = "movie"             # Input recording played back on start
    SCRIPT = "script"           # Lua automation script
    SAVESTATE = "savestate"     # Save state loaded on start
    CONFIG = "config"           # Emulator configuration file
    PAUSE = "pause"             # Start emulation paused
    EXTRA_ARGS = "extra_args"   # Raw arguments passed through verbatim

    @property
    def is_path(self) -> bool:
        return self in _PATH_KINDS

    @property
    def checked_eagerly(self) -> bool:
        """Whether the referenced file must exist when the option is created."""
        return self in _EAGER_KINDS


_PATH_KINDS = frozenset({
    OptionKind.ROM,
    OptionKind.MOVIE,
    OptionKind.SCRIPT,
    OptionKind.SAVESTATE,
    OptionKind.CONFIG,
})
_EAGER_KINDS = _PATH_KINDS - {OptionKind.SAVESTATE}


@dataclass(frozen=True)
class Option:
    """A single tagged option value."""

    kind: OptionKind
    """What the value means."""

    value: Any
    """Absolute :class:`Path`, tuple of strings (``extra_args``) or ``True`` (``pause``)."""

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def rom(cls, path: PathLike) -> "Option":
        return cls._path_option(OptionKind.ROM, path)

    @classmethod
    def movie(cls, path: PathLike) -> "Option":
        return cls._path_option(OptionKind.MOVIE, path)

    @classmethod
    def script(cls, path: PathLike) -> "Option":
        return cls._path_option(OptionKind.SCRIPT, path)

    @classmethod
    def savestate(cls, path: PathLike) -> "Option":
        return cls._path_option(OptionKind.SAVESTATE, path)

    @classmethod
    def config(cls, path: PathLike) -> "Option":
        return cls._path_option(OptionKind.CONFIG, path)

    @classmethod
    def pause(cls) -> "Option":
        return cls(OptionKind.PAUSE, True)

    @classmethod
    def extra_args(cls, *args: str) -> "Option":
        """Raw arguments; a single string is split with shell rules."""
        if len(args) == 1 and isinstance(args[0], str):
            parts = tuple(shlex.split(args[0]))
        else:
            parts = tuple(str(a) for a in args)
        return cls(OptionKind.EXTRA_ARGS, parts)

    @classmethod
    def _path_option(cls, kind: OptionKind, path: PathLike) -> "Option":
        resolved = validate_path(path)
        if kind.checked_eagerly and not resolved.is_file():
            raise PathNotFoundError(resolved, kind.value)
        return cls(kind, resolved)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @property
    def path(self) -> Path | None:
        return self.value if self.kind.is_path else None

    def ensure_exists(self) -> None:
        """Re-check that the referenced file is still present."""
        if self.kind.is_path and not self.value.is_file():
            raise PathNotFoundError(self.value, self.kind.value)

    def __str__(self) -> str:
        if self.kind is OptionKind.EXTRA_ARGS:
            return f"{self.kind.value}={' '.join(self.value)}"
        return f"{self.kind.value}={self.value}"


def validate_path(path: PathLike) -> Path:
    """Reject empty or malformed paths and return an absolute :class:`Path`.

    Symlinks are resolved when the target exists; otherwise the path is
    only made absolute.
    """
    if path is None:
        raise InvalidPathError(path)
    if isinstance(path, Path):
        text = str(path)
    elif isinstance(path, str):
        text = path
    else:
        raise InvalidPathError(path, f"expected str or Path, got {type(path).__name__}")

    if not text.strip() or text == ".":
        raise InvalidPathError(path)
    if "\x00" in text:
        raise InvalidPathError(path, "contains a NUL character")

    candidate = Path(text).expanduser()
    try:
        return candidate.resolve() if candidate.exists() else candidate.absolute()
    except (OSError, RuntimeError) as e:
        raise InvalidPathError(path, str(e)) from e
