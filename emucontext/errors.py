"""Exception hierarchy for command construction.

Every error raised by this package derives from :class:`EmuContextError`::

    EmuContextError
    ├── ConstructionError
    │   └── ExecutableNotFoundError
    ├── OptionValidationError
    │   ├── InvalidPathError
    │   └── PathNotFoundError
    ├── ResolutionError
    │   ├── UnsupportedVersionError
    │   ├── UnsupportedPlatformError
    │   └── UnsupportedOptionError
    └── ExecutionError
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class EmuContextError(Exception):
    """Base class for all package errors."""


# ----------------------------------------------------------------------
# Construction / option validation
# ----------------------------------------------------------------------


class ConstructionError(EmuContextError):
    """A context could not be created for the given install location."""


class ExecutableNotFoundError(ConstructionError, FileNotFoundError):
    """No usable emulator executable exists at the expected location."""

    def __init__(self, path: Path | str, family: str = "") -> None:
        self.path = Path(path)
        self.family = family
        label = f"{family} executable" if family else "Executable"
        super().__init__(f"{label} not found: {self.path}")


class OptionValidationError(EmuContextError):
    """An option value was rejected while attaching it to a context."""


class InvalidPathError(OptionValidationError, ValueError):
    """Path is empty or malformed."""

    def __init__(self, value: Any, reason: str = "empty path") -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid path {value!r}: {reason}")


class PathNotFoundError(OptionValidationError, FileNotFoundError):
    """A referenced input file does not exist."""

    def __init__(self, path: Path | str, kind: str = "") -> None:
        self.path = Path(path)
        self.kind = kind
        label = f"{kind} file" if kind else "File"
        super().__init__(f"{label} not found: {self.path}")


# ----------------------------------------------------------------------
# Resolution
# ----------------------------------------------------------------------


class ResolutionError(EmuContextError):
    """Base class for failures while resolving a command."""

    def __init__(
        self,
        message: str,
        *,
        family: str = "",
        version: Any = None,
        os: Any = None,
    ) -> None:
        self.family = family
        self.version = version
        self.os = os
        super().__init__(message)


class UnsupportedVersionError(ResolutionError):
    """No table entry covers the effective version."""

    def __init__(self, family: str, version: Any, detail: str = "") -> None:
        if version is None:
            message = f"{family}: no version selected"
        else:
            message = f"{family}: unsupported version {version}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message, family=family, version=version)


class UnsupportedPlatformError(ResolutionError):
    """No table entry exists for the effective (version, OS) pair."""

    def __init__(self, family: str, version: Any, os: Any, detail: str = "") -> None:
        os_name = getattr(os, "value", os)
        message = f"{family} {version} is not supported on {os_name}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message, family=family, version=version, os=os)


class UnsupportedOptionError(ResolutionError):
    """An attached option has no argument spelling for the resolved build."""

    def __init__(self, family: str, version: Any, os: Any, option: Any) -> None:
        self.option = option
        os_name = getattr(os, "value", os)
        option_name = getattr(option, "value", option)
        super().__init__(
            f"{family} {version} ({os_name}) does not support the "
            f"'{option_name}' option",
            family=family,
            version=version,
            os=os,
        )


# ----------------------------------------------------------------------
# Execution
# ----------------------------------------------------------------------


class ExecutionError(EmuContextError):
    """The emulator process failed to start or exited unsuccessfully."""

    def __init__(self, message: str, returncode: int | None = None) -> None:
        self.returncode = returncode
        super().__init__(message)
