"""The final, ready-to-spawn command."""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ResolvedCommand:
    """Executable plus ordered argument vector produced by a context."""

    executable: str
    """Program to spawn (absolute emulator path, or a launcher such as ``wine``)."""

    args: tuple[str, ...] = ()
    """Arguments passed after the executable, in canonical order."""

    env: tuple[tuple[str, str], ...] = ()
    """Extra environment variables layered over the parent environment."""

    working_dir: Path | None = None
    """Directory the child process should start in."""

    @property
    def argv(self) -> list[str]:
        """Full argument vector including the executable."""
        return [self.executable, *self.args]

    @property
    def environment(self) -> dict[str, str]:
        return dict(self.env)

    def shell_quoted(self) -> str:
        """Human-readable, shell-quoted rendering for logs and dry runs."""
        return " ".join(shlex.quote(part) for part in self.argv)

    def __str__(self) -> str:
        return self.shell_quoted()
