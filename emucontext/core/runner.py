"""Invocation producer — turns a configured context into a running process.

Resolution always happens first: any :class:`~emucontext.errors.ResolutionError`
or option error is raised before a single file is staged or a process is
spawned.
"""

from __future__ import annotations

import os
import subprocess
from typing import TYPE_CHECKING, Protocol

from loguru import logger

from emucontext.errors import ExecutionError
from emucontext.models.command import ResolvedCommand

if TYPE_CHECKING:
    from emucontext.contexts.base import EmulatorContext


class CommandExecutor(Protocol):
    """Anything that can execute a :class:`ResolvedCommand`."""

    def execute(self, command: ResolvedCommand, *, check: bool = False) -> subprocess.CompletedProcess:
        ...


class SubprocessExecutor:
    """Execute commands with :func:`subprocess.run`.

    Parameters
    ----------
    capture_output : bool
        Capture stdout/stderr on the returned ``CompletedProcess``.
    timeout : float, optional
        Seconds before the child is killed; ``None`` waits forever.
    """

    def __init__(self, capture_output: bool = True, timeout: float | None = None) -> None:
        self._capture_output = capture_output
        self._timeout = timeout

    def execute(self, command: ResolvedCommand, *, check: bool = False) -> subprocess.CompletedProcess:
        env = {**os.environ, **command.environment}
        logger.info("Launching: {}", command)
        try:
            result = subprocess.run(
                command.argv,
                cwd=command.working_dir,
                env=env,
                capture_output=self._capture_output,
                timeout=self._timeout,
            )
        except OSError as e:
            logger.error("Failed to start {}: {}", command.executable, e)
            raise ExecutionError(f"Failed to start {command.executable}: {e}") from e
        except subprocess.TimeoutExpired as e:
            logger.error("{} timed out after {}s", command.executable, self._timeout)
            raise ExecutionError(f"{command.executable} timed out after {self._timeout}s") from e

        logger.info("{} exited with status {}", command.executable, result.returncode)
        if check and result.returncode != 0:
            raise ExecutionError(
                f"{command.executable} exited with status {result.returncode}",
                returncode=result.returncode,
            )
        return result


def run(
    context: "EmulatorContext",
    executor: CommandExecutor | None = None,
    *,
    check: bool = False,
) -> subprocess.CompletedProcess:
    """Resolve *context*, stage its files and execute the command.

    Non-zero exit statuses are returned as-is unless *check* is set, in
    which case they raise :class:`ExecutionError`.
    """
    command = context.produce()
    context.prepare()
    return (executor or SubprocessExecutor()).execute(command, check=check)
