"""emucontext — print or run the command line for an emulator family."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from loguru import logger

from emucontext.config import Config
from emucontext.contexts import ContextRegistry, EmulatorContext
from emucontext.core.runner import SubprocessExecutor
from emucontext.errors import EmuContextError, ExecutionError
from emucontext.logger import setup_logger
from emucontext.models.options import Option, OptionKind

EXIT_USAGE = 2
EXIT_EXECUTION = 1


def _parse_arguments(argv: Sequence[str], families: list[str]) -> argparse.Namespace:
    """Parse command-line options (everything before a bare ``--``)."""
    parser = argparse.ArgumentParser(
        prog="emucontext",
        description="Build (and optionally run) an emulator command line",
        epilog="Arguments after a bare '--' are passed to the emulator verbatim.",
    )
    parser.add_argument("family", choices=families, help="Emulator family")
    parser.add_argument(
        "--path",
        help="Emulator install directory (defaults to the configured install_path)",
    )
    parser.add_argument("--rom", help="ROM to load")
    parser.add_argument("--movie", help="Input movie to play back")
    parser.add_argument("--script", "--lua", dest="script", help="Lua script run on startup")
    parser.add_argument("--savestate", help="Save state loaded on startup")
    parser.add_argument("--emu-config", dest="emu_config", help="Emulator configuration file")
    parser.add_argument("--pause", action="store_true", help="Start emulation paused")
    parser.add_argument("--emu-version", dest="emu_version", help="Emulator version or build tag")
    parser.add_argument("--os", dest="target_os", help="Target OS (windows, linux, macos)")
    parser.add_argument("--variant", help="Build variant (e.g. sdl, win64, qtsdl)")
    parser.add_argument("--settings", type=Path, help="Settings file (defaults to $EMUCONTEXT_CONFIG)")
    parser.add_argument("--run", action="store_true", help="Run the command instead of printing it")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log at DEBUG level")
    return parser.parse_args(argv)


def _build_context(
    args: argparse.Namespace,
    extra: Sequence[str],
    registry: ContextRegistry,
    config: Config,
) -> EmulatorContext:
    path = args.path or config.get_install_path(args.family)
    if path is None:
        raise EmuContextError(
            f"No install path for {args.family}; pass --path or set "
            f"families.{args.family}.install_path in {config.path}"
        )

    ctx = registry.create(
        args.family,
        path,
        version=args.emu_version or config.get_version(args.family),
        os=args.target_os,
        variant=args.variant or config.get_variant(args.family),
    )
    if args.emu_config:
        ctx = ctx.with_config(args.emu_config)
    if args.savestate:
        ctx = ctx.with_savestate(args.savestate)
    if args.script:
        ctx = ctx.with_script(args.script)
    if args.movie:
        ctx = ctx.with_movie(args.movie)
    if args.pause:
        ctx = ctx.with_pause()
    if extra:
        ctx = ctx.with_option(Option(OptionKind.EXTRA_ARGS, tuple(extra)))
    if args.rom:
        ctx = ctx.with_rom(args.rom)
    return ctx


def main(argv: Sequence[str] | None = None) -> int:
    # ---- 1. Families ----
    registry = ContextRegistry()
    registry.discover()

    argv = list(sys.argv[1:] if argv is None else argv)
    extra: list[str] = []
    if "--" in argv:
        split = argv.index("--")
        argv, extra = argv[:split], argv[split + 1:]
    args = _parse_arguments(argv, registry.names())

    # ---- 2. Config + logger ----
    config = Config(args.settings)
    setup_logger(config.log_dir, "DEBUG" if args.verbose else config.log_level)

    # ---- 3. Resolve ----
    try:
        ctx = _build_context(args, extra, registry, config)
        command = ctx.produce()
    except EmuContextError as e:
        logger.error("{}", e)
        return EXIT_USAGE

    if not args.run:
        print(command.shell_quoted())
        return 0

    # ---- 4. Run ----
    try:
        result = ctx.run(SubprocessExecutor(capture_output=False))
    except ExecutionError as e:
        logger.error("{}", e)
        return EXIT_EXECUTION
    except (EmuContextError, OSError) as e:
        logger.error("{}", e)
        return EXIT_USAGE
    return result.returncode


if __name__ == "__main__":
    sys.exit(main())
