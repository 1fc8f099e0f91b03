from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from emucontext.config import Config


def _touch(path: Path, data: bytes = b"") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path.resolve()


@pytest.fixture
def touch() -> Callable[..., Path]:
    """Create a file (and its parents) and return its resolved path."""
    return _touch


@pytest.fixture
def make_install(tmp_path: Path) -> Callable[..., Path]:
    """Create a fake emulator install directory holding the given files."""

    def factory(*names: str, where: str = "emulator") -> Path:
        root = tmp_path / where
        root.mkdir(parents=True, exist_ok=True)
        for name in names:
            _touch(root / name, b"binary:" + name.encode())
        return root.resolve()

    return factory


@pytest.fixture
def media(tmp_path: Path) -> dict[str, Path]:
    """Input files every family can consume."""
    base = tmp_path / "media"
    return {
        "rom": _touch(base / "Super Mario Bros.nes", b"NES\x1a"),
        "movie": _touch(base / "SuperMario.fm2", b"version 3\n"),
        "script": _touch(base / "a.lua", b"emu.frameadvance()\n"),
        "config": _touch(base / "emu.cfg", b"SoundVolume 100\n"),
        "savestate": _touch(base / "slot1.state", b"STATE"),
    }


@pytest.fixture(autouse=True)
def _reset_config(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("EMUCONTEXT_CONFIG", raising=False)
    Config.reset()
    yield
    Config.reset()
