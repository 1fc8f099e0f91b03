from pathlib import Path

import pytest

from emucontext.errors import InvalidPathError, OptionValidationError, PathNotFoundError
from emucontext.models.options import Option, OptionKind, validate_path


def test_rom_option_is_absolute_and_resolved(touch, tmp_path, monkeypatch):
    rom = touch(tmp_path / "roms" / "game.nes")
    monkeypatch.chdir(tmp_path / "roms")

    option = Option.rom("game.nes")

    assert option.kind is OptionKind.ROM
    assert option.value == rom
    assert option.value.is_absolute()


@pytest.mark.parametrize("bad", ["", "   ", "bad\x00name.nes"])
def test_malformed_paths_are_rejected(bad):
    with pytest.raises(InvalidPathError):
        Option.rom(bad)


def test_invalid_path_is_also_a_value_error():
    with pytest.raises(ValueError):
        validate_path("")


def test_non_path_value_is_rejected():
    with pytest.raises(InvalidPathError):
        Option.movie(42)  # type: ignore[arg-type]


@pytest.mark.parametrize("factory", [Option.rom, Option.movie, Option.script, Option.config])
def test_missing_inputs_fail_eagerly(factory, tmp_path):
    with pytest.raises(PathNotFoundError) as excinfo:
        factory(tmp_path / "missing.bin")
    assert isinstance(excinfo.value, OptionValidationError)
    assert isinstance(excinfo.value, FileNotFoundError)
    assert excinfo.value.path == tmp_path / "missing.bin"


def test_directory_is_not_a_rom(tmp_path):
    with pytest.raises(PathNotFoundError):
        Option.rom(tmp_path)


def test_savestate_existence_is_deferred(tmp_path):
    option = Option.savestate(tmp_path / "later.state")

    assert option.value == (tmp_path / "later.state").absolute()
    with pytest.raises(PathNotFoundError):
        option.ensure_exists()


def test_extra_args_split_single_string():
    option = Option.extra_args("--fullscreen 1 --title 'My Game'")
    assert option.value == ("--fullscreen", "1", "--title", "My Game")


def test_extra_args_keep_separate_tokens():
    option = Option.extra_args("--title", "My Game")
    assert option.value == ("--title", "My Game")
    assert option.path is None


def test_pause_option():
    option = Option.pause()
    assert option.kind is OptionKind.PAUSE
    assert option.value is True
    option.ensure_exists()


def test_option_kinds_classification():
    assert OptionKind.ROM.checked_eagerly
    assert OptionKind.SAVESTATE.is_path
    assert not OptionKind.SAVESTATE.checked_eagerly
    assert not OptionKind.EXTRA_ARGS.is_path


def test_options_are_hashable_values(touch, tmp_path):
    rom = touch(tmp_path / "game.nes")
    assert Option.rom(rom) == Option.rom(str(rom))
    assert len({Option.rom(rom), Option.rom(rom)}) == 1
    assert str(Option.rom(rom)) == f"rom={Path(rom)}"
