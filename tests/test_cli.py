import json
import subprocess

import pytest

import main
from emucontext import FceuxContext


@pytest.fixture
def settings(tmp_path):
    return tmp_path / "settings.json"


@pytest.fixture
def emulator(make_install):
    return make_install("fceux")


def _base(emulator, settings, *extra):
    return [
        "fceux",
        "--path", str(emulator),
        "--emu-version", "2.6.4",
        "--os", "linux",
        "--settings", str(settings),
        *extra,
    ]


def test_prints_shell_quoted_command(emulator, settings, media, capsys):
    code = main.main(_base(emulator, settings, "--rom", str(media["rom"]), "--lua", str(media["script"])))

    expected = (
        FceuxContext.new(emulator, version="2.6.4", os="linux")
        .with_rom(media["rom"])
        .with_script(media["script"])
        .produce()
    )
    assert code == 0
    assert capsys.readouterr().out.strip() == expected.shell_quoted()


def test_arguments_after_double_dash_are_passed_through(emulator, settings, media, capsys):
    code = main.main(_base(emulator, settings, "--rom", str(media["rom"]), "--", "--fullscreen", "1"))
    assert code == 0
    out = capsys.readouterr().out.strip()
    assert out.endswith(f"--fullscreen 1 '{media['rom']}'")


def test_resolution_error_exit_status(emulator, settings, media, capsys):
    argv = _base(emulator, settings, "--rom", str(media["rom"]), "--pause")
    assert main.main(argv) == main.EXIT_USAGE
    assert capsys.readouterr().out == ""


def test_missing_input_exit_status(emulator, settings, tmp_path):
    argv = _base(emulator, settings, "--rom", str(tmp_path / "missing.nes"))
    assert main.main(argv) == main.EXIT_USAGE


def test_install_path_from_settings(emulator, settings, capsys):
    settings.write_text(json.dumps({"families": {"fceux": {"install_path": str(emulator), "version": "2.6.4"}}}))
    code = main.main(["fceux", "--os", "linux", "--settings", str(settings)])
    assert code == 0
    assert capsys.readouterr().out.strip() == str(emulator / "fceux")


def test_no_install_path(settings):
    assert main.main(["fceux", "--settings", str(settings)]) == main.EXIT_USAGE


def test_unknown_family_is_a_usage_error(settings):
    with pytest.raises(SystemExit):
        main.main(["snes9x", "--settings", str(settings)])


def test_run_returns_emulator_status(emulator, settings, media, monkeypatch):
    launched = []

    class FakeExecutor:
        def __init__(self, capture_output=True, timeout=None):
            pass

        def execute(self, command, *, check=False):
            launched.append(command)
            return subprocess.CompletedProcess(command.argv, 5)

    monkeypatch.setattr(main, "SubprocessExecutor", FakeExecutor)
    code = main.main(_base(emulator, settings, "--rom", str(media["rom"]), "--run"))

    assert code == 5
    assert launched[0].executable == str(emulator / "fceux")
