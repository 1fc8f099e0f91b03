import pytest

from emucontext import FceuxContext
from emucontext.errors import (
    ExecutableNotFoundError,
    InvalidPathError,
    UnsupportedOptionError,
    UnsupportedPlatformError,
    UnsupportedVersionError,
)
from emucontext.models.host import OperatingSystem
from emucontext.models.options import OptionKind


@pytest.fixture
def emulator(make_install):
    return make_install("fceux", where="path/to/emulator")


def test_linux_264_movie_script_rom(emulator, media):
    command = (
        FceuxContext.new(emulator, version="2.6.4", os="linux")
        .with_rom(media["rom"])
        .with_movie(media["movie"])
        .with_script(media["script"])
        .produce()
    )

    assert command.executable == str(emulator / "fceux")
    assert command.executable.endswith("path/to/emulator/fceux")
    assert command.args == (
        "--loadlua", str(media["script"]),
        "--playmov", str(media["movie"]),
        str(media["rom"]),
    )
    assert command.args[-1].endswith("Super Mario Bros.nes")
    assert command.environment == {"HOME": str(emulator / ".fceux")}
    assert command.working_dir == emulator


def test_100_has_no_movie_flag(emulator, media):
    ctx = (
        FceuxContext.new(emulator, version="1.0.0", os="linux")
        .with_rom(media["rom"])
        .with_movie(media["movie"])
        .with_script(media["script"])
    )

    with pytest.raises(UnsupportedOptionError) as excinfo:
        ctx.produce()
    assert excinfo.value.option is OptionKind.MOVIE
    assert excinfo.value.family == "FCEUX"
    assert str(excinfo.value.version) == "1.0.0"


def test_100_without_movie_resolves(emulator, media):
    command = (
        FceuxContext.new(emulator, version="1.0.0", os="linux")
        .with_rom(media["rom"])
        .with_script(media["script"])
        .produce()
    )
    assert command.args == ("--loadlua", str(media["script"]), str(media["rom"]))


def test_version_before_first_release_is_unsupported(emulator, media):
    ctx = FceuxContext.new(emulator, version="0.98", os="linux").with_rom(media["rom"])
    with pytest.raises(UnsupportedVersionError):
        ctx.produce()


def test_default_version_is_latest_known(emulator):
    ctx = FceuxContext.new(emulator, os="linux")
    assert ctx.effective_version() == "2.6.6"


def test_newer_versions_use_newest_spellings(emulator, media):
    command = (
        FceuxContext.new(emulator, version="3.1", os="linux")
        .with_movie(media["movie"])
        .with_rom(media["rom"])
        .produce()
    )
    assert command.args == ("--playmov", str(media["movie"]), str(media["rom"]))


@pytest.mark.parametrize(
    "version, os, files",
    [
        ("2.2.3", "linux", ("fceux",)),
        ("2.6.4", "linux", ("fceux",)),
        ("2.6.4", "macos", ("fceux",)),
        ("2.6.4", "windows", ("qfceux.exe",)),
    ],
)
def test_native_and_qt_builds_reject_savestate_files(make_install, media, version, os, files):
    ctx = (
        FceuxContext.new(make_install(*files), version=version, os=os)
        .with_savestate(media["savestate"])
        .with_rom(media["rom"])
    )
    with pytest.raises(UnsupportedOptionError) as excinfo:
        ctx.produce()
    assert excinfo.value.option is OptionKind.SAVESTATE


def test_win32_loads_savestate_file(make_install, media):
    command = (
        FceuxContext.new(make_install("fceux.exe"), version="2.6.4", os="windows")
        .with_savestate(media["savestate"])
        .with_rom(media["rom"])
        .produce()
    )
    assert command.args == ("-loadstate", str(media["savestate"]), str(media["rom"]))


def test_windows_win32_spellings(make_install, media):
    emulator = make_install("fceux.exe")
    command = (
        FceuxContext.new(emulator, version="2.6.4", os="windows")
        .with_rom(media["rom"])
        .with_config(media["config"])
        .with_movie(media["movie"])
        .with_script(media["script"])
        .produce()
    )
    assert command.executable == str(emulator / "fceux.exe")
    assert command.args == (
        "-cfg", str(media["config"]),
        "-lua", str(media["script"]),
        "-playmovie", str(media["movie"]),
        str(media["rom"]),
    )


def test_windows_prefers_first_present_build(make_install):
    emulator = make_install("fceux64.exe", "qfceux.exe")
    command = FceuxContext.new(emulator, version="2.6.4", os="windows").produce()
    assert command.executable == str(emulator / "fceux64.exe")


def test_explicit_variant(make_install):
    emulator = make_install("fceux64.exe", "qfceux.exe")
    command = FceuxContext.new(emulator, version="2.6.4", os="windows", variant="qtsdl").produce()
    assert command.executable == str(emulator / "qfceux.exe")


def test_windows_build_under_wine(make_install, media):
    emulator = make_install("fceux.exe")
    command = (
        FceuxContext.new(emulator, version="2.6.4", os="linux")
        .with_movie(media["movie"])
        .with_rom(media["rom"])
        .produce()
    )
    assert command.executable == "wine"
    assert command.args == (
        str(emulator / "fceux.exe"),
        "-playmovie", str(media["movie"]),
        str(media["rom"]),
    )
    assert command.environment == {
        "WINEPREFIX": str(emulator / ".wine"),
        "HOME": str(emulator / ".fceux"),
    }


def test_native_preferred_over_wine(make_install):
    emulator = make_install("fceux", "fceux.exe")
    command = FceuxContext.new(emulator, version="2.6.4", os="linux").produce()
    assert command.executable == str(emulator / "fceux")


def test_macos_only_from_23(emulator):
    assert FceuxContext.new(emulator, version="2.3.0", os="macos").produce()
    with pytest.raises(UnsupportedPlatformError) as excinfo:
        FceuxContext.new(emulator, version="2.2.3", os="macos").produce()
    assert excinfo.value.os is OperatingSystem.MACOS


def test_config_is_staged_not_passed_for_native(emulator, media):
    ctx = FceuxContext.new(emulator, version="2.6.4", os="linux").with_config(media["config"])
    command = ctx.produce()
    assert command.args == ()
    assert not (emulator / ".fceux" / "fceux.cfg").exists()

    ctx.prepare()
    assert (emulator / ".fceux" / "fceux.cfg").read_bytes() == media["config"].read_bytes()


def test_qt_windows_config_beside_executable(make_install, media):
    emulator = make_install("qfceux.exe")
    ctx = FceuxContext.new(emulator, version="2.6.4", os="windows").with_config(media["config"])
    ctx.prepare()
    assert (emulator / "fceux.cfg").read_bytes() == media["config"].read_bytes()


def test_extra_args_before_rom(emulator, media):
    command = (
        FceuxContext.new(emulator, version="2.6.4", os="linux")
        .with_rom(media["rom"])
        .with_extra_args("--fullscreen", "1")
        .produce()
    )
    assert command.args == ("--fullscreen", "1", str(media["rom"]))


def test_pause_is_unsupported(emulator):
    ctx = FceuxContext.new(emulator, version="2.6.4", os="linux").with_pause()
    with pytest.raises(UnsupportedOptionError):
        ctx.produce()


def test_new_accepts_executable_path(emulator):
    ctx = FceuxContext.new(emulator / "fceux")
    assert ctx.working_dir == emulator


def test_new_rejects_directory_without_executable(make_install):
    emulator = make_install("README.md")
    with pytest.raises(ExecutableNotFoundError) as excinfo:
        FceuxContext.new(emulator)
    assert excinfo.value.path == emulator / "fceux"


def test_new_rejects_missing_directory(tmp_path):
    with pytest.raises(ExecutableNotFoundError):
        FceuxContext.new(tmp_path / "nowhere")


def test_new_rejects_empty_path():
    with pytest.raises(InvalidPathError):
        FceuxContext.new("")


@pytest.mark.parametrize(
    "present, version, os",
    [
        ("fceux", "2.6.4", "windows"),
        ("fceux.exe", "1.5.0", "linux"),
    ],
)
def test_install_without_matching_build_is_a_platform_error(make_install, media, present, version, os):
    ctx = FceuxContext.new(make_install(present), version=version, os=os).with_rom(media["rom"])
    with pytest.raises(UnsupportedPlatformError) as excinfo:
        ctx.produce()
    assert present in str(excinfo.value)
