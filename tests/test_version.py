import pytest

from emucontext.errors import UnsupportedVersionError
from emucontext.models.version import EmulatorVersion, VersionRange


def v(text: str) -> EmulatorVersion:
    return EmulatorVersion.parse(text)


def test_release_ordering():
    assert v("2.6.4") < v("2.6.10")
    assert v("1.13.2") > v("1.9.2")
    assert v("2.9") == v("2.9.0")
    assert hash(v("2.9")) == hash(v("2.9.0"))
    assert v("v2.8") == v("2.8")


def test_prereleases_sort_before_final():
    assert v("2.9-rc1") < v("2.9-rc3") < v("2.9")
    assert v("2.8") < v("2.9-rc1")
    assert v("2.9-rc2").is_prerelease
    assert not v("2.9").is_prerelease


def test_build_tags_compare_by_identity_only():
    tag = v("git-a2425b5")
    assert tag.is_tag
    assert v("11a").is_tag
    assert tag == v("GIT-A2425B5")
    assert tag != v("11a")
    with pytest.raises(TypeError):
        _ = tag < v("2.0")


def test_string_comparison_is_supported():
    assert v("2.6.4") == "2.6.4"
    assert v("2.6.4") < "2.7"


def test_empty_version_is_rejected():
    with pytest.raises(UnsupportedVersionError):
        v("  ")


def test_equality_with_blank_string_is_false():
    assert v("2.6.4") != ""
    assert not (v("11a") == "   ")


def test_half_open_range():
    r = VersionRange.between("2.0.0", "2.3.0")
    assert v("2.0") in r
    assert v("2.2.9") in r
    assert v("2.3.0") not in r
    assert v("1.9") not in r
    assert v("11a") not in r
    assert str(r) == "[2.0.0, 2.3.0)"


def test_open_ended_range():
    r = VersionRange.between("2.9-rc1")
    assert v("2.9-rc1") in r
    assert v("3.0") in r
    assert v("2.8") not in r


def test_exact_range():
    r = VersionRange.only("11a", "11b")
    assert v("11b") in r
    assert "11a" in r
    assert v("11c") not in r
    assert v("2.0") not in r
    assert str(r) == "{11a, 11b}"
