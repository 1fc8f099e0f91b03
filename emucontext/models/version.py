"""Emulator version identifiers and version ranges.

Two flavours of version exist in the wild:

* **Releases** — dotted numbers with an optional pre-release tag
  (``2.6.4``, ``2.9-rc3``).  These are totally ordered; a pre-release
  sorts before its final release and missing components count as zero,
  so ``2.9 == 2.9.0`` and ``2.9-rc1 < 2.9``.
* **Build tags** — anything else (``11a``, ``git-a2425b5``).  Tags are
  only equal to themselves and cannot be ordered against releases.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import total_ordering

from emucontext.errors import UnsupportedVersionError

_RELEASE_RE = re.compile(
    r"^v?(?P<release>\d+(?:\.\d+)*)"
    r"(?:[-_.]?(?P<pre>alpha|beta|rc|pre)[-_.]?(?P<pre_num>\d*))?$",
    re.IGNORECASE,
)

# pre-release rank; a final release ranks above all of them
_PRE_RANK = {"alpha": 0, "beta": 1, "pre": 2, "rc": 2}
_FINAL = 3


@total_ordering
@dataclass(frozen=True, eq=False)
class EmulatorVersion:
    """An ordered emulator version, or an opaque build tag."""

    text: str
    """Original spelling, used for display."""

    release: tuple[int, ...] = ()
    pre: tuple[int, int] = (_FINAL, 0)
    tag: str | None = field(default=None)

    @classmethod
    def parse(cls, value: "str | EmulatorVersion") -> "EmulatorVersion":
        if isinstance(value, EmulatorVersion):
            return value
        text = str(value).strip()
        if not text:
            raise UnsupportedVersionError("version", value, "empty version string")

        m = _RELEASE_RE.match(text)
        if m is None:
            return cls(text=text, tag=text.lower())

        release = tuple(int(part) for part in m.group("release").split("."))
        pre_name = m.group("pre")
        if pre_name:
            pre = (_PRE_RANK[pre_name.lower()], int(m.group("pre_num") or 0))
        else:
            pre = (_FINAL, 0)
        return cls(text=text, release=release, pre=pre)

    @property
    def is_tag(self) -> bool:
        return self.tag is not None

    @property
    def is_prerelease(self) -> bool:
        return not self.is_tag and self.pre[0] != _FINAL

    def _key(self) -> tuple[tuple[int, ...], tuple[int, int]]:
        release = self.release
        while len(release) > 1 and release[-1] == 0:
            release = release[:-1]
        return release, self.pre

    def __eq__(self, other: object) -> bool:
        if isinstance(other, str):
            try:
                other = EmulatorVersion.parse(other)
            except UnsupportedVersionError:
                return False
        if not isinstance(other, EmulatorVersion):
            return NotImplemented
        if self.is_tag or other.is_tag:
            return self.tag == other.tag
        return self._key() == other._key()

    def __lt__(self, other: object) -> bool:
        if isinstance(other, str):
            other = EmulatorVersion.parse(other)
        if not isinstance(other, EmulatorVersion):
            return NotImplemented
        if self.is_tag or other.is_tag:
            raise TypeError(f"Build tags are not ordered: {self.text!r} vs {other.text!r}")
        return self._key() < other._key()

    def __hash__(self) -> int:
        if self.is_tag:
            return hash(("tag", self.tag))
        return hash(self._key())

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"EmulatorVersion({self.text!r})"


@dataclass(frozen=True)
class VersionRange:
    """Half-open release range ``[since, until)``, or a fixed set of versions."""

    since: EmulatorVersion | None = None
    until: EmulatorVersion | None = None
    exact: frozenset[EmulatorVersion] = frozenset()

    @classmethod
    def between(cls, since: str | None = None, until: str | None = None) -> "VersionRange":
        return cls(
            since=EmulatorVersion.parse(since) if since else None,
            until=EmulatorVersion.parse(until) if until else None,
        )

    @classmethod
    def only(cls, *versions: str) -> "VersionRange":
        return cls(exact=frozenset(EmulatorVersion.parse(v) for v in versions))

    def __contains__(self, version: object) -> bool:
        if not isinstance(version, EmulatorVersion):
            version = EmulatorVersion.parse(str(version))
        if self.exact:
            return version in self.exact
        if version.is_tag:
            return False
        if self.since is not None and version < self.since:
            return False
        if self.until is not None and not version < self.until:
            return False
        return True

    def __str__(self) -> str:
        if self.exact:
            return "{" + ", ".join(sorted(v.text for v in self.exact)) + "}"
        low = self.since.text if self.since else ""
        high = self.until.text if self.until else ""
        return f"[{low}, {high})"
