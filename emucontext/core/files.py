"""File staging helpers used by ``prepare()``."""

from __future__ import annotations

import hashlib
from pathlib import Path

from loguru import logger


def file_sha1(path: Path) -> str:
    """Compute the SHA-1 hex digest of a file."""
    h = hashlib.sha1()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def bytes_sha1(data: bytes) -> str:
    return hashlib.sha1(data).hexdigest()


def copy_if_different(data: bytes, dest: Path) -> bool:
    """Write *data* to *dest* unless an identical file is already there.

    Files are compared by SHA-1.  Missing parent directories are created.
    Returns ``True`` when the file was (re)written.
    """
    if dest.is_file() and file_sha1(dest) == bytes_sha1(data):
        logger.debug("Up to date: {}", dest)
        return False

    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_bytes(data)
    logger.debug("Staged {} ({} bytes)", dest, len(data))
    return True


def stage_file(source: Path, dest: Path) -> bool:
    """Copy *source* to *dest* unless they already hold the same bytes."""
    if source.resolve() == dest.resolve():
        return False
    return copy_if_different(source.read_bytes(), dest)
