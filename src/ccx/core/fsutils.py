"""File and symlink helpers.

Higher layers never call ``os.symlink``/``os.readlink`` directly; the
binding between the live settings file and a profile is created, inspected
and replaced through this module so dangling links behave the same way
everywhere.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import List

from .paths import PREVIOUS_NAME, PROFILE_SUFFIX

logger = logging.getLogger(__name__)


def exists(path: Path) -> bool:
    """Return ``True`` when ``path`` resolves to an existing file (follows links)."""

    return Path(path).exists()


def lexists(path: Path) -> bool:
    """Return ``True`` when ``path`` exists as a file or as any symlink."""

    return os.path.lexists(path)


def is_broken_symlink(path: Path) -> bool:
    path = Path(path)
    return path.is_symlink() and not path.exists()


def ensure_dir(path: Path) -> Path:
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def read_bytes(path: Path) -> bytes:
    return Path(path).read_bytes()


def atomic_write_bytes(path: Path, payload: bytes) -> Path:
    """Write ``payload`` to ``path`` via a sibling temp file and ``os.replace``.

    ``path`` itself is replaced, so callers that want to write *through* a
    symlink must pass :func:`resolve_link_target` first.
    """

    path = Path(path)
    ensure_dir(path.parent)
    fd, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(payload)
        os.replace(temp_name, path)
    except BaseException:
        if os.path.lexists(temp_name):
            os.unlink(temp_name)
        raise
    return path


def atomic_write_text(path: Path, text: str) -> Path:
    return atomic_write_bytes(path, text.encode("utf-8"))


def copy_content(source: Path, destination: Path) -> Path:
    """Copy the resolved content of ``source`` over ``destination``.

    Reading fully before writing keeps the copy safe when both paths refer to
    the same file through a symlink.
    """

    payload = read_bytes(source)
    return atomic_write_bytes(destination, payload)


def resolve_link_target(path: Path) -> Path:
    """Return the file a (possibly chained) symlink points at, or ``path``."""

    path = Path(path)
    if not path.is_symlink():
        return path
    return Path(os.path.realpath(path))


def read_link(path: Path) -> Path | None:
    """Return the absolute target stored in the symlink at ``path``."""

    path = Path(path)
    if not path.is_symlink():
        return None
    target = Path(os.readlink(path))
    if not target.is_absolute():
        target = path.parent / target
    return Path(os.path.normpath(target))


def symlink_points_to(link: Path, target: Path) -> bool:
    stored = read_link(link)
    if stored is None:
        return False
    expected = Path(os.path.normpath(Path(target).absolute()))
    return stored == expected or Path(os.path.realpath(stored)) == Path(
        os.path.realpath(expected)
    )


def replace_with_symlink(link: Path, target: Path) -> Path:
    """Atomically point ``link`` at ``target`` replacing any file or link there."""

    link = Path(link)
    target = Path(target).absolute()
    ensure_dir(link.parent)
    temp_link = link.parent / f".{link.name}.{os.getpid()}.link"
    if os.path.lexists(temp_link):
        os.unlink(temp_link)
    os.symlink(target, temp_link)
    try:
        os.replace(temp_link, link)
    except BaseException:
        if os.path.lexists(temp_link):
            os.unlink(temp_link)
        raise
    logger.debug("Linked %s -> %s", link, target)
    return link


def list_profile_names(directory: Path) -> List[str]:
    """Return sorted profile names stored in ``directory`` (``previous`` excluded)."""

    directory = Path(directory)
    if not directory.is_dir():
        return []
    names = []
    for entry in directory.iterdir():
        if not entry.name.endswith(PROFILE_SUFFIX) or entry.name.startswith("."):
            continue
        name = entry.name[: -len(PROFILE_SUFFIX)]
        if not name or name == PREVIOUS_NAME:
            continue
        if entry.is_file():
            names.append(name)
    return sorted(names)


__all__ = [
    "atomic_write_bytes",
    "atomic_write_text",
    "copy_content",
    "ensure_dir",
    "exists",
    "is_broken_symlink",
    "lexists",
    "list_profile_names",
    "read_bytes",
    "read_link",
    "replace_with_symlink",
    "resolve_link_target",
    "symlink_points_to",
]
