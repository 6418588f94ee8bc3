"""Edit the live Claude settings file with ``key=value`` dot-path entries."""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Sequence

from .core import fsutils
from .core.documents import dump_json, load_json
from .core.dotpath import MISSING, delete_by_path, flatten_keys, get_by_path, set_by_path
from .core.errors import InvalidSettingsError, KeyNotFound, LiveSettingsMissing, ValidationError
from .core.paths import PathResolver
from .core.profiles import ConfirmFn, SelectFn

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")


def parse_value(raw: str) -> Any:
    """Coerce ``raw`` into a boolean, a number or leave it as a string."""

    if raw == "true":
        return True
    if raw == "false":
        return False
    stripped = raw.strip()
    if stripped and _NUMBER_RE.match(stripped):
        if re.fullmatch(r"[+-]?\d+", stripped):
            return int(stripped)
        number = float(stripped)
        if math.isfinite(number):
            return number
    return raw


@dataclass(frozen=True)
class Entry:
    key: str
    value: Any


def parse_entry(entry: str) -> Entry:
    """Split ``entry`` on its first ``=``."""

    key, sep, raw_value = entry.partition("=")
    if not sep:
        raise ValidationError(f"Invalid entry: '{entry}'. Use key=value")
    if not key or any(not segment for segment in key.split(".")):
        raise ValidationError(f"Invalid key in entry: '{entry}'")
    return Entry(key=key, value=parse_value(raw_value))


def format_value(value: Any) -> str:
    if isinstance(value, str):
        return f'"{value}"'
    return dump_json(value, raw=True)


def _require_live(paths: PathResolver) -> Path:
    live = paths.live_settings_path()
    if not fsutils.exists(live):
        raise LiveSettingsMissing(live, broken_symlink=fsutils.is_broken_symlink(live))
    return live


def _load_document(path: Path) -> dict:
    document = load_json(path)
    if not isinstance(document, dict):
        raise InvalidSettingsError(path, "expected a JSON object at the top level")
    return document


def _write_document(path: Path, document: dict) -> None:
    # Write through the symlink so an active profile binding survives.
    fsutils.atomic_write_text(fsutils.resolve_link_target(path), dump_json(document))


def set_entries(
    paths: PathResolver,
    entries: Sequence[str],
    *,
    approve: bool = False,
    confirm: Optional[ConfirmFn] = None,
) -> str:
    """Assign every ``key=value`` entry; returns one result line per entry."""

    if not entries:
        raise ValidationError("Provide at least one key=value entry")
    live = _require_live(paths)
    parsed = [parse_entry(entry) for entry in entries]
    document = _load_document(live)

    results: List[str] = []
    for entry in parsed:
        existing = get_by_path(document, entry.key)
        if existing is not MISSING and not approve:
            question = f"{entry.key} already exists with value {format_value(existing)}. Overwrite?"
            if confirm is None or not confirm(question):
                results.append(f"  skipped: {entry.key}")
                continue
        document = set_by_path(document, entry.key, entry.value)
        results.append(f"set: {entry.key} = {format_value(entry.value)}")

    _write_document(live, document)
    logger.info("Updated %d key(s) in %s", len(parsed), live)
    return "\n".join(results)


def unset_key(
    paths: PathResolver,
    key: Optional[str] = None,
    *,
    select: Optional[SelectFn] = None,
) -> str:
    """Remove ``key`` from the live settings, picking one interactively if omitted."""

    live = _require_live(paths)
    document = _load_document(live)
    if key is None:
        candidates = flatten_keys(document)
        if not candidates:
            raise ValidationError("Settings contain no keys to remove")
        if select is None:
            raise ValidationError("Specify a key to remove")
        key = select("Select a key to remove", candidates)
    if get_by_path(document, key) is MISSING:
        raise KeyNotFound(key)
    _write_document(live, delete_by_path(document, key))
    logger.info("Removed %s from %s", key, live)
    return f"unset: {key}"


__all__ = ["Entry", "format_value", "parse_entry", "parse_value", "set_entries", "unset_key"]
