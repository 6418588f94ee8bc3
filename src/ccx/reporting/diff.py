"""Diff helpers that canonicalise JSON settings before comparing them.

Two renderings are offered:

- ``unified_diff``: line-based diff of the 2-space pretty-printed documents.
- ``semantic_diff``: key-grouped listing of added/removed/modified dot-paths.

Both return ``""`` when the documents are equivalent. The ``render_*``
helpers wrap the plain text in :class:`rich.text.Text` so terminals get
colour while pipes and files receive the unchanged text.
"""

from __future__ import annotations

from dataclasses import dataclass
from difflib import unified_diff as _difflib_unified_diff
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Sequence

from rich.text import Text

from ..core.documents import dump_json, load_json

ROOT_LABEL = "(root)"
_MAX_INLINE_ITEMS = 3
_MAX_INLINE_KEYS = 2

ADDED = "added"
REMOVED = "removed"
MODIFIED = "modified"


def canonicalise_json(payload: Any) -> str:
    """Return a compact serialisation that ignores source formatting.

    Key order is preserved as parsed, so reordered keys still compare as
    different documents.
    """

    return dump_json(payload, raw=True)


def are_identical(left_path: Path, right_path: Path) -> bool:
    """Return ``True`` when both files hold the same JSON value."""

    left = canonicalise_json(load_json(left_path))
    right = canonicalise_json(load_json(right_path))
    return left == right


def unified_diff(left_path: Path, left_label: str, right_path: Path, right_label: str) -> str:
    """Return a unified diff of the pretty-printed documents, or ``""``."""

    before = dump_json(load_json(left_path))
    after = dump_json(load_json(right_path))
    if before == after:
        return ""
    diff_iter = _difflib_unified_diff(
        before.splitlines(),
        after.splitlines(),
        fromfile=left_label,
        tofile=right_label,
        lineterm="",
    )
    return "\n".join(diff_iter)


@dataclass(frozen=True)
class DiffChange:
    """One structural difference located by its dot-path."""

    type: str
    path: str
    old_value: Any = None
    new_value: Any = None


def _kind(value: Any) -> str:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def _join(prefix: str, key: str) -> str:
    return f"{prefix}.{key}" if prefix else key


def compute_changes(left: Any, right: Any, path: str = "") -> List[DiffChange]:
    """Return structural changes turning ``left`` into ``right``.

    Lists are compared as whole values and never diffed element by element.
    A ``null`` that gains a value is reported as added, and a value that
    becomes ``null`` as removed.
    """

    label = path or ROOT_LABEL
    if left is None:
        if right is None:
            return []
        return [DiffChange(ADDED, label, new_value=right)]
    if right is None:
        return [DiffChange(REMOVED, label, old_value=left)]

    if _kind(left) != _kind(right):
        return [DiffChange(MODIFIED, label, old_value=left, new_value=right)]

    if isinstance(left, list):
        if canonicalise_json(left) != canonicalise_json(right):
            return [DiffChange(MODIFIED, label, old_value=left, new_value=right)]
        return []

    if isinstance(left, Mapping):
        changes: List[DiffChange] = []
        keys = list(left.keys()) + [key for key in right.keys() if key not in left]
        for key in keys:
            child = _join(path, key)
            if key not in left:
                changes.append(DiffChange(ADDED, child, new_value=right[key]))
            elif key not in right:
                changes.append(DiffChange(REMOVED, child, old_value=left[key]))
            else:
                changes.extend(compute_changes(left[key], right[key], child))
        return changes

    if left != right:
        return [DiffChange(MODIFIED, label, old_value=left, new_value=right)]
    return []


def build_semantic_diff(left_path: Path, right_path: Path) -> List[DiffChange]:
    return compute_changes(load_json(left_path), load_json(right_path))


def format_value(value: Any) -> str:
    """Return a short display form; large containers collapse to a count."""

    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, list) and len(value) > _MAX_INLINE_ITEMS:
        return f"[{len(value)} items]"
    if isinstance(value, Mapping) and len(value) > _MAX_INLINE_KEYS:
        return f"{{{len(value)} keys}}"
    return canonicalise_json(value)


def _group(changes: Iterable[DiffChange]) -> Mapping[str, List[DiffChange]]:
    grouped: dict[str, List[DiffChange]] = {ADDED: [], REMOVED: [], MODIFIED: []}
    for change in changes:
        grouped[change.type].append(change)
    return grouped


def _change_line(change: DiffChange) -> str:
    if change.type == ADDED:
        return f"  + {change.path} = {format_value(change.new_value)}"
    if change.type == REMOVED:
        return f"  - {change.path} = {format_value(change.old_value)}"
    return f"  ~ {change.path}: {format_value(change.old_value)} → {format_value(change.new_value)}"


_HEADINGS = ((ADDED, "Added:"), (REMOVED, "Removed:"), (MODIFIED, "Modified:"))


def format_semantic_changes(changes: Sequence[DiffChange]) -> str:
    grouped = _group(changes)
    sections = []
    for change_type, heading in _HEADINGS:
        entries = grouped[change_type]
        if not entries:
            continue
        sections.append("\n".join([heading, *(_change_line(entry) for entry in entries)]))
    return "\n\n".join(sections)


def semantic_diff(left_path: Path, left_label: str, right_path: Path, right_label: str) -> str:
    """Return the key-grouped diff text; labels are accepted for API symmetry."""

    return format_semantic_changes(build_semantic_diff(left_path, right_path))


def render_unified_diff(diff_text: str) -> Text:
    """Return ``diff_text`` styled line by line for terminal output."""

    rendered = Text()
    for index, line in enumerate(diff_text.split("\n")):
        if index:
            rendered.append("\n")
        if line.startswith("---") or line.startswith("+++"):
            style = "bold"
        elif line.startswith("-"):
            style = "red"
        elif line.startswith("+"):
            style = "green"
        elif line.startswith("@@"):
            style = "cyan"
        else:
            style = ""
        rendered.append(line, style=style)
    return rendered


_SECTION_STYLES = {ADDED: "green", REMOVED: "red", MODIFIED: "yellow"}


def render_semantic_changes(changes: Sequence[DiffChange]) -> Text:
    grouped = _group(changes)
    rendered = Text()
    first = True
    for change_type, heading in _HEADINGS:
        entries = grouped[change_type]
        if not entries:
            continue
        if not first:
            rendered.append("\n\n")
        first = False
        style = _SECTION_STYLES[change_type]
        rendered.append(heading, style=f"bold {style}")
        for entry in entries:
            rendered.append("\n")
            if change_type == MODIFIED:
                rendered.append(f"  ~ {entry.path}: ", style=style)
                rendered.append(format_value(entry.old_value), style="red")
                rendered.append(" → ", style=style)
                rendered.append(format_value(entry.new_value), style="green")
            else:
                rendered.append(_change_line(entry), style=style)
    return rendered


__all__ = [
    "ADDED",
    "MODIFIED",
    "REMOVED",
    "ROOT_LABEL",
    "DiffChange",
    "are_identical",
    "build_semantic_diff",
    "canonicalise_json",
    "compute_changes",
    "format_semantic_changes",
    "format_value",
    "render_semantic_changes",
    "render_unified_diff",
    "semantic_diff",
    "unified_diff",
]
