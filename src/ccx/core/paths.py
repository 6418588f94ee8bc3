"""Filesystem locations used by ccx.

Resolution order
================

``live_settings_path``:
    ``LIVE_SETTINGS_PATH`` override, then ``ALT_CONFIG_DIR/settings.json``,
    then ``~/.claude/settings.json``.
``storage_dir``:
    ``SETTINGS_DIR`` override, then ``~/.config/ccx/settings``.
``state_path``:
    ``BASE_DIR/state.json`` where ``BASE_DIR`` defaults to ``~/.config/ccx``.

The resolver never reads the process environment on its own. Callers build
one from an explicit mapping (tests) or via :meth:`PathResolver.from_environ`
at the CLI edge.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional

PREVIOUS_NAME = "previous"
PROFILE_SUFFIX = ".json"
BACKUP_SUFFIX = ".bak"


class PathOverride(str, Enum):
    """Override keys and the environment variables that feed them."""

    LIVE_SETTINGS_PATH = "CCX_CLAUDE_SETTINGS_PATH"
    BASE_DIR = "CCX_BASE_DIR"
    SETTINGS_DIR = "CCX_SETTINGS_DIR"
    ALT_CONFIG_DIR = "CLAUDE_CONFIG_DIR"


def _clean_override(value: object) -> Optional[Path]:
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    return Path(os.path.expanduser(text))


@dataclass(frozen=True)
class PathResolver:
    """Pure path composition over a home directory plus optional overrides."""

    home: Path
    overrides: Mapping[PathOverride, Path] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "home", Path(self.home))
        cleaned: dict[PathOverride, Path] = {}
        for key, value in dict(self.overrides).items():
            path = _clean_override(value)
            if path is not None:
                cleaned[PathOverride(key)] = path
        object.__setattr__(self, "overrides", cleaned)

    @classmethod
    def from_environ(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        home: Path | None = None,
    ) -> "PathResolver":
        source = os.environ if environ is None else environ
        overrides = {
            key: source[key.value]
            for key in PathOverride
            if source.get(key.value)
        }
        return cls(home=home or Path.home(), overrides=overrides)

    def with_overrides(self, **values: Optional[Path]) -> "PathResolver":
        """Return a copy with overrides keyed by ``PathOverride`` member name."""

        merged = dict(self.overrides)
        for name, value in values.items():
            if value is not None:
                merged[PathOverride[name.upper()]] = Path(value)
        return PathResolver(home=self.home, overrides=merged)

    def live_settings_path(self) -> Path:
        explicit = self.overrides.get(PathOverride.LIVE_SETTINGS_PATH)
        if explicit is not None:
            return explicit
        alt_dir = self.overrides.get(PathOverride.ALT_CONFIG_DIR)
        if alt_dir is not None:
            return alt_dir / "settings.json"
        return self.home / ".claude" / "settings.json"

    def base_dir(self) -> Path:
        explicit = self.overrides.get(PathOverride.BASE_DIR)
        if explicit is not None:
            return explicit
        return self.home / ".config" / "ccx"

    def storage_dir(self) -> Path:
        explicit = self.overrides.get(PathOverride.SETTINGS_DIR)
        if explicit is not None:
            return explicit
        return self.home / ".config" / "ccx" / "settings"

    def profile_path(self, name: str) -> Path:
        return self.storage_dir() / f"{name}{PROFILE_SUFFIX}"

    def backup_path(self, name: str) -> Path:
        return self.storage_dir() / f"{name}{PROFILE_SUFFIX}{BACKUP_SUFFIX}"

    def previous_path(self) -> Path:
        return self.profile_path(PREVIOUS_NAME)

    def state_path(self) -> Path:
        return self.base_dir() / "state.json"


__all__ = [
    "BACKUP_SUFFIX",
    "PREVIOUS_NAME",
    "PROFILE_SUFFIX",
    "PathOverride",
    "PathResolver",
]
