"""Persisted record of the active profile and the live settings hash."""

from __future__ import annotations

import hashlib
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from . import fsutils
from .errors import NotFoundError
from .paths import PathResolver

logger = logging.getLogger(__name__)

# Canonical field first; later entries are accepted on read only.
_NAME_FIELDS = ("currentProfileName", "activeProfile", "currentSettingName")
_HASH_FIELDS = ("liveSettingsHash", "settingsHash", "claudeSettingsHash")


def _first_text(payload: Mapping[str, Any], fields: tuple[str, ...]) -> Optional[str]:
    for key in fields:
        value = payload.get(key)
        if isinstance(value, str) and value:
            return value
    return None


@dataclass(frozen=True)
class StateRecord:
    current_profile_name: str
    live_settings_hash: str

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> Optional["StateRecord"]:
        """Normalise any supported alias set; ``None`` if a field is missing."""

        name = _first_text(payload, _NAME_FIELDS)
        digest = _first_text(payload, _HASH_FIELDS)
        if not name or not digest:
            return None
        return cls(current_profile_name=name, live_settings_hash=digest)

    def to_mapping(self) -> Mapping[str, str]:
        return {
            "currentProfileName": self.current_profile_name,
            "liveSettingsHash": self.live_settings_hash,
        }


def compute_hash(path: Path) -> str:
    """Return the lowercase hex MD5 of the raw bytes at ``path``."""

    path = Path(path)
    if not path.exists():
        raise NotFoundError(f"Cannot hash missing file: {path}")
    return hashlib.md5(path.read_bytes()).hexdigest()


class StateStore:
    """Load and save the :class:`StateRecord` stored at ``paths.state_path()``."""

    def __init__(self, paths: PathResolver) -> None:
        self._paths = paths

    @property
    def path(self) -> Path:
        return self._paths.state_path()

    def load(self) -> Optional[StateRecord]:
        state_path = self.path
        if not state_path.exists():
            return None
        try:
            payload = json.loads(state_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable state file %s: %s", state_path, exc)
            return None
        if not isinstance(payload, Mapping):
            logger.warning("Ignoring state file %s: expected a JSON object", state_path)
            return None
        return StateRecord.from_mapping(payload)

    def save(self, record: StateRecord) -> Path:
        text = json.dumps(record.to_mapping(), indent=2)
        fsutils.atomic_write_text(self.path, text + "\n")
        logger.debug(
            "Saved state: profile=%s hash=%s",
            record.current_profile_name,
            record.live_settings_hash,
        )
        return self.path

    def has_live_settings_changed(self) -> bool:
        live_path = self._paths.live_settings_path()
        if not live_path.exists():
            return False
        record = self.load()
        if record is None:
            return False
        return compute_hash(live_path) != record.live_settings_hash


__all__ = ["StateRecord", "StateStore", "compute_hash"]
