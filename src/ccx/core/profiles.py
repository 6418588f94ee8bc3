"""Profile management for the live Claude settings file.

Binding model
=============

The live settings file is either ``Unbound`` (never switched, or a legacy
plain copy) or ``Bound(name)``: a symlink to ``<storage>/<name>.json`` with
the state record naming ``name``. Only :meth:`ProfileManager.use` moves
between the two.

``use`` sequence:
    validate name -> short-circuit when already bound -> drift check and
    confirmation -> copy live content to ``previous.json`` -> swap the
    symlink -> write ``<name>.json.bak`` -> persist the new hash.

Nothing is mutated before the confirmation prompt has been answered.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

from . import fsutils
from .documents import dump_json, load_json
from .errors import (
    LiveSettingsMissing,
    NoProfiles,
    ProfileExists,
    ProfileNotFound,
    SwitchCancelled,
    UpdateCancelled,
    ValidationError,
)
from .paths import PREVIOUS_NAME, PathResolver
from .state import StateRecord, StateStore, compute_hash
from .target import CurrentTarget, NamedTarget, ResolvedTarget, SettingTarget, resolve_target

logger = logging.getLogger(__name__)

ConfirmFn = Callable[[str], bool]
SelectFn = Callable[[str, Sequence[str]], str]

EMPTY_LIST_HINT = "No settings yet; use 'ccx setting create <name>' to create one"


@dataclass(frozen=True)
class Unbound:
    pass


@dataclass(frozen=True)
class Bound:
    name: str


Binding = Union[Unbound, Bound]


@dataclass(frozen=True)
class SwitchResult:
    name: str
    already_active: bool = False
    previous_saved: bool = False

    @property
    def message(self) -> str:
        if self.already_active:
            return f"Setting '{self.name}' is already active"
        return f"Switched to setting '{self.name}'"


@dataclass(frozen=True)
class ProfileStatus:
    live_path: Path
    name: Optional[str] = None
    profile_path: Optional[Path] = None
    bound: bool = False
    modified: bool = False

    def describe(self) -> str:
        if self.name is None:
            return f"No setting is currently tracked\nLive settings: {self.live_path}"
        lines = [f"Current setting: {self.name}" + (" (modified)" if self.modified else "")]
        if self.bound:
            lines.append(f"Live settings: {self.live_path} -> {self.profile_path}")
        else:
            lines.append(f"Live settings: {self.live_path} (not linked)")
        return "\n".join(lines)


def _validate_name(name: Optional[str]) -> str:
    if name is None or not name.strip():
        raise ValidationError("Setting name must not be empty")
    if name == PREVIOUS_NAME:
        raise ValidationError(f"'{PREVIOUS_NAME}' is a reserved name")
    separators = {"/", os.sep} | ({os.altsep} if os.altsep else set())
    if any(sep in name for sep in separators) or name in {".", ".."}:
        raise ValidationError(f"Invalid setting name: {name!r}")
    return name


def _decline(message: str) -> bool:
    return False


def _no_choice(message: str, choices: Sequence[str]) -> str:
    raise ValidationError("Interactive selection is not available")


class ProfileManager:
    """Create, switch and inspect setting profiles."""

    def __init__(
        self,
        paths: PathResolver,
        *,
        state: Optional[StateStore] = None,
        confirm: Optional[ConfirmFn] = None,
        select: Optional[SelectFn] = None,
    ) -> None:
        self.paths = paths
        self.state = state or StateStore(paths)
        self._confirm = confirm or _decline
        self._select = select or _no_choice

    # -- helpers ---------------------------------------------------------
    def require_live(self) -> Path:
        live = self.paths.live_settings_path()
        if not fsutils.exists(live):
            raise LiveSettingsMissing(live, broken_symlink=fsutils.is_broken_symlink(live))
        return live

    def require_profile(self, name: str) -> Path:
        profile_path = self.paths.profile_path(name)
        if not profile_path.is_file():
            raise ProfileNotFound(name)
        return profile_path

    def resolve(self, target: SettingTarget) -> ResolvedTarget:
        return resolve_target(target, self.paths, self.state)

    def binding(self, record: Optional[StateRecord] = None) -> Binding:
        """Return the current binding of the live settings file."""

        if record is None:
            record = self.state.load()
        if record is None:
            return Unbound()
        live = self.paths.live_settings_path()
        if fsutils.symlink_points_to(live, self.paths.profile_path(record.current_profile_name)):
            return Bound(record.current_profile_name)
        return Unbound()

    # -- commands --------------------------------------------------------
    def create(self, name: str) -> Path:
        name = _validate_name(name)
        live = self.require_live()
        profile_path = self.paths.profile_path(name)
        if fsutils.lexists(profile_path):
            raise ProfileExists(name)
        fsutils.copy_content(live, profile_path)
        logger.info("Created setting %s from %s", name, live)
        return profile_path

    def profile_names(self) -> List[str]:
        return fsutils.list_profile_names(self.paths.storage_dir())

    def list_profiles(self) -> str:
        names = self.profile_names()
        if not names:
            return EMPTY_LIST_HINT
        return "\n".join(f"  - {name}" for name in names)

    def use(self, name: str, *, force: bool = False) -> SwitchResult:
        name = _validate_name(name)
        profile_path = self.require_profile(name)
        live = self.paths.live_settings_path()
        record = self.state.load()

        if record is not None and self.binding(record) == Bound(name):
            # The profile may have been edited directly; resync the hash.
            self.state.save(StateRecord(name, compute_hash(profile_path)))
            logger.info("Setting %s already active; state refreshed", name)
            return SwitchResult(name=name, already_active=True)

        if not force and record is not None and fsutils.exists(live):
            if compute_hash(live) != record.live_settings_hash:
                message = (
                    f"Current setting ({record.current_profile_name}) has been modified; "
                    f"switching to '{name}' will discard those changes. Continue?"
                )
                if not self._confirm(message):
                    raise SwitchCancelled()

        previous_saved = False
        if fsutils.exists(live):
            fsutils.copy_content(live, self.paths.previous_path())
            previous_saved = True
            logger.debug("Saved previous settings to %s", self.paths.previous_path())
        elif fsutils.lexists(live):
            logger.warning("Replacing broken symlink at %s", live)

        fsutils.replace_with_symlink(live, profile_path)
        fsutils.copy_content(profile_path, self.paths.backup_path(name))
        self.state.save(StateRecord(name, compute_hash(profile_path)))
        logger.info("Switched live settings to %s", name)
        return SwitchResult(name=name, previous_saved=previous_saved)

    def update(self, name: Optional[str] = None) -> str:
        implicit = name is None
        target: SettingTarget = CurrentTarget() if implicit else NamedTarget(name)
        resolved = self.resolve(target)
        profile_name = _validate_name(resolved.name)
        profile_path = self.require_profile(profile_name)
        live = self.require_live()

        if implicit:
            message = f"Overwrite setting '{profile_name}' with the current Claude settings?"
            if not self._confirm(message):
                raise UpdateCancelled()

        fsutils.copy_content(live, profile_path)
        record = self.state.load()
        if record is not None and record.current_profile_name == profile_name:
            self.state.save(StateRecord(profile_name, compute_hash(live)))
        logger.info("Updated setting %s from %s", profile_name, live)
        return profile_name

    def path(self, target: Optional[SettingTarget] = None) -> Path:
        return self.resolve(target or CurrentTarget()).path

    def show(self, target: Optional[SettingTarget] = None, *, raw: bool = False) -> str:
        resolved = self.resolve(target or CurrentTarget())
        if resolved.is_official:
            source = self.require_live()
        else:
            source = self.require_profile(resolved.name)
        return dump_json(load_json(source), raw=raw)

    def status(self) -> ProfileStatus:
        live = self.paths.live_settings_path()
        record = self.state.load()
        if record is None:
            return ProfileStatus(live_path=live)
        name = record.current_profile_name
        return ProfileStatus(
            live_path=live,
            name=name,
            profile_path=self.paths.profile_path(name),
            bound=isinstance(self.binding(record), Bound),
            modified=self.state.has_live_settings_changed(),
        )

    def select_profile(self) -> str:
        names = self.profile_names()
        if not names:
            raise NoProfiles()
        return self._select("Select a setting profile", names)


__all__ = [
    "Binding",
    "Bound",
    "ConfirmFn",
    "EMPTY_LIST_HINT",
    "ProfileManager",
    "ProfileStatus",
    "SelectFn",
    "SwitchResult",
    "Unbound",
]
