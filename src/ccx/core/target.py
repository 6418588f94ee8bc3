"""Resolve abstract setting selectors into concrete paths and names."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .errors import NoActiveProfile
from .paths import PathResolver
from .state import StateStore


@dataclass(frozen=True)
class CurrentTarget:
    """The profile named by the state record."""


@dataclass(frozen=True)
class NamedTarget:
    name: str


@dataclass(frozen=True)
class OfficialTarget:
    """The live settings file itself."""


SettingTarget = Union[CurrentTarget, NamedTarget, OfficialTarget]


@dataclass(frozen=True)
class ResolvedTarget:
    path: Path
    name: Optional[str]

    @property
    def is_official(self) -> bool:
        return self.name is None


def target_for(name: Optional[str] = None, *, official: bool = False) -> SettingTarget:
    """Build a selector from the usual CLI inputs."""

    if official:
        return OfficialTarget()
    if name:
        return NamedTarget(name)
    return CurrentTarget()


def resolve_target(
    target: SettingTarget,
    paths: PathResolver,
    state: StateStore,
) -> ResolvedTarget:
    """Return the path and profile name behind ``target``.

    ``CurrentTarget`` raises :class:`NoActiveProfile` when no state record is
    stored. The official target has no profile name.
    """

    if isinstance(target, OfficialTarget):
        return ResolvedTarget(path=paths.live_settings_path(), name=None)
    if isinstance(target, NamedTarget):
        return ResolvedTarget(path=paths.profile_path(target.name), name=target.name)
    if isinstance(target, CurrentTarget):
        record = state.load()
        if record is None:
            raise NoActiveProfile()
        name = record.current_profile_name
        return ResolvedTarget(path=paths.profile_path(name), name=name)
    raise TypeError(f"Unsupported target: {target!r}")


__all__ = [
    "CurrentTarget",
    "NamedTarget",
    "OfficialTarget",
    "ResolvedTarget",
    "SettingTarget",
    "resolve_target",
    "target_for",
]
