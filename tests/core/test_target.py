from __future__ import annotations

import pytest

from ccx.core.errors import NoActiveProfile
from ccx.core.paths import PathResolver
from ccx.core.state import StateRecord, StateStore
from ccx.core.target import (
    CurrentTarget,
    NamedTarget,
    OfficialTarget,
    resolve_target,
    target_for,
)


def test_official_target_has_no_name(paths: PathResolver) -> None:
    resolved = resolve_target(OfficialTarget(), paths, StateStore(paths))

    assert resolved.path == paths.live_settings_path()
    assert resolved.name is None
    assert resolved.is_official


def test_named_target_does_not_consult_state(paths: PathResolver) -> None:
    resolved = resolve_target(NamedTarget("work"), paths, StateStore(paths))

    assert resolved.path == paths.profile_path("work")
    assert resolved.name == "work"


def test_current_target_requires_state(paths: PathResolver) -> None:
    store = StateStore(paths)
    with pytest.raises(NoActiveProfile, match="setting use"):
        resolve_target(CurrentTarget(), paths, store)

    store.save(StateRecord("personal", "hash"))
    resolved = resolve_target(CurrentTarget(), paths, store)
    assert resolved.name == "personal"
    assert resolved.path == paths.profile_path("personal")


def test_target_for_prefers_official_flag() -> None:
    assert target_for("work", official=True) == OfficialTarget()
    assert target_for("work") == NamedTarget("work")
    assert target_for(None) == CurrentTarget()
