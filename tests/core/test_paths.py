from __future__ import annotations

from pathlib import Path

from ccx.core.paths import PathOverride, PathResolver


def test_defaults_follow_home_directory(tmp_path: Path) -> None:
    resolver = PathResolver(home=tmp_path)

    assert resolver.live_settings_path() == tmp_path / ".claude" / "settings.json"
    assert resolver.storage_dir() == tmp_path / ".config" / "ccx" / "settings"
    assert resolver.profile_path("work") == tmp_path / ".config" / "ccx" / "settings" / "work.json"
    assert resolver.previous_path() == tmp_path / ".config" / "ccx" / "settings" / "previous.json"
    assert resolver.state_path() == tmp_path / ".config" / "ccx" / "state.json"
    assert resolver.backup_path("work").name == "work.json.bak"


def test_live_settings_override_beats_alternate_config_dir(tmp_path: Path) -> None:
    environ = {
        "CCX_CLAUDE_SETTINGS_PATH": str(tmp_path / "explicit.json"),
        "CLAUDE_CONFIG_DIR": str(tmp_path / "alt"),
    }
    resolver = PathResolver.from_environ(environ, home=tmp_path)
    assert resolver.live_settings_path() == tmp_path / "explicit.json"

    resolver = PathResolver.from_environ({"CLAUDE_CONFIG_DIR": str(tmp_path / "alt")}, home=tmp_path)
    assert resolver.live_settings_path() == tmp_path / "alt" / "settings.json"


def test_storage_and_base_dir_overrides_are_independent(tmp_path: Path) -> None:
    resolver = PathResolver.from_environ(
        {"CCX_SETTINGS_DIR": str(tmp_path / "store"), "CCX_BASE_DIR": str(tmp_path / "base")},
        home=tmp_path,
    )

    assert resolver.profile_path("dev") == tmp_path / "store" / "dev.json"
    assert resolver.state_path() == tmp_path / "base" / "state.json"


def test_empty_override_values_are_ignored(tmp_path: Path) -> None:
    resolver = PathResolver(home=tmp_path, overrides={PathOverride.SETTINGS_DIR: "  "})
    assert resolver.storage_dir() == tmp_path / ".config" / "ccx" / "settings"

    resolver = PathResolver.from_environ({"CCX_BASE_DIR": ""}, home=tmp_path)
    assert resolver.state_path() == tmp_path / ".config" / "ccx" / "state.json"


def test_with_overrides_layers_on_top_of_environment(tmp_path: Path) -> None:
    resolver = PathResolver.from_environ({"CCX_SETTINGS_DIR": str(tmp_path / "env")}, home=tmp_path)
    layered = resolver.with_overrides(settings_dir=tmp_path / "flag", base_dir=None)

    assert layered.storage_dir() == tmp_path / "flag"
    assert layered.base_dir() == tmp_path / ".config" / "ccx"
    assert resolver.storage_dir() == tmp_path / "env"
