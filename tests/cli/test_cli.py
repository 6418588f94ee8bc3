from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict

import pytest

from ccx.cli import build_parser, main


@pytest.fixture
def environ(tmp_path: Path, write_json) -> Dict[str, str]:
    live = write_json(tmp_path / "claude" / "settings.json", {"model": "opus"})
    return {
        "CCX_CLAUDE_SETTINGS_PATH": str(live),
        "CCX_BASE_DIR": str(tmp_path / "ccx"),
        "CCX_SETTINGS_DIR": str(tmp_path / "ccx" / "settings"),
    }


def _run(argv, environ, **kwargs) -> int:
    return main(argv, environ=environ, **kwargs)


def test_parser_exposes_namespaced_and_alias_commands() -> None:
    parser = build_parser()

    namespaced = parser.parse_args(["setting", "use", "work", "--force"])
    alias = parser.parse_args(["use", "work", "-f"])

    assert namespaced.func is alias.func
    assert namespaced.name == alias.name == "work"
    assert namespaced.force and alias.force

    diff_args = parser.parse_args(["diff", "a", "b", "--semantic"])
    assert (diff_args.name1, diff_args.name2, diff_args.semantic) == ("a", "b", True)

    set_args = parser.parse_args(["set", "a=1", "b=2", "--approve"])
    assert set_args.entries == ["a=1", "b=2"]


def test_create_list_use_status_flow(environ, capsys, tmp_path: Path) -> None:
    assert _run(["setting", "create", "work"], environ) == 0
    assert "Created setting 'work'" in capsys.readouterr().out

    assert _run(["list"], environ) == 0
    assert capsys.readouterr().out == "  - work\n"

    assert _run(["use", "work"], environ) == 0
    assert "Switched to setting 'work'" in capsys.readouterr().out
    assert Path(environ["CCX_CLAUDE_SETTINGS_PATH"]).is_symlink()

    assert _run(["setting", "status"], environ) == 0
    out = capsys.readouterr().out
    assert "Current setting: work" in out
    assert "(modified)" not in out

    assert _run(["path"], environ) == 0
    assert capsys.readouterr().out.strip() == str(tmp_path / "ccx" / "settings" / "work.json")

    assert _run(["path", "--official"], environ) == 0
    assert capsys.readouterr().out.strip() == environ["CCX_CLAUDE_SETTINGS_PATH"]


def test_list_without_profiles_prints_hint(environ, capsys) -> None:
    assert _run(["setting", "list"], environ) == 0
    assert "ccx setting create <name>" in capsys.readouterr().out


def test_errors_exit_one_with_message(environ, capsys) -> None:
    assert _run(["create", "previous"], environ) == 1
    assert "reserved" in capsys.readouterr().err

    assert _run(["use", "missing"], environ) == 1
    assert "Setting 'missing' does not exist" in capsys.readouterr().err

    assert _run(["update"], environ) == 1
    assert "ccx setting use" in capsys.readouterr().err


def test_use_without_name_selects_interactively(environ, capsys, prompts) -> None:
    _run(["create", "work"], environ)
    _run(["create", "home"], environ)
    capsys.readouterr()
    recorder = prompts("home")

    assert _run(["use"], environ, confirm=recorder.confirm, select=recorder.select) == 0

    assert recorder.choices == [["home", "work"]]
    assert "Switched to setting 'home'" in capsys.readouterr().out


def test_use_declined_confirmation_exits_one(environ, capsys, prompts) -> None:
    _run(["create", "a"], environ)
    _run(["create", "b"], environ)
    _run(["use", "a"], environ)
    Path(environ["CCX_CLAUDE_SETTINGS_PATH"]).write_text('{"model": "x"}', encoding="utf-8")
    capsys.readouterr()
    recorder = prompts(False)

    assert _run(["use", "b"], environ, confirm=recorder.confirm) == 1
    assert "cancelled" in capsys.readouterr().err
    assert os.path.realpath(environ["CCX_CLAUDE_SETTINGS_PATH"]).endswith("a.json")


def test_show_variants(environ, capsys, prompts) -> None:
    _run(["create", "work"], environ)
    capsys.readouterr()

    assert _run(["show", "--official", "--raw"], environ) == 0
    assert capsys.readouterr().out == '{"model":"opus"}\n'

    assert _run(["setting", "show", "work"], environ) == 0
    assert json.loads(capsys.readouterr().out) == {"model": "opus"}

    recorder = prompts("work")
    assert _run(["show"], environ, select=recorder.select) == 0
    assert json.loads(capsys.readouterr().out) == {"model": "opus"}

    assert _run(["show", "ghost"], environ) == 1


def test_diff_exit_codes(environ, capsys, write_json) -> None:
    _run(["create", "a"], environ)
    _run(["create", "b"], environ)
    capsys.readouterr()

    assert _run(["diff", "a", "b"], environ) == 0
    assert capsys.readouterr().out == ""

    settings_dir = Path(environ["CCX_SETTINGS_DIR"])
    write_json(settings_dir / "b.json", {"model": "sonnet", "newKey": 1})

    assert _run(["diff", "a", "b"], environ) == 1
    out = capsys.readouterr().out
    assert "--- a" in out and "+++ b" in out
    assert '"model": "sonnet"' in out

    assert _run(["setting", "diff", "a", "b", "--semantic"], environ) == 1
    out = capsys.readouterr().out
    assert "Added:" in out and "newKey = 1" in out
    assert 'model: "opus" → "sonnet"' in out

    assert _run(["diff", "a", "ghost"], environ) == 2
    assert "ghost" in capsys.readouterr().err


def test_diff_modes_agree_on_integral_floats(environ, capsys) -> None:
    _run(["create", "a"], environ)
    _run(["create", "b"], environ)
    settings_dir = Path(environ["CCX_SETTINGS_DIR"])
    (settings_dir / "a.json").write_text('{"timeout": 30}', encoding="utf-8")
    (settings_dir / "b.json").write_text('{"timeout": 30.0}', encoding="utf-8")
    capsys.readouterr()

    assert _run(["diff", "a", "b"], environ) == 0
    assert _run(["diff", "a", "b", "--semantic"], environ) == 0
    assert capsys.readouterr().out == ""


def test_diff_defaults_compare_against_live_settings(environ, capsys) -> None:
    assert _run(["diff"], environ) == 2
    assert "ccx setting use" in capsys.readouterr().err

    _run(["create", "work"], environ)
    _run(["use", "work"], environ)
    capsys.readouterr()
    assert _run(["diff"], environ) == 0
    assert _run(["diff", "work"], environ) == 0

    _run(["set", "model=haiku", "--approve"], environ)
    _run(["create", "other"], environ)
    capsys.readouterr()
    assert _run(["diff", "other"], environ) == 0
    assert _run(["diff", "work", "other"], environ) == 0


def test_set_and_unset_commands(environ, capsys, read_json) -> None:
    live = Path(environ["CCX_CLAUDE_SETTINGS_PATH"])

    assert _run(["set", "env.MY_KEY=myvalue", "enabledPlugins.foo=true"], environ) == 0
    assert read_json(live)["env"] == {"MY_KEY": "myvalue"}
    assert read_json(live)["enabledPlugins"] == {"foo": True}
    capsys.readouterr()

    assert _run(["unset", "env.MY_KEY"], environ) == 0
    assert "unset: env.MY_KEY" in capsys.readouterr().out

    assert _run(["unset", "env.MY_KEY"], environ) == 1
    assert "does not exist" in capsys.readouterr().err

    assert _run(["set", "novalue"], environ) == 1
    assert "key=value" in capsys.readouterr().err


def test_global_flags_override_environment(environ, tmp_path: Path, capsys) -> None:
    custom = tmp_path / "custom-store"

    assert _run(["--settings-dir", str(custom), "create", "work"], environ) == 0

    assert (custom / "work.json").is_file()
    assert not (Path(environ["CCX_SETTINGS_DIR"]) / "work.json").exists()
