from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence

import pytest

from ccx.core.paths import PathResolver


def _write_json(path: Path, payload: Any, indent: Optional[int] = 2) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=indent), encoding="utf-8")
    return path


def _read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


class PromptRecorder:
    """Scripted stand-in for the interactive confirm/select collaborators."""

    def __init__(self, answers: Sequence[Any] = ()) -> None:
        self.answers = list(answers)
        self.messages: List[str] = []
        self.choices: List[List[str]] = []

    def confirm(self, message: str) -> bool:
        self.messages.append(message)
        if not self.answers:
            raise AssertionError(f"Unexpected confirmation: {message}")
        return bool(self.answers.pop(0))

    def select(self, message: str, choices: Sequence[str]) -> str:
        self.messages.append(message)
        self.choices.append(list(choices))
        if not self.answers:
            raise AssertionError(f"Unexpected selection: {message}")
        return str(self.answers.pop(0))


@pytest.fixture
def write_json() -> Callable[..., Path]:
    return _write_json


@pytest.fixture
def read_json() -> Callable[[Path], Any]:
    return _read_json


@pytest.fixture
def prompts() -> Callable[..., PromptRecorder]:
    def _factory(*answers: Any) -> PromptRecorder:
        return PromptRecorder(answers)

    return _factory


@pytest.fixture
def paths(tmp_path: Path) -> PathResolver:
    return PathResolver(home=tmp_path / "home")


@pytest.fixture
def live_settings(paths: PathResolver) -> Path:
    return _write_json(paths.live_settings_path(), {"model": "opus", "env": {"A": "1"}})
