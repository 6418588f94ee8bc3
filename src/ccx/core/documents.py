"""JSON (de)serialisation helpers for settings documents."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

from .errors import InvalidSettingsError


def _reject_constant(token: str) -> Any:
    raise ValueError(f"{token} is not valid JSON")


def parse_json(text: str, *, source: Path) -> Any:
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as exc:
        raise InvalidSettingsError(source, str(exc)) from exc


def load_json(path: Path) -> Any:
    """Return the parsed document at ``path``; ``OSError`` propagates."""

    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidSettingsError(path, str(exc)) from exc
    return parse_json(text, source=path)


def normalise_numbers(payload: Any) -> Any:
    """Return ``payload`` with integral floats (``1.0``) turned into ints.

    JSON has a single number type, so ``1`` and ``1.0`` serialise alike.
    """

    if isinstance(payload, float) and payload.is_integer():
        return int(payload)
    if isinstance(payload, Mapping):
        return {key: normalise_numbers(value) for key, value in payload.items()}
    if isinstance(payload, list):
        return [normalise_numbers(item) for item in payload]
    return payload


def dump_json(payload: Any, *, raw: bool = False) -> str:
    """Serialise ``payload`` compactly when ``raw`` else with 2-space indent.

    Raises ``ValueError`` for ``NaN``/``Infinity``, which JSON cannot hold.
    """

    payload = normalise_numbers(payload)
    if raw:
        return json.dumps(payload, ensure_ascii=False, allow_nan=False, separators=(",", ":"))
    return json.dumps(payload, ensure_ascii=False, allow_nan=False, indent=2)


__all__ = ["dump_json", "load_json", "normalise_numbers", "parse_json"]
