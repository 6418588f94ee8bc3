"""ccx: named, swappable profiles for the Claude Code settings file.

The package keeps the moving parts small: ``ccx.core`` holds path
resolution, the state record, the profile switcher and dot-path editing,
``ccx.reporting`` compares settings documents, and ``ccx.cli`` wires them
to the command line.
"""

from __future__ import annotations

__version__ = "0.3.0"

from .core import (
    Bound,
    CcxError,
    CurrentTarget,
    NamedTarget,
    OfficialTarget,
    PathOverride,
    PathResolver,
    ProfileManager,
    StateRecord,
    StateStore,
    Unbound,
)
from .reporting import are_identical, semantic_diff, unified_diff

__all__ = [
    "__version__",
    "Bound",
    "CcxError",
    "CurrentTarget",
    "NamedTarget",
    "OfficialTarget",
    "PathOverride",
    "PathResolver",
    "ProfileManager",
    "StateRecord",
    "StateStore",
    "Unbound",
    "are_identical",
    "semantic_diff",
    "unified_diff",
]
