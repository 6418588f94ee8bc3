"""Reporting helpers for comparing settings documents."""

from .diff import (
    DiffChange,
    are_identical,
    build_semantic_diff,
    compute_changes,
    format_semantic_changes,
    render_semantic_changes,
    render_unified_diff,
    semantic_diff,
    unified_diff,
)

__all__ = [
    "DiffChange",
    "are_identical",
    "build_semantic_diff",
    "compute_changes",
    "format_semantic_changes",
    "render_semantic_changes",
    "render_unified_diff",
    "semantic_diff",
    "unified_diff",
]
