"""Exception hierarchy shared by the ccx commands.

Every failure a command can report derives from :class:`CcxError` so the
CLI can print a single message and choose the exit code without inspecting
individual subclasses. The intermediate classes mirror the broad failure
categories (validation, missing resources, conflicts, cancelled prompts).
"""

from __future__ import annotations

from pathlib import Path


class CcxError(Exception):
    """Base class for all user-facing ccx failures."""


class ValidationError(CcxError, ValueError):
    """Raised when command input is malformed or uses a reserved name."""


class NotFoundError(CcxError):
    """Raised when a required file, profile or key does not exist."""


class ConflictError(CcxError):
    """Raised when an operation would clobber an existing resource."""


class UserCancelled(CcxError):
    """Raised when the user declines a confirmation prompt."""


class InvalidSettingsError(CcxError):
    """Raised when a settings document cannot be parsed as JSON."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Invalid JSON in {self.path}: {self.reason}")


class LiveSettingsMissing(NotFoundError):
    def __init__(self, path: Path, *, broken_symlink: bool = False) -> None:
        self.path = Path(path)
        self.broken_symlink = broken_symlink
        if broken_symlink:
            message = f"Claude settings is a broken symlink: {self.path}"
        else:
            message = f"Claude settings file does not exist: {self.path}"
        super().__init__(message)


class ProfileNotFound(NotFoundError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Setting '{name}' does not exist")


class NoActiveProfile(NotFoundError):
    def __init__(self) -> None:
        super().__init__(
            "No setting is currently tracked; run 'ccx setting use <name>' first"
        )


class NoProfiles(NotFoundError):
    def __init__(self) -> None:
        super().__init__("No settings yet; use 'ccx setting create <name>' to create one")


class KeyNotFound(NotFoundError):
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"'{key}' does not exist in settings")


class ProfileExists(ConflictError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Setting '{name}' already exists")


class SwitchCancelled(UserCancelled):
    def __init__(self) -> None:
        super().__init__("Switch cancelled")


class UpdateCancelled(UserCancelled):
    def __init__(self) -> None:
        super().__init__("Update cancelled")


__all__ = [
    "CcxError",
    "ConflictError",
    "InvalidSettingsError",
    "KeyNotFound",
    "LiveSettingsMissing",
    "NoActiveProfile",
    "NoProfiles",
    "NotFoundError",
    "ProfileExists",
    "ProfileNotFound",
    "SwitchCancelled",
    "UpdateCancelled",
    "UserCancelled",
    "ValidationError",
]
