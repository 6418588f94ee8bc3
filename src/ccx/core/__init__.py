"""ccx core module exports."""

from .dotpath import MISSING, delete_by_path, flatten_keys, get_by_path, set_by_path
from .errors import (
    CcxError,
    ConflictError,
    InvalidSettingsError,
    KeyNotFound,
    LiveSettingsMissing,
    NoActiveProfile,
    NoProfiles,
    NotFoundError,
    ProfileExists,
    ProfileNotFound,
    SwitchCancelled,
    UpdateCancelled,
    UserCancelled,
    ValidationError,
)
from .paths import PathOverride, PathResolver
from .profiles import Bound, ProfileManager, ProfileStatus, SwitchResult, Unbound
from .state import StateRecord, StateStore, compute_hash
from .target import CurrentTarget, NamedTarget, OfficialTarget, resolve_target

__all__ = [
    "MISSING",
    "Bound",
    "CcxError",
    "ConflictError",
    "CurrentTarget",
    "InvalidSettingsError",
    "KeyNotFound",
    "LiveSettingsMissing",
    "NamedTarget",
    "NoActiveProfile",
    "NoProfiles",
    "NotFoundError",
    "OfficialTarget",
    "PathOverride",
    "PathResolver",
    "ProfileExists",
    "ProfileManager",
    "ProfileNotFound",
    "ProfileStatus",
    "StateRecord",
    "StateStore",
    "SwitchCancelled",
    "SwitchResult",
    "Unbound",
    "UpdateCancelled",
    "UserCancelled",
    "ValidationError",
    "compute_hash",
    "delete_by_path",
    "flatten_keys",
    "get_by_path",
    "resolve_target",
    "set_by_path",
]
