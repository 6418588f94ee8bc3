"""Command-line entry point for ccx.

Commands are available both under the ``setting`` namespace and as
top-level aliases (``ccx setting use work`` == ``ccx use work``). ``set``
and ``unset`` edit the live Claude settings file directly.

Exit codes: ``0`` success (for ``diff``: identical), ``1`` command error
(for ``diff``: documents differ), ``2`` ``diff`` failed to compare,
``130`` interrupted.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Mapping, Sequence, Tuple

from rich.console import Console
from rich.logging import RichHandler

from . import __version__, prompt
from .config_edit import set_entries, unset_key
from .core.errors import CcxError
from .core.paths import PathResolver
from .core.profiles import ConfirmFn, ProfileManager, SelectFn
from .core.target import OfficialTarget, SettingTarget, target_for
from .reporting.diff import (
    are_identical,
    build_semantic_diff,
    render_semantic_changes,
    render_unified_diff,
    unified_diff,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_DIFFERENT = 1
EXIT_DIFF_ERROR = 2
EXIT_INTERRUPTED = 130

_LOG_HANDLER_NAME = "ccx-cli"


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    package_logger = logging.getLogger("ccx")
    package_logger.setLevel(level)
    if any(handler.get_name() == _LOG_HANDLER_NAME for handler in package_logger.handlers):
        return
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
    )
    handler.set_name(_LOG_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)


def _echo(text: str) -> None:
    suffix = "" if text.endswith("\n") else "\n"
    sys.stdout.write(text + suffix)


def _console() -> Console:
    return Console(soft_wrap=True, highlight=False)


def _paths(args: argparse.Namespace) -> PathResolver:
    resolver = PathResolver.from_environ(args.environ)
    return resolver.with_overrides(
        live_settings_path=args.settings_path,
        base_dir=args.base_dir,
        settings_dir=args.settings_dir,
    )


def _manager(args: argparse.Namespace) -> ProfileManager:
    return ProfileManager(_paths(args), confirm=args.confirm, select=args.select)


def _handle_create(args: argparse.Namespace) -> int:
    _manager(args).create(args.name)
    _echo(f"Created setting '{args.name}'")
    return EXIT_OK


def _handle_list(args: argparse.Namespace) -> int:
    _echo(_manager(args).list_profiles())
    return EXIT_OK


def _handle_use(args: argparse.Namespace) -> int:
    manager = _manager(args)
    name = args.name or manager.select_profile()
    result = manager.use(name, force=args.force)
    _echo(result.message)
    return EXIT_OK


def _handle_update(args: argparse.Namespace) -> int:
    name = _manager(args).update(args.name)
    _echo(f"Updated setting '{name}'")
    return EXIT_OK


def _handle_path(args: argparse.Namespace) -> int:
    _echo(str(_manager(args).path(target_for(official=args.official))))
    return EXIT_OK


def _handle_show(args: argparse.Namespace) -> int:
    manager = _manager(args)
    name = None if args.official else args.name or manager.select_profile()
    _echo(manager.show(target_for(name, official=args.official), raw=args.raw))
    return EXIT_OK


def _handle_status(args: argparse.Namespace) -> int:
    _echo(_manager(args).status().describe())
    return EXIT_OK


def _diff_side(manager: ProfileManager, target: SettingTarget) -> Tuple[Path, str]:
    if isinstance(target, OfficialTarget):
        live = manager.require_live()
        return live, str(live)
    resolved = manager.resolve(target)
    return manager.require_profile(resolved.name), resolved.name


def _diff_targets(args: argparse.Namespace) -> Tuple[SettingTarget, SettingTarget]:
    if args.name1 and args.name2:
        return target_for(args.name1), target_for(args.name2)
    return target_for(args.name1), target_for(official=True)


def _handle_diff(args: argparse.Namespace) -> int:
    try:
        manager = _manager(args)
        left_target, right_target = _diff_targets(args)
        left, left_label = _diff_side(manager, left_target)
        right, right_label = _diff_side(manager, right_target)
        if args.semantic:
            changes = build_semantic_diff(left, right)
            if not changes:
                return EXIT_OK
            _console().print(render_semantic_changes(changes))
            return EXIT_DIFFERENT
        if are_identical(left, right):
            return EXIT_OK
        _console().print(render_unified_diff(unified_diff(left, left_label, right, right_label)))
        return EXIT_DIFFERENT
    except (CcxError, OSError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return EXIT_DIFF_ERROR


def _handle_set(args: argparse.Namespace) -> int:
    _echo(set_entries(_paths(args), args.entries, approve=args.approve, confirm=args.confirm))
    return EXIT_OK


def _handle_unset(args: argparse.Namespace) -> int:
    _echo(unset_key(_paths(args), args.key, select=args.select))
    return EXIT_OK


def _add_setting_commands(subparsers: argparse._SubParsersAction, *, alias: bool) -> None:
    suffix = " (alias for 'setting {}')" if alias else ""

    def _help(text: str, command: str) -> str:
        return text + suffix.format(command)

    create_p = subparsers.add_parser("create", help=_help("Create a setting from the live settings", "create"))
    create_p.add_argument("name", help="Name of the new setting.")
    create_p.set_defaults(func=_handle_create)

    list_p = subparsers.add_parser("list", help=_help("List stored settings", "list"))
    list_p.set_defaults(func=_handle_list)

    use_p = subparsers.add_parser(
        "use",
        help=_help("Switch to a setting (interactive selection when no name is given)", "use"),
    )
    use_p.add_argument("name", nargs="?", help="Setting to activate.")
    use_p.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Switch even if the live settings were modified.",
    )
    use_p.set_defaults(func=_handle_use)

    update_p = subparsers.add_parser(
        "update",
        help=_help("Overwrite a setting with the live settings (current setting by default)", "update"),
    )
    update_p.add_argument("name", nargs="?", help="Setting to overwrite.")
    update_p.set_defaults(func=_handle_update)

    path_p = subparsers.add_parser("path", help=_help("Print the current setting path", "path"))
    path_p.add_argument(
        "--official",
        action="store_true",
        help="Print the live Claude settings path instead.",
    )
    path_p.set_defaults(func=_handle_path)

    show_p = subparsers.add_parser(
        "show",
        help=_help("Print a setting (interactive selection when no name is given)", "show"),
    )
    show_p.add_argument("name", nargs="?", help="Setting to print.")
    show_p.add_argument("--official", action="store_true", help="Print the live Claude settings.")
    show_p.add_argument("--raw", action="store_true", help="Print compact JSON.")
    show_p.set_defaults(func=_handle_show)

    status_p = subparsers.add_parser("status", help=_help("Show the tracked setting", "status"))
    status_p.set_defaults(func=_handle_status)

    diff_p = subparsers.add_parser(
        "diff",
        help=_help("Compare two settings, or a setting with the live settings", "diff"),
    )
    diff_p.add_argument("name1", nargs="?", help="Left-hand setting (defaults to the current one).")
    diff_p.add_argument("name2", nargs="?", help="Right-hand setting (defaults to the live settings).")
    diff_p.add_argument(
        "--semantic",
        action="store_true",
        help="Group differences by JSON key instead of lines.",
    )
    diff_p.set_defaults(func=_handle_diff)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ccx",
        description="Manage swappable Claude Code settings profiles.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--settings-path",
        type=Path,
        default=None,
        help="Live Claude settings file (overrides CCX_CLAUDE_SETTINGS_PATH).",
    )
    parser.add_argument(
        "--base-dir",
        type=Path,
        default=None,
        help="Directory holding state.json (overrides CCX_BASE_DIR).",
    )
    parser.add_argument(
        "--settings-dir",
        type=Path,
        default=None,
        help="Directory holding stored settings (overrides CCX_SETTINGS_DIR).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (repeatable).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    setting_p = subparsers.add_parser("setting", help="Manage stored Claude settings.")
    setting_sub = setting_p.add_subparsers(dest="setting_command", required=True)
    _add_setting_commands(setting_sub, alias=False)
    _add_setting_commands(subparsers, alias=True)

    set_p = subparsers.add_parser(
        "set",
        help="Set dot-path keys in the live Claude settings (key=value).",
    )
    set_p.add_argument("entries", nargs="+", metavar="KEY=VALUE", help="Entries to assign.")
    set_p.add_argument("--approve", action="store_true", help="Overwrite existing keys without asking.")
    set_p.set_defaults(func=_handle_set)

    unset_p = subparsers.add_parser(
        "unset",
        help="Remove a dot-path key from the live Claude settings.",
    )
    unset_p.add_argument("key", nargs="?", help="Key to remove (interactive selection when omitted).")
    unset_p.set_defaults(func=_handle_unset)
    return parser


def main(
    argv: Sequence[str] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    confirm: ConfirmFn | None = None,
    select: SelectFn | None = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.environ = environ
    args.confirm = confirm or prompt.confirm
    args.select = select or prompt.select
    _configure_logging(args.verbose)

    handler: Callable[[argparse.Namespace], int] = args.func
    try:
        return handler(args)
    except KeyboardInterrupt:
        sys.stderr.write("\n")
        return EXIT_INTERRUPTED
    except (CcxError, OSError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        sys.stderr.write(f"error: {exc}\n")
        return EXIT_ERROR


if __name__ == "__main__":  # pragma: no cover - manual entry point
    raise SystemExit(main())
