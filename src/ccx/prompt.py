"""Interactive collaborators backed by ``rich.prompt``."""

from __future__ import annotations

from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt


def confirm(message: str, *, console: Optional[Console] = None) -> bool:
    """Ask a yes/no question; the default answer is *no*."""

    console = console or Console(stderr=True)
    return Confirm.ask(escape(message), default=False, console=console)


def select(message: str, choices: Sequence[str], *, console: Optional[Console] = None) -> str:
    """Ask the user to pick one of ``choices``.

    Entries may be chosen by name or by their 1-based position in the list.
    """

    if not choices:
        raise ValueError("select() requires at least one choice")
    console = console or Console(stderr=True)
    options = list(choices)
    for index, choice in enumerate(options, start=1):
        console.print(f"  {index}. {choice}", markup=False, highlight=False)
    numbered = [str(index) for index in range(1, len(options) + 1)]
    answer = Prompt.ask(
        escape(message),
        choices=options + numbered,
        show_choices=False,
        console=console,
    )
    if answer in options:
        return answer
    return options[int(answer) - 1]


__all__ = ["confirm", "select"]
