"""Shared utilities for CLI commands."""

import sys

from rich.console import Console

# Initialize Rich console for colored output
console = Console()


def print_plain(lines: list[str]) -> None:
    """Print data lines verbatim, without markup or highlighting."""
    for line in lines:
        console.print(line, markup=False, highlight=False)


def stdin_is_interactive() -> bool:
    return sys.stdin is not None and sys.stdin.isatty()


def wait_for_keypress(prompt: str) -> bool:
    """Block until the user presses Enter; skipped when stdin is not a terminal.

    Returns whether the prompt was shown.
    """
    if not stdin_is_interactive():
        return False
    try:
        console.input(prompt)
    except EOFError:
        pass
    return True
