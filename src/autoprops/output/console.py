"""Rich Console factory and theme for autoprops output.

Consoles render to a StringIO buffer so renderers can return plain
strings. In non-TTY environments (tests, pipes) Rich disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

AUTOPROPS_THEME = Theme(
    {
        "autoprops.ok": "bold green",
        "autoprops.error": "bold red",
        "autoprops.warning": "bold yellow",
        "autoprops.op": "bold cyan",
        "autoprops.key": "dim",
        "autoprops.path": "dim",
        "autoprops.name": "bold",
        "autoprops.action.overwrite": "yellow",
        "autoprops.action.merge": "green",
        "autoprops.action.skip": "dim",
    }
)

_ACTION_STYLES: dict[str, str] = {
    "overwrite": "autoprops.action.overwrite",
    "merge": "autoprops.action.merge",
    "skip": "autoprops.action.skip",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=AUTOPROPS_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_action(action: str) -> str:
    """Return the Rich style name for a merge action."""
    return _ACTION_STYLES.get(action, "")
