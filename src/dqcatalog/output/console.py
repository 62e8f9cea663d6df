"""Rich Console factory and theme for dqcat output.

Consoles render into a StringIO buffer so renderers stay pure
``ServiceResult -> str`` functions. In non-TTY environments (tests,
pipes) Rich drops color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DQ_THEME = Theme(
    {
        "dq.ok": "bold green",
        "dq.error": "bold red",
        "dq.warning": "bold yellow",
        "dq.op": "bold cyan",
        "dq.key": "dim",
        "dq.rule": "bold blue",
        "dq.type": "bold",
        "dq.source": "magenta",
        "dq.severity.critical": "bold red",
        "dq.severity.high": "red",
        "dq.severity.medium": "yellow",
        "dq.severity.low": "dim",
        "dq.severity.warning": "yellow",
    }
)

# Provenance prefix -> style for the source column of rule tables.
_SOURCE_STYLES: dict[str, str] = {
    "universal": "cyan",
    "core": "green",
    "alias": "blue",
    "primary_key": "magenta",
    "nullable": "magenta",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=DQ_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_severity(severity: str) -> str:
    return f"dq.severity.{severity}" if severity else ""


def style_for_source(source: str) -> str:
    """Style for a provenance string such as ``alias:email``."""
    return _SOURCE_STYLES.get(source.split(":", 1)[0], "")
