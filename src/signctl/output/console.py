"""Rich Console factory and theme for signctl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

SIGN_THEME = Theme(
    {
        "sign.ok": "bold green",
        "sign.error": "bold red",
        "sign.op": "bold cyan",
        "sign.key": "dim",
        "sign.token": "bold blue",
        "sign.number": "magenta",
    }
)

# Data keys that carry opaque tokens rather than prose.
TOKEN_KEYS = frozenset({"signed", "signature", "bytes", "value"})


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width. Tokens are never wrapped either way.
    """
    return Console(
        file=StringIO(),
        theme=SIGN_THEME,
        no_color=no_color,
        highlight=False,
        soft_wrap=True,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_key(key: str, value: object) -> str:
    """Return the Rich style name for a data field.

    Integers style as numbers whatever the key, so ``random int`` output
    and an unsigned text ``value`` share a key but not a style.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return "sign.number"
    if key in TOKEN_KEYS:
        return "sign.token"
    return ""
