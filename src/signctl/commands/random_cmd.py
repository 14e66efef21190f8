"""Command group: secure random bytes and integers."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from signctl.commands._base import SignGroup

if TYPE_CHECKING:
    from signctl.commands._context import AppContext


@click.group(
    "random",
    cls=SignGroup,
    examples="""\
  signctl random bytes
  signctl random bytes 16 --encoding base64
  signctl random int 1 6""",
)
def random_group() -> None:
    """Generate cryptographically secure random values."""


@random_group.command(
    "bytes",
    examples="""\
  signctl random bytes
  signctl -q random bytes 24 --encoding base64""",
)
@click.argument("count", type=click.IntRange(min=0), required=False)
@click.option(
    "--encoding",
    type=click.Choice(["hex", "base64"]),
    default=None,
    help="Output encoding (default from [random] config).",
)
@click.pass_obj
def random_bytes(app: AppContext, count: int | None, encoding: str | None) -> None:
    """Print COUNT random bytes (default and upper limit from [random] config)."""
    app.emit(app.random.random_bytes(count, encoding=encoding))


@random_group.command(
    "int",
    examples="""\
  signctl random int 0 255
  signctl -q random int -- -10 10""",
)
@click.argument("min_value", metavar="MIN", type=int)
@click.argument("max_value", metavar="MAX", type=int)
@click.pass_obj
def random_int(app: AppContext, min_value: int, max_value: int) -> None:
    """Print an integer drawn uniformly from MIN..MAX inclusive."""
    app.emit(app.random.random_int(min_value, max_value))
