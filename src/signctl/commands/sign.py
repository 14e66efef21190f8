"""Commands: sign, signature, verify, unsign."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from signctl.commands._base import SignCommand, read_signed, read_value

if TYPE_CHECKING:
    from signctl.commands._context import AppContext


@click.command(
    cls=SignCommand,
    examples="""\
  signctl sign "user:42"
  printf 'binary\\x00payload' | signctl sign -
  signctl -q sign "user:42" > token.txt""",
)
@click.argument("value")
@click.pass_obj
def sign(app: AppContext, value: str) -> None:
    """Create a signed string for VALUE (use - to read stdin)."""
    app.emit(app.signing.sign(read_value(value)))


@click.command(
    cls=SignCommand,
    examples="""\
  signctl signature "hello"
  signctl --json signature hello""",
)
@click.argument("value")
@click.pass_obj
def signature(app: AppContext, value: str) -> None:
    """Print the hex HMAC-SHA256 signature of VALUE (use - to read stdin)."""
    app.emit(app.signing.signature(read_value(value)))


@click.command(
    cls=SignCommand,
    examples="""\
  signctl verify "$(cat token.txt)"
  signctl verify - < token.txt && echo trusted""",
)
@click.argument("signed")
@click.pass_obj
def verify(app: AppContext, signed: str) -> None:
    """Check that SIGNED is properly signed. Exits 1 if it is not."""
    app.emit(app.signing.verify(read_signed(signed)))


@click.command(
    cls=SignCommand,
    examples="""\
  signctl unsign "$(cat token.txt)"
  signctl -q unsign - < token.txt""",
)
@click.argument("signed")
@click.pass_obj
def unsign(app: AppContext, signed: str) -> None:
    """Verify SIGNED and print the value it carries. Exits 1 if invalid."""
    app.emit(app.signing.unsign(read_signed(signed)))
