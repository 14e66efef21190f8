"""Command: validate the configured signature secret."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from signctl.commands._base import SignCommand

if TYPE_CHECKING:
    from signctl.commands._context import AppContext


@click.command(
    cls=SignCommand,
    examples="""\
  signctl check
  SIGNCTL_SIGNATURE__SECRET=... signctl check
  signctl -c deploy/signctl.toml check""",
)
@click.pass_obj
def check(app: AppContext) -> None:
    """Check that a usable signature secret is configured."""
    app.emit(app.signing.check_secret())
