"""Custom Click base classes with --examples support.

Provides SignCommand and SignGroup that accept an ``examples`` parameter.
When ``--examples`` is passed, the command prints usage examples and exits.
"""

from __future__ import annotations

import os
from typing import Any

import click

STDIN_MARKER = "-"


def _add_examples_option(cmd: click.Command | click.Group, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class SignCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class SignGroup(click.Group):
    """Click Group subclass that supports an ``--examples`` flag.

    Sets ``command_class = SignCommand`` so all subcommands accept the
    ``examples`` parameter without an explicit ``cls=``.
    """

    command_class = SignCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


def read_value(arg: str) -> bytes:
    """Raw bytes of a VALUE argument; ``-`` reads all of stdin.

    Arguments go back through the filesystem encoding, so argv bytes that
    are not valid UTF-8 reach the signer unchanged.
    """
    if arg == STDIN_MARKER:
        return click.get_binary_stream("stdin").read()
    return os.fsencode(arg)


def read_signed(arg: str) -> str:
    """A SIGNED argument; ``-`` reads stdin and strips surrounding whitespace."""
    if arg == STDIN_MARKER:
        return click.get_text_stream("stdin").read().strip()
    return arg
