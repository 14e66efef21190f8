"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy service construction and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from signctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from signctl.config.settings import SignSettings
    from signctl.services.randomness import RandomService
    from signctl.services.result import ServiceResult
    from signctl.services.signing import SigningService


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Services are built on first use so ``--help`` and ``--version`` never
    touch the secret.
    """

    def __init__(self, settings: SignSettings) -> None:
        self.settings = settings
        self._signing: SigningService | None = None
        self._random: RandomService | None = None

        from signctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from signctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def signing(self) -> SigningService:
        """The signing service (created lazily on first access)."""
        if self._signing is None:
            from signctl.services.signing import SigningService

            self._signing = SigningService(self.settings)
        return self._signing

    @property
    def random(self) -> RandomService:
        """The random service (created lazily on first access)."""
        if self._random is None:
            from signctl.services.randomness import RandomService

            self._random = RandomService(self.settings)
        return self._random

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
