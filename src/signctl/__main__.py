from signctl.cli import cli

cli()
