"""cellcoloc CLI — top-level Click group."""

from __future__ import annotations

import logging

import click


@click.group()
@click.version_option(package_name="cellcoloc")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging and full tracebacks on errors.")
def cli(verbose: bool) -> None:
    """cellcoloc — Multi-channel cell segmentation and colocalization."""
    from cellcoloc.cli import utils

    utils.verbose = verbose
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )


def _register_commands() -> None:
    """Register all subcommands — imports deferred to avoid loading heavy deps at startup."""
    from cellcoloc.cli.analyze import analyze
    from cellcoloc.cli.defaults import defaults

    cli.add_command(analyze)
    cli.add_command(defaults)


_register_commands()
