"""cellcoloc defaults — print or save the default configuration."""

from __future__ import annotations

from pathlib import Path

import click

from cellcoloc.cli.utils import console, error_handler


@click.command()
@click.argument("output", required=False, type=click.Path(dir_okay=False, path_type=Path))
@click.option("--overwrite", is_flag=True, help="Replace an existing file.")
@error_handler
def defaults(output: Path | None, overwrite: bool) -> None:
    """Print the default configuration as YAML, or save it to OUTPUT."""
    from cellcoloc.coloc.parameters import TransductionParameters
    from cellcoloc.io.config_file import dump_parameters, save_parameters

    params = TransductionParameters()
    if output is None:
        click.echo(dump_parameters(params), nl=False)
        return

    if output.exists() and not overwrite:
        raise FileExistsError(f"File already exists: {output} (use --overwrite)")
    save_parameters(params, output)
    console.print(f"[green]Default configuration written to[/green] {output}")
