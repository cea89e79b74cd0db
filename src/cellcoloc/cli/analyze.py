"""cellcoloc analyze — count cells and transduced cells in TIFF images."""

from __future__ import annotations

from pathlib import Path

import click
from rich.table import Table

from cellcoloc.cli.utils import console, error_handler, make_progress


@click.command()
@click.argument(
    "images", nargs=-1, required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-m", "--morphology-channel", type=click.IntRange(min=0), default=None,
    help="0-based channel used to find cells.  [default: 0]",
)
@click.option(
    "-t", "--transduction-channel", type=click.IntRange(min=0), default=None,
    help="0-based channel marking transduced cells.  [default: 1]",
)
@click.option(
    "--cell-diameter", default=None, metavar="MIN-MAX",
    help="Cell diameter range in pixels, e.g. 0-30.",
)
@click.option(
    "--threshold-radius", type=click.IntRange(min=1), default=None,
    help="Local threshold neighbourhood radius in pixels.",
)
@click.option(
    "--blur-sigma", type=float, default=None,
    help="Gaussian blur sigma.",
)
@click.option(
    "--config", "config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None, help="YAML configuration file.",
)
@click.option(
    "-o", "--output", type=click.Path(file_okay=False, path_type=Path), default=None,
    help="Folder receiving the CSV result sheets.",
)
@click.option("--overwrite", is_flag=True, help="Replace existing CSV sheets.")
@click.option(
    "--workers", type=click.IntRange(min=1), default=1, show_default=True,
    help="Number of worker processes.",
)
@error_handler
def analyze(
    images: tuple[Path, ...],
    morphology_channel: int | None,
    transduction_channel: int | None,
    cell_diameter: str | None,
    threshold_radius: int | None,
    blur_sigma: float | None,
    config_path: Path | None,
    output: Path | None,
    overwrite: bool,
    workers: int,
) -> None:
    """Count cells and transduced cells in multi-channel TIFF IMAGES."""
    from cellcoloc.coloc.batch import BatchAnalyzer
    from cellcoloc.coloc.parameters import TransductionParameters
    from cellcoloc.io.config_file import load_parameters
    from cellcoloc.report.csv_output import CsvColocalizationOutput
    from cellcoloc.report.rows import round_half_up

    params = load_parameters(config_path) if config_path else TransductionParameters()
    params = params.with_overrides(
        target_channel=morphology_channel,
        transduced_channel=transduction_channel,
        cell_diameter_range=cell_diameter,
        local_threshold_radius=threshold_radius,
        gaussian_blur_sigma=blur_sigma,
    )

    batch = BatchAnalyzer(params, max_workers=workers)
    with make_progress() as progress:
        task = progress.add_task("Analyzing...", total=len(images))

        def on_progress(current: int, total: int, name: str) -> None:
            progress.update(task, total=total, completed=current, description=f"Analyzed {name}")

        result = batch.analyze_files(list(images), progress_callback=on_progress)

    table = Table(title="Transduction analysis")
    table.add_column("File")
    table.add_column("Cells", justify="right")
    table.add_column("Transduced", justify="right")
    table.add_column("Efficiency (%)", justify="right")
    for r in result.results:
        table.add_row(
            r.metadata.file_name,
            str(r.target_cell_count),
            str(r.transduced_cell_count),
            str(round_half_up(r.transduction_efficiency)),
        )

    console.print()
    console.print(table)
    console.print(f"  Images processed: {result.images_processed}")
    console.print(f"  Images skipped: {result.images_skipped}")
    console.print(f"  Elapsed: {result.elapsed_seconds:.1f}s")

    if result.warnings:
        console.print()
        console.print(f"[yellow]Warnings ({len(result.warnings)}):[/yellow]")
        for w in result.warnings:
            console.print(f"  [dim]- {w}[/dim]")

    if output is not None:
        writer = CsvColocalizationOutput(output, overwrite=overwrite)
        writer.write(result.results, params)
        console.print(f"[green]Results written to[/green] {output}")
