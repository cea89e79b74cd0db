"""Shared CLI utilities — Rich console, error handling, progress bars."""

from __future__ import annotations

import functools
import traceback
from typing import Any, Callable

from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

console = Console()

# Set by the --verbose flag on the top-level CLI group.
verbose: bool = False


def error_handler(func: Callable[..., Any]) -> Callable[..., Any]:
    """Map analysis failures to exit codes for ``analyze`` and ``defaults``.

    Exit 1 for problems the user can fix: a bad configuration value or file
    (InvalidConfigurationError), a channel index the image lacks
    (ChannelNotFoundError), or an unreadable/unwritable path (OSError, e.g.
    refusing to overwrite result sheets). Exit 2 for anything else, which
    points at a bug; --verbose prints its traceback.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        from cellcoloc.core.exceptions import (
            ChannelNotFoundError,
            ColocalizationError,
            InvalidConfigurationError,
        )

        try:
            return func(*args, **kwargs)
        except SystemExit:
            raise
        except InvalidConfigurationError as e:
            console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
            raise SystemExit(1)
        except ChannelNotFoundError as e:
            console.print(
                f"[red]Channel error:[/red] {escape(str(e))}\n"
                "[dim]Channels are numbered from 0; check -m/-t.[/dim]"
            )
            raise SystemExit(1)
        except (ColocalizationError, OSError) as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            raise SystemExit(1)
        except Exception as e:
            if verbose:
                console.print(f"[red]Analysis failed unexpectedly:[/red] {escape(str(e))}")
                console.print(escape(traceback.format_exc()))
            else:
                console.print(
                    f"[red]Analysis failed unexpectedly:[/red] "
                    f"{type(e).__name__}: {escape(str(e))}\n"
                    "[dim]Rerun with cellcoloc --verbose for the full traceback.[/dim]"
                )
            raise SystemExit(2)

    return wrapper


def make_progress() -> Progress:
    """Create a Rich progress bar for CLI operations."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
    )
