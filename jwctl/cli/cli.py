"""Command line entry point for the jwctl list picker.

Candidates are given as ``KEY=LABEL`` arguments. The chosen key is printed
to stdout so it can be captured by scripts; the list itself is drawn on
stderr.
"""

import sys
from pathlib import Path
from typing import List, Optional, Tuple

import click
from pydantic import ValidationError
from rich.console import Console

from jwctl import __version__
from jwctl.cli.ui.list_selection import run_list_selection
from jwctl.core.config import ListSelectionConfig
from jwctl.errors import RenderFailure, SelectionCancelled, TerminalUnavailable
from jwctl.utils.log import get_logger, init_logger

err_console = Console(stderr=True)
logger = get_logger()


def parse_candidate(raw: str) -> Tuple[str, str]:
    """Split ``KEY=LABEL``; a bare ``KEY`` doubles as its own label."""
    key, sep, label = raw.partition("=")
    key = key.strip()
    if not key:
        raise click.BadParameter(f"missing key in {raw!r}", param_hint="CANDIDATES")
    if not sep:
        return key, key
    return key, label


@click.command(name="jwctl-select", context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("candidates", nargs=-1)
@click.option(
    "--poll-interval",
    type=float,
    default=None,
    help="Seconds to wait for a key press between redraws (default 0.25).",
)
@click.option(
    "--viewport-height",
    type=int,
    default=None,
    help="Number of rows shown at once (default 8).",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging.")
@click.option("--timestamps", is_flag=True, help="Enable timestamps in log lines.")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write debug logs to this file.",
)
@click.version_option(version=__version__, prog_name="jwctl-select")
def cli(
    candidates: Tuple[str, ...],
    poll_interval: Optional[float],
    viewport_height: Optional[int],
    verbose: bool,
    timestamps: bool,
    log_file: Optional[Path],
) -> None:
    """Interactively pick one of CANDIDATES and print its key."""
    init_logger(verbose=verbose, timestamps=timestamps, log_file=log_file)

    items: List[Tuple[str, str]] = [parse_candidate(raw) for raw in candidates]

    try:
        config = ListSelectionConfig.from_env(
            poll_interval=poll_interval,
            viewport_height=viewport_height,
        )
    except ValidationError as exc:
        raise click.UsageError(str(exc)) from exc

    try:
        key, label = run_list_selection(items, config=config)
    except SelectionCancelled as exc:
        err_console.print(f"[yellow]{exc}[/yellow]")
        sys.exit(1)
    except (TerminalUnavailable, RenderFailure) as exc:
        raise click.ClickException(str(exc)) from exc

    logger.debug("Selected candidate", extra={"key": key, "label": label})
    click.echo(key)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
