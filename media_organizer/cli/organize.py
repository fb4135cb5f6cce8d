"""
CLI command for organizing media files.

Moves media from a camera card (or any directory) into a dated library.
"""

import logging
import signal
import sys
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .. import __version__
from ..config import OrganizerConfig
from ..errors import InputPathError
from ..organization import (
    FileMover,
    MoveScheduler,
    NameReservations,
    RunSummary,
    eject_volume,
    finalize,
    prune_empty_directories,
)
from ..shared import collect_media_files, setup_logging

console = Console()
logger = logging.getLogger(__name__)

EXIT_FAILURES = 1
EXIT_CONFIG_ERROR = 2
EXIT_INPUT_ERROR = 3


@contextmanager
def interruption_handler(cancel_event: threading.Event) -> Iterator[None]:
    """Turn SIGINT/SIGTERM into a cancellation request for the duration."""

    def _handle(signum, frame):
        if not cancel_event.is_set():
            logger.warning("Interrupted. Exiting.")
            console.print(
                "\n[yellow]Interrupted - finishing in-flight moves...[/yellow]"
            )
        cancel_event.set()

    previous = {}
    for sig in (signal.SIGINT, signal.SIGTERM):
        previous[sig] = signal.signal(sig, _handle)
    try:
        yield
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


@click.command()
@click.argument("input_volume", type=click.Path(file_okay=False, path_type=Path))
@click.argument("output_path", type=click.Path(file_okay=False, path_type=Path))
@click.option(
    "-n",
    "--dry-run",
    is_flag=True,
    default=False,
    help="Show actions without performing them",
)
@click.option(
    "-p",
    "--preserve-times",
    is_flag=True,
    default=False,
    help="Preserve modification times (copy, then delete the original)",
)
@click.option(
    "-j",
    "--jobs",
    type=int,
    default=None,
    help="Run up to N move tasks in parallel (default: 1)",
)
@click.option(
    "-l",
    "--log",
    "log_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Enable logging and write the log to FILE",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    default=False,
    help="Verbose output",
)
@click.option(
    "-r",
    "--prune",
    is_flag=True,
    default=False,
    help="Remove empty directories under the input path after moving",
)
@click.option(
    "-k",
    "--keep-volume",
    is_flag=True,
    default=False,
    help="Keep the input volume mounted, rather than ejecting it",
)
@click.option(
    "-F",
    "--dcim",
    "dcim_folder",
    default=None,
    help='Subfolder of the input volume holding the media (default: "/DCIM")',
)
@click.option(
    "-P",
    "--photo",
    "photo_folder",
    default=None,
    help='Base folder for image files (default: "Photo/Raw")',
)
@click.option(
    "-V",
    "--video",
    "video_folder",
    default=None,
    help='Base folder for video files (default: "Video/Raw")',
)
@click.option(
    "-A",
    "--audio",
    "audio_folder",
    default=None,
    help='Base folder for audio files (default: "Audio/Raw")',
)
@click.version_option(__version__, prog_name="media-organizer")
def organize(
    input_volume: Path,
    output_path: Path,
    dry_run: bool,
    preserve_times: bool,
    jobs: Optional[int],
    log_file: Optional[Path],
    verbose: bool,
    prune: bool,
    keep_volume: bool,
    dcim_folder: Optional[str],
    photo_folder: Optional[str],
    video_folder: Optional[str],
    audio_folder: Optional[str],
) -> None:
    """
    Organize media from INPUT_VOLUME into OUTPUT_PATH.

    Files are sorted by last-modified date into
    CATEGORY/YYYY/YYYY-MM/YYYY-MM-DD, with folders created as needed.

    \b
    Example:
        media-organizer /Volumes/Untitled ~/Documents

    \b
    moves
        /Volumes/Untitled/DCIM/FUJI_1000/DSCF_1001.jpg   (taken 2022-09-05)
    to
        ~/Documents/Photo/Raw/2022/2022-09/2022-09-05/DSCF_1001.jpg

    and then ejects the card.

    \b
    Notes:
        • Video and audio are recognized by extension; anything else is a photo
        • Name clashes get a numeric suffix: DSCF_1001(1).jpg
        • Use --dry-run first to preview the operation
    """
    try:
        config = OrganizerConfig.from_settings(
            input_volume=input_volume,
            output_root=output_path,
            dcim_folder=dcim_folder,
            dry_run=dry_run,
            preserve_times=preserve_times,
            jobs=jobs,
            log_file=log_file,
            verbose=verbose,
            prune=prune,
            keep_volume=keep_volume,
            photo_folder=photo_folder,
            video_folder=video_folder,
            audio_folder=audio_folder,
        )
    except ValidationError as e:
        console.print(f"[red]✗ Invalid configuration:[/red]\n{escape(str(e))}")
        sys.exit(EXIT_CONFIG_ERROR)

    setup_logging(verbose=config.verbose, log_file=config.log_file, console=console)

    input_path = config.input_path
    try:
        files = collect_media_files(input_path)
    except InputPathError as e:
        console.print(f"[red]✗ Error: {escape(str(e))}[/red]")
        sys.exit(EXIT_INPUT_ERROR)

    if not config.dry_run:
        try:
            config.output_root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            console.print(
                f"[red]✗ Error: cannot create output path: {escape(str(e))}[/red]"
            )
            sys.exit(EXIT_INPUT_ERROR)

    if not files:
        _announce(config, f"No files found under '{input_path}'. Nothing to do.")
        if not config.keep_volume:
            _eject(config)
        return

    logger.info(
        f"Starting media organizer: input='{input_path}' "
        f"output='{config.output_root}' total_files={len(files)} "
        f"dry_run={int(config.dry_run)} preserve_times={int(config.preserve_times)} "
        f"jobs={config.jobs} log='{config.log_file or ''}' prune={int(config.prune)}"
    )

    if config.dry_run:
        console.print("[yellow]⚠ DRY RUN MODE - No files will be modified[/yellow]")

    cancel_event = threading.Event()
    mover = FileMover(
        dry_run=config.dry_run,
        preserve_times=config.preserve_times,
        reservations=NameReservations(),
    )
    scheduler = MoveScheduler(
        strategy=config.strategy(),
        output_root=config.output_root,
        mover=mover,
        cancel_event=cancel_event,
    )

    with interruption_handler(cancel_event):
        state = scheduler.run(files, concurrency_limit=config.jobs)

    logger.info(
        f"Move pass complete. total={state.total} "
        f"succeeded={state.succeeded} failed={state.failed}"
    )
    summary = finalize(state)

    if not summary.cancelled:
        if config.prune:
            prune_empty_directories(input_path, dry_run=config.dry_run)
        if not config.keep_volume:
            _eject(config)

    _display_result(summary)

    if summary.failed or summary.cancelled:
        sys.exit(EXIT_FAILURES)


def _announce(config: OrganizerConfig, message: str) -> None:
    """Log a message; also print it when the log is not echoed to the console."""
    logger.info(message)
    if not config.verbose:
        console.print(message)


def _eject(config: OrganizerConfig) -> None:
    if not config.verbose:
        if config.dry_run:
            console.print(f"DRY-RUN {config.input_volume} would be ejected.")
        else:
            console.print(f"{config.input_volume} will be ejected.")
    eject_volume(config.input_volume, dry_run=config.dry_run)


def _display_result(summary: RunSummary) -> None:
    """Display run summary."""
    table = Table(title="Results")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", style="green", justify="right")

    table.add_row("Total files", str(summary.total))
    table.add_row("Succeeded", str(summary.succeeded))
    table.add_row("Failed", str(summary.failed))
    if summary.cancelled:
        table.add_row("Not processed", str(summary.not_dispatched))

    console.print()
    console.print(table)

    if summary.dry_run:
        console.print("\n[yellow]This was a DRY RUN - no files were modified[/yellow]")

    if summary.cancelled:
        console.print(
            "[yellow]Run was interrupted; pruning and eject were skipped[/yellow]"
        )

    if summary.errors:
        console.print("\n[red]Errors:[/red]")
        for error in summary.errors[:10]:  # Show first 10
            console.print(f"  [red]• {escape(error)}[/red]")
        if len(summary.errors) > 10:
            console.print(f"  [dim]... and {len(summary.errors) - 10} more[/dim]")

    console.print(summary.line)


def main() -> None:
    organize()


if __name__ == "__main__":
    main()
