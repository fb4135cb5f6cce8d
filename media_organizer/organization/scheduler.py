"""
Scheduler for the move phase.

Plans a destination for every discovered file and drives the mover either
sequentially or with a bounded number of concurrent moves.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
)

from ..core.types import MediaFile, MoveOutcome, MoveStatus, RunState
from ..shared.media_utils import classify
from .mover import FileMover
from .strategy import OrganizationStrategy

logger = logging.getLogger(__name__)
console = Console()


class MoveScheduler:
    """Dispatch moves for a batch of media files."""

    def __init__(
        self,
        strategy: OrganizationStrategy,
        output_root: Path,
        mover: Optional[FileMover] = None,
        cancel_event: Optional[threading.Event] = None,
        show_progress: bool = True,
    ):
        """
        Initialize scheduler.

        Args:
            strategy: Destination layout
            output_root: Root of the organized library
            mover: Mover used for every file (defaults to a plain move)
            cancel_event: Once set, no further moves are dispatched
            show_progress: Show a progress bar in sequential mode
        """
        self.strategy = strategy
        self.output_root = Path(output_root)
        self.mover = mover or FileMover()
        self.cancel_event = cancel_event or threading.Event()
        self.show_progress = show_progress

    def plan(self, media_file: MediaFile) -> Path:
        """Target directory for a file, from its category and modification date."""
        category = classify(media_file.extension)
        return self.strategy.get_target_directory(
            self.output_root, category, media_file.modified
        )

    def run(
        self, files: Sequence[MediaFile], concurrency_limit: int = 1
    ) -> RunState:
        """
        Move every file, respecting the concurrency limit.

        Args:
            files: Files in enumeration order
            concurrency_limit: Maximum moves in flight; 1 or less is sequential

        Returns:
            Final run state. When cancelled, files never dispatched are not
            counted as succeeded or failed.
        """
        state = RunState(total=len(files), dry_run=self.mover.dry_run)
        planned = [(media_file, self.plan(media_file)) for media_file in files]

        if concurrency_limit <= 1:
            self._run_sequential(planned, state)
        else:
            self._run_concurrent(planned, state, concurrency_limit)

        # An interrupt during the last move still counts as a cancelled run
        state.cancelled = self.cancel_event.is_set()
        logger.debug(
            f"Run finished: total={state.total} succeeded={state.succeeded} "
            f"failed={state.failed} cancelled={state.cancelled}"
        )
        return state

    def _run_sequential(
        self, planned: List[Tuple[MediaFile, Path]], state: RunState
    ) -> None:
        with Progress(
            SpinnerColumn(),
            MofNCompleteColumn(),
            BarColumn(),
            TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
            TextColumn("{task.description}"),
            console=console,
            disable=not self.show_progress,
        ) as progress:
            task = progress.add_task("Moving files...", total=len(planned))

            for media_file, target_dir in planned:
                if self.cancel_event.is_set():
                    logger.info("Cancellation requested, not dispatching further moves")
                    break

                progress.update(task, description=str(media_file.source_path))
                state.record(self._move_guarded(media_file, target_dir))
                progress.advance(task)

    def _run_concurrent(
        self,
        planned: List[Tuple[MediaFile, Path]],
        state: RunState,
        limit: int,
    ) -> None:
        gate = threading.BoundedSemaphore(limit)
        dispatched: List[Tuple[MediaFile, Future]] = []

        logger.debug(f"Using up to {limit} concurrent moves")

        with ThreadPoolExecutor(
            max_workers=limit, thread_name_prefix="mover"
        ) as executor:
            for media_file, target_dir in planned:
                # Blocks while `limit` moves are in flight
                gate.acquire()
                if self.cancel_event.is_set():
                    gate.release()
                    logger.info("Cancellation requested, not dispatching further moves")
                    break

                future = executor.submit(self._move_guarded, media_file, target_dir)
                future.add_done_callback(lambda _: gate.release())
                dispatched.append((media_file, future))

        # Executor exit has joined every dispatched move
        for _, future in dispatched:
            state.record(future.result())

    def _move_guarded(self, media_file: MediaFile, target_dir: Path) -> MoveOutcome:
        """Run one move; an unexpected exception becomes a failed outcome."""
        try:
            return self.mover.move_one(media_file.source_path, target_dir)
        except Exception as e:
            logger.error(f"ERROR: move of '{media_file.source_path}' crashed: {e}")
            return MoveOutcome(
                source_path=media_file.source_path,
                status=MoveStatus.FAILURE,
                method=self.mover.method,
                dry_run=self.mover.dry_run,
                error=str(e),
            )
