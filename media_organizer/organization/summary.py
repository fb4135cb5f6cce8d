"""
Run summary aggregation.
"""

import logging
from typing import List

from pydantic import BaseModel, Field

from ..core.types import RunState

logger = logging.getLogger(__name__)


class RunSummary(BaseModel):
    """End-of-run counters."""

    total: int = 0
    succeeded: int = 0
    failed: int = 0
    not_dispatched: int = 0
    cancelled: bool = False
    dry_run: bool = False
    errors: List[str] = Field(default_factory=list)

    @property
    def line(self) -> str:
        """Human readable one-line summary."""
        return (
            f"Done!  Total files: {self.total} "
            f"Succeeded: {self.succeeded} Failed: {self.failed}"
        )


def finalize(state: RunState) -> RunSummary:
    """
    Aggregate a finished run.

    Emits one ``Completed.`` log line.

    Args:
        state: Run state returned by the scheduler

    Returns:
        Summary of the run
    """
    summary = RunSummary(
        total=state.total,
        succeeded=state.succeeded,
        failed=state.failed,
        not_dispatched=state.not_dispatched,
        cancelled=state.cancelled,
        dry_run=state.dry_run,
        errors=[
            f"{outcome.source_path}: {outcome.error}"
            for outcome in state.outcomes
            if not outcome.succeeded
        ],
    )

    logger.info(
        f"Completed. Total files: {summary.total} "
        f"Succeeded: {summary.succeeded} Failed: {summary.failed}"
    )
    return summary
