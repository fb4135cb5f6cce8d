"""Core types shared across the organizer."""

from .types import Category, MediaFile, MoveOutcome, MoveStatus, RunState

__all__ = [
    "Category",
    "MediaFile",
    "MoveOutcome",
    "MoveStatus",
    "RunState",
]
