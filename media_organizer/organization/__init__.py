"""
Organization module for relocating media files.

Classifies files, plans dated destination directories, moves files with
collision-free naming and aggregates the results.
"""

from .housekeeping import eject_volume, prune_empty_directories
from .mover import FileMover
from .scheduler import MoveScheduler
from .strategy import NameReservations, OrganizationStrategy, resolve_name
from .summary import RunSummary, finalize

__all__ = [
    "FileMover",
    "MoveScheduler",
    "NameReservations",
    "OrganizationStrategy",
    "RunSummary",
    "eject_volume",
    "finalize",
    "prune_empty_directories",
    "resolve_name",
]
