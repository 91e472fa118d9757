"""First-Fit Decreasing allocation of files onto fixed-size disks.

Files are sorted largest first, then each one goes to the first disk (in
creation order) with enough free space; a new disk is opened only when none
fits. Large files fill disks early and the smaller ones usually make a good
final fit. This is a greedy heuristic, not an optimal packing: a file is
never moved once placed, and the run is ``O(files * disks)``.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterable, Sequence

import structlog

from core.errors import InvalidCapacity, OversizedFile, TooManyDisks
from core.records import Disk, FileRecord
from tools.units import format_size

logger = structlog.get_logger(__name__)

# Disk directories are named with four digits.
MAX_DISKS = 9999


def sort_descending(files: Iterable[FileRecord]) -> list[FileRecord]:
    """Sort by size, largest first; equal sizes keep their input order."""
    # sorted() is stable, and stays stable with reverse=True.
    return sorted(files, key=lambda f: f.size, reverse=True)


class Allocator:
    """Assigns file records to disks of a fixed capacity.

    Args:
        capacity: Disk size in bytes; must be positive.
        max_disks: Ceiling on the number of disks a run may produce, or
            ``None`` for no ceiling.
    """

    def __init__(self, capacity: int, *, max_disks: int | None = MAX_DISKS) -> None:
        if capacity <= 0:
            raise InvalidCapacity(capacity)
        self.capacity = capacity
        self.max_disks = max_disks

    def allocate(self, files: Sequence[FileRecord]) -> list[Disk]:
        """Place every file on exactly one disk.

        Disk ids start at 1 on every call, so the same input always yields
        the same disks.

        Raises:
            OversizedFile: a file is larger than the disk capacity.
            TooManyDisks: the run needs more than ``max_disks`` disks.
        """
        for record in files:
            if record.size > self.capacity:
                raise OversizedFile(record.name, format_size(record.size))

        ids = itertools.count(1)
        disks: list[Disk] = []
        for record in sort_descending(files):
            target = self._first_fit(disks, record)
            if target is None:
                target = Disk(id=next(ids), capacity=self.capacity)
                disks.append(target)
                logger.debug("disk_created", disk_id=target.id, first_file=record.name)
            target.add(record)

        logger.info("allocation_complete", files=len(files), disks=len(disks))
        if self.max_disks is not None and len(disks) > self.max_disks:
            raise TooManyDisks(len(disks), self.max_disks)
        return disks

    @staticmethod
    def _first_fit(disks: Sequence[Disk], record: FileRecord) -> Disk | None:
        for disk in disks:
            if disk.fits(record):
                return disk
        return None


def allocate(
    files: Sequence[FileRecord], capacity: int, *, max_disks: int | None = MAX_DISKS
) -> list[Disk]:
    """Convenience wrapper around ``Allocator(capacity).allocate(files)``."""
    return Allocator(capacity, max_disks=max_disks).allocate(files)


__all__ = ["MAX_DISKS", "Allocator", "allocate", "sort_descending"]
