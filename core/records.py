"""File and disk records used by the allocator.

``FileRecord`` is an immutable value created once per discovered file.
``Disk`` is the mutable container a run fills; it holds references to the
collector's records rather than copies.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class FileRecord:
    """One input file: its path as discovered and its size in bytes."""

    name: str
    size: int

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("file record needs a name")
        if self.size < 0:
            raise ValueError(f"{self.name!r} has a negative size ({self.size})")


@dataclass
class Disk:
    """A fixed-capacity disk being filled.

    Attributes:
        id: Sequential identity within an allocation run, starting at 1.
        capacity: Configured disk size in bytes.
        free: Remaining bytes; always ``capacity - sum(file sizes)``.
        files: Assigned records in assignment order.
    """

    id: int
    capacity: int
    free: int = field(init=False)
    files: list[FileRecord] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.free = self.capacity - sum(f.size for f in self.files)

    def fits(self, record: FileRecord) -> bool:
        # An exact fit is a fit.
        return self.free >= record.size

    def add(self, record: FileRecord) -> None:
        if not self.fits(record):
            raise ValueError(f"{record.name!r} ({record.size}) does not fit disk #{self.id}")
        self.files.append(record)
        self.free -= record.size

    @property
    def used(self) -> int:
        return self.capacity - self.free

    @property
    def percent_free(self) -> int:
        """Free space as a truncated whole percentage of capacity."""
        return self.free * 100 // self.capacity


__all__ = ["FileRecord", "Disk"]
