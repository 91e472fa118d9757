"""File collector.

Walks the directories given on the command line and builds the list of
``FileRecord`` values the allocator consumes. The walk is strict:

- Entries are ``stat``-ed following symlinks; a failing ``stat`` is fatal
- Regular files larger than the disk capacity are rejected up front
- Anything that is neither a regular file nor a directory is rejected
- Without ``recursive`` subdirectories are skipped entirely

Entries are visited in name order so the allocator's tie-breaks do not
depend on the order the filesystem happens to return them in.
"""

from __future__ import annotations

import os
import stat
from collections.abc import Iterable
from pathlib import Path

import structlog

from core.errors import OversizedFile, UnreadablePath, UnsupportedEntry
from core.records import FileRecord
from tools.units import format_size

logger = structlog.get_logger(__name__)


def _list_dir(root: Path) -> list[str]:
    try:
        with os.scandir(root) as it:
            return sorted(entry.name for entry in it)
    except OSError as e:
        raise UnreadablePath(f"can't open directory '{root}': {e.strerror}") from e


def _walk(root: Path, *, recursive: bool, capacity: int, out: list[FileRecord]) -> None:
    """Depth-first walk appending records to ``out``."""
    for name in _list_dir(root):
        path = root / name
        try:
            st = os.stat(path)
        except OSError as e:
            raise UnreadablePath(f"can't access '{path}': {e.strerror}") from e

        if stat.S_ISREG(st.st_mode):
            if st.st_size > capacity:
                raise OversizedFile(str(path), format_size(st.st_size))
            out.append(FileRecord(name=str(path), size=st.st_size))
        elif stat.S_ISDIR(st.st_mode):
            if recursive:
                _walk(path, recursive=recursive, capacity=capacity, out=out)
        else:
            raise UnsupportedEntry(str(path))


def collect_files(root: Path | str, *, recursive: bool, capacity: int) -> list[FileRecord]:
    """Collect regular files under ``root``.

    Args:
        root: Directory to read. Repeated and trailing slashes are dropped.
        recursive: Walk subdirectories too.
        capacity: Disk size in bytes; larger files are rejected.

    Returns:
        Records in walk order.

    Raises:
        UnreadablePath: ``root`` or an entry cannot be read.
        OversizedFile: a file can never fit on a disk.
        UnsupportedEntry: an entry is not a regular file or directory.
    """
    root = Path(root)
    files: list[FileRecord] = []
    _walk(root, recursive=recursive, capacity=capacity, out=files)
    logger.info("files_collected", root=str(root), count=len(files))
    return files


def collect_paths(
    paths: Iterable[Path | str], *, recursive: bool, capacity: int
) -> list[FileRecord]:
    """Collect from several roots, keeping argument order."""
    files: list[FileRecord] = []
    for root in paths:
        files.extend(collect_files(root, recursive=recursive, capacity=capacity))
    return files


__all__ = ["collect_files", "collect_paths"]
