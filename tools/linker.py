"""Hard-link materialization of an allocation.

Each disk becomes a directory ``<destdir>/<NNNN>`` and every file assigned to
it is hard-linked beneath that directory, recreating the file's original
relative path. Links already made are left in place when a later one fails.
"""

from __future__ import annotations

import os
import stat
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

import structlog

from core.allocator import MAX_DISKS
from core.errors import DiskIdTooLarge, LinkFailed, MaterializeError, NotADirectory
from core.records import Disk

logger = structlog.get_logger(__name__)

DIR_MODE = 0o700


@dataclass(frozen=True)
class LinkResult:
    src: Path
    dst: Path
    disk_dir: Path


def disk_dirname(disk: Disk) -> str:
    """Zero-padded four digit directory name for ``disk``."""
    if disk.id > MAX_DISKS:
        raise DiskIdTooLarge(disk.id)
    return f"{disk.id:04d}"


def _make_dir(path: Path) -> None:
    try:
        st = os.stat(path)
    except OSError:
        pass
    else:
        # An existing entry must be a directory.
        if not stat.S_ISDIR(st.st_mode):
            raise NotADirectory(str(path))
        return
    try:
        os.mkdir(path, DIR_MODE)
    except OSError as e:
        raise MaterializeError(f"can't make directory '{path}': {e.strerror}") from e


def make_dirs(path: Path | str) -> None:
    """Create ``path`` and any missing parents, one component at a time."""
    path = Path(path)
    for parent in reversed(path.parents):
        if parent == Path(parent.anchor) or parent == Path("."):
            continue
        _make_dir(parent)
    _make_dir(path)


def _relative_name(name: str) -> Path:
    # Re-rooted under the disk directory: no anchor, no "..".
    p = Path(name)
    parts = p.parts[1:] if p.anchor else p.parts
    return Path(*[part for part in parts if part != ".."])


def link_disk(
    disk: Disk,
    destdir: Path | str,
    on_link: Callable[[LinkResult], None] | None = None,
) -> list[LinkResult]:
    """Hard-link every file on ``disk`` under ``destdir/<NNNN>``.

    ``on_link`` is called right after each link is made.
    """
    disk_dir = Path(destdir) / disk_dirname(disk)
    results: list[LinkResult] = []
    for record in disk.files:
        src = Path(record.name)
        dst = disk_dir / _relative_name(record.name)
        make_dirs(dst.parent)
        try:
            os.link(src, dst)
        except OSError as e:
            raise LinkFailed(str(src), str(dst), e.strerror or str(e)) from e
        logger.debug("file_linked", src=str(src), dst=str(dst), disk_id=disk.id)
        res = LinkResult(src=src, dst=dst, disk_dir=disk_dir)
        if on_link is not None:
            on_link(res)
        results.append(res)
    return results


def link_disks(
    disks: Iterable[Disk],
    destdir: Path | str,
    on_link: Callable[[LinkResult], None] | None = None,
) -> list[LinkResult]:
    """Link all disks in order; stops at the first failure."""
    results: list[LinkResult] = []
    for disk in disks:
        results.extend(link_disk(disk, destdir, on_link=on_link))
    return results


__all__ = ["DIR_MODE", "LinkResult", "disk_dirname", "make_dirs", "link_disk", "link_disks"]
