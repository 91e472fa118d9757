"""Plain-text rendering of allocation results.

Pure functions: callers decide where the lines go.
"""

from __future__ import annotations

from collections.abc import Iterable

from core.records import Disk
from tools.units import format_size


def count_line(count: int) -> str:
    return f"{count} disk{'s' if count > 1 else ''}."


def disk_header(disk: Disk) -> str:
    return f"Disk #{disk.id}, {disk.percent_free}% ({format_size(disk.free)}) free:"


def disk_manifest(disk: Disk) -> list[str]:
    """Header boxed in dashes, one ``size name`` line per file, blank line."""
    header = disk_header(disk)
    rule = "-" * len(header)
    lines = [rule, header, rule]
    lines.extend(f"{format_size(f.size):>10} {f.name}" for f in disk.files)
    lines.append("")
    return lines


def manifest_lines(disks: Iterable[Disk]) -> list[str]:
    out: list[str] = []
    for disk in disks:
        out.extend(disk_manifest(disk))
    return out


__all__ = ["count_line", "disk_header", "disk_manifest", "manifest_lines"]
