"""diskfit CLI entrypoint.

Fits the files found under one or more directories onto as few disks of a
given size as the greedy allocator manages, then either:

- prints a manifest per disk (default)
- prints the number of disks (``-n``)
- hard-links each disk's files into ``destdir/NNNN`` (``-l destdir``)

Any failure prints a single ``fit: <message>`` line to stderr and exits 1.
"""

from __future__ import annotations

import sys
from pathlib import Path

import structlog
import typer

from core.allocator import Allocator
from core.errors import FitError, NoFilesFound
from core.log_config import configure_logging
from schemas.plan import build_plan
from tools.config import find_config, resolve_size
from tools.file_scanner import collect_paths
from tools.linker import LinkResult, link_disks
from tools.report import count_line, manifest_lines

app = typer.Typer(
    add_completion=False,
    help="Fit files onto fixed-size disks.",
    context_settings={"help_option_names": ["-h", "--help"]},
)
logger = structlog.get_logger(__name__)


@app.command()
def fit(
    paths: list[Path] = typer.Argument(..., help="Directories holding the files to fit"),
    size: str | None = typer.Option(
        None, "-s", "--size", help="Disk size in k, m, g or t (or a preset name, e.g. dvd5)"
    ),
    link: Path | None = typer.Option(
        None, "-l", "--link", help="Directory to link files into; if omitted just print the disks"
    ),
    count: bool = typer.Option(False, "-n", "--count", help="Show the number of disks it takes"),
    recursive: bool = typer.Option(False, "-r", "--recursive", help="Recursive search of the paths"),
    out: Path | None = typer.Option(None, "--out", help="Write the plan JSON to file"),
    config: Path | None = typer.Option(None, "--config", help="YAML or JSON config file"),
    verbose: int = typer.Option(0, "-v", "--verbose", count=True, help="Log to stderr (-vv for debug)"),
) -> None:
    """Fit the files under PATHS onto disks of the given size."""
    configure_logging(verbose)
    try:
        _run(
            paths=paths,
            size=size,
            link=link,
            count=count,
            recursive=recursive,
            out=out,
            config=config,
        )
    except FitError as e:
        typer.echo(f"fit: {e}", err=True)
        raise typer.Exit(code=1)


def _run(
    *,
    paths: list[Path],
    size: str | None,
    link: Path | None,
    count: bool,
    recursive: bool,
    out: Path | None,
    config: Path | None,
) -> None:
    cfg = find_config(config)
    size_text = size if size is not None else cfg.size
    if size_text is None:
        raise typer.BadParameter("disk size is required", param_hint="'-s' / '--size'")

    # Capacity is validated before anything touches the filesystem.
    allocator = Allocator(resolve_size(size_text, cfg), max_disks=cfg.max_disks)
    files = collect_paths(paths, recursive=recursive or cfg.recursive, capacity=allocator.capacity)
    if not files:
        raise NoFilesFound()

    disks = allocator.allocate(files)

    if out is not None:
        plan = build_plan(disks, allocator.capacity)
        try:
            out.parent.mkdir(parents=True, exist_ok=True)
            out.write_text(plan.model_dump_json(indent=2))
        except OSError as e:
            raise FitError(f"can't write plan '{out}': {e.strerror}") from e
        logger.info("plan_written", path=str(out), plan_id=plan.id)

    if count:
        typer.echo(count_line(len(disks)))
        return

    if link is not None:

        def _report(res: LinkResult) -> None:
            typer.echo(f"{res.src} -> {res.disk_dir}")

        link_disks(disks, link, on_link=_report)
        return

    for line in manifest_lines(disks):
        typer.echo(line)


def main() -> int:
    """Entry point for the ``fit`` script and ``python -m cli.main``."""
    app()
    return 0


if __name__ == "__main__":
    sys.exit(main())
