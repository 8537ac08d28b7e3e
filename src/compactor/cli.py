"""CLI interface for Compactor."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from compactor.core.evaluator import COMPRESSIBLE_MIN_SIZE, SKIP_EXTENSIONS, evaluate
from compactor.core.serializer import to_json
from compactor.models.folder_report import FolderReport
from compactor.settings import Settings, is_count
from compactor.utils import bytes_to_human, format_ratio


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")
    logging.getLogger("compactor").setLevel(level)


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
def main(verbose: int) -> None:
    """Compactor: find candidates for transparent filesystem compression."""
    _setup_logging(verbose)


# ── scan ─────────────────────────────────────────────────────────────────

@main.command()
@click.argument("path", type=click.Path(exists=True, file_okay=True, dir_okay=True, path_type=Path))
@click.option("--json/--summary", "as_json", default=True, help="Print the JSON report (default) or a human-readable summary")
@click.option("--indent", type=click.IntRange(min=0), default=None, help="Indent JSON output")
@click.option("--top", type=click.IntRange(min=0), default=None, help="Files listed per section in the summary")
def scan(path: Path, as_json: bool, indent: int | None, top: int | None) -> None:
    """Report logical vs. physical size of every file under PATH."""
    settings = Settings()
    report = evaluate(path)

    if as_json:
        if indent is None:
            indent = settings.get_count("output.indent", nullable=True)
        click.echo(to_json(report, indent=indent))
        return

    if top is None:
        top = settings.get_count("summary.top")
    _print_summary(report, top)


def _print_summary(report: FolderReport, top: int) -> None:
    click.echo(f"\n{click.style(str(report.path), bold=True)}\n")
    click.echo(f"  Logical size:   {bytes_to_human(report.logical_size)}")
    click.echo(f"  Physical size:  {bytes_to_human(report.physical_size)}")
    saved_color = "green" if report.saved_bytes > 0 else "bright_black"
    click.echo(f"  Saved on disk:  {click.style(bytes_to_human(report.saved_bytes), fg=saved_color, bold=True)}")
    click.echo()

    sections = (
        ("Compressed", report.compressed, "green"),
        ("Compressible", report.compressible, "yellow"),
        ("Skipped", report.skipped, "bright_black"),
    )
    for label, records, color in sections:
        size = sum(r.logical_size for r in records)
        click.echo(
            f"  {click.style(f'{label:14s}', fg=color, bold=True)}"
            f"{len(records):>8,} files  {bytes_to_human(size):>10s}"
        )

    if report.compressed and top:
        click.echo(f"\n  {click.style('Best compressed:', bold=True)}")
        for record in report.compressed[:top]:
            click.echo(
                f"    {format_ratio(record.ratio):>6s}  "
                f"{bytes_to_human(record.logical_size):>10s} → {bytes_to_human(record.physical_size):>10s}  "
                f"{record.path}"
            )

    if report.compressible and top:
        largest = sorted(report.compressible, key=lambda r: r.logical_size, reverse=True)
        click.echo(f"\n  {click.style('Largest compressible:', bold=True)}")
        for record in largest[:top]:
            click.echo(f"    {bytes_to_human(record.logical_size):>10s}  {record.path}")

    click.echo(
        f"\nCompressible candidates: "
        f"{click.style(bytes_to_human(report.compressible_bytes), fg='yellow', bold=True)}\n"
    )


# ── extensions ───────────────────────────────────────────────────────────

@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def extensions(as_json: bool) -> None:
    """List file extensions never reported as compressible."""
    exts = sorted(SKIP_EXTENSIONS)
    if as_json:
        click.echo(json.dumps({"min_size": COMPRESSIBLE_MIN_SIZE, "skip_extensions": exts}, indent=2))
        return

    click.echo(f"Files of {COMPRESSIBLE_MIN_SIZE} bytes or less are always skipped.")
    click.echo("Skipped extensions:\n")
    for ext in exts:
        click.echo(f"  .{ext}")


# ── config ───────────────────────────────────────────────────────────────

@main.group()
def config() -> None:
    """Presentation settings."""


@config.command("show")
def config_show() -> None:
    """Show effective settings."""
    settings = Settings()
    click.echo(f"  {click.style('File:', bold=True)}           {settings.path}")
    click.echo(f"  {click.style('output.indent:', bold=True)}  {settings.get('output.indent')}")
    click.echo(f"  {click.style('summary.top:', bold=True)}    {settings.get('summary.top')}")


@config.command("set")
@click.argument("key", type=click.Choice(["output.indent", "summary.top"]))
@click.argument("value")
def config_set(key: str, value: str) -> None:
    """Set KEY to VALUE (an integer, or 'null' to reset output.indent)."""
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        parsed = value

    resets_indent = parsed is None and key == "output.indent"
    if not (resets_indent or is_count(parsed)):
        click.echo(f"Invalid value for {key}: {value!r} (expected a non-negative integer)", err=True)
        sys.exit(1)

    Settings().set(key, parsed)
    click.echo(f"{key} = {json.dumps(parsed)}")
