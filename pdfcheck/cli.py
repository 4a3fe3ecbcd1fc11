"""
CLI Interface
=============
Command-line interface for the PDF profile checker.

Usage:
    python -m pdfcheck check <pdf_path> [options]
    python -m pdfcheck batch <directory> [options]
    python -m pdfcheck fonts <pdf_path>
    python -m pdfcheck profiles
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeRemainingColumn,
)
from rich.table import Table

from . import __version__
from .engine import CheckerConfig, ProfileEngine
from .errors import PdfObjectError
from .models import ConformanceReport, ProfileKind
from .pdf.document import PdfDocument
from .profiles.base import STRUCTURAL_ERRORS
from .profiles.registry import PROFILE_ORDER, PROFILE_TEXTS

console = Console()
logger = logging.getLogger(__name__)

PROFILE_CHOICES = [kind.value for kind in PROFILE_ORDER]


@click.group()
@click.version_option(version=__version__, prog_name="pdfcheck")
def cli():
    """PDF Profile Checker — PDF/A-1 and Tagged PDF conformance."""
    pass


@cli.command()
@click.argument("pdf_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--profile", "-P",
    "profiles",
    multiple=True,
    type=click.Choice(PROFILE_CHOICES),
    help="Profile to check (repeatable; defaults to all)",
)
@click.option(
    "--output", "-o",
    default=None,
    help="Directory for the JSON report",
)
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level",
)
@click.option(
    "--log-file",
    default=None,
    help="Path to log file",
)
@click.option(
    "--json-output",
    is_flag=True,
    default=False,
    help="Output only the JSON report to stdout (for programmatic use)",
)
def check(
    pdf_path: str,
    profiles: tuple[str, ...],
    output: str,
    log_level: str,
    log_file: str,
    json_output: bool,
):
    """Check a single PDF against conformance profiles."""

    if json_output:
        # Keep stdout clean for JSON mode
        log_level = "ERROR"

    requested = [ProfileKind(p) for p in profiles] or None
    config = CheckerConfig(
        profiles=requested,
        output_dir=output,
        log_level=log_level,
        log_file=log_file,
    )

    try:
        report = ProfileEngine(config).check(pdf_path)
    except (FileNotFoundError, RuntimeError) as e:
        console.print(f"[red]Error:[/] {e}")
        sys.exit(1)

    if json_output:
        click.echo(json.dumps(
            report.model_dump(mode="json"),
            indent=2,
            ensure_ascii=False,
        ))
    else:
        console.print()
        console.print(
            Panel.fit(
                f"[bold cyan]PDF Profile Checker v{__version__}[/]\n"
                f"[dim]Checked: {os.path.basename(pdf_path)}[/]",
                border_style="cyan",
            )
        )
        _display_report(report)

    wanted = set(requested or PROFILE_ORDER)
    if not all(r.conforms for r in report.results if r.kind in wanted):
        sys.exit(1)


@cli.command()
@click.argument("directory", type=click.Path(exists=True, file_okay=False))
@click.option("--output", "-o", default=None, help="Directory for JSON reports")
@click.option("--log-level", default="WARNING", help="Logging level")
def batch(directory: str, output: str, log_level: str):
    """Check all PDFs in a directory."""

    pdf_files = sorted(Path(directory).glob("*.pdf"))

    if not pdf_files:
        console.print(f"[yellow]No PDF files found in: {directory}[/]")
        return

    console.print()
    console.print(
        Panel.fit(
            f"[bold cyan]Batch Profile Check[/]\n"
            f"[dim]Found {len(pdf_files)} PDFs in: {directory}[/]",
            border_style="cyan",
        )
    )
    console.print()

    engine = ProfileEngine(CheckerConfig(output_dir=output, log_level=log_level))
    results = []
    errors = []

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeRemainingColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("Checking PDFs...", total=len(pdf_files))

        for pdf_file in pdf_files:
            progress.update(task, description=f"Checking: {pdf_file.name}")
            try:
                results.append((pdf_file.name, engine.check(str(pdf_file))))
            except (FileNotFoundError, RuntimeError) as e:
                errors.append((pdf_file.name, str(e)))
            progress.advance(task)

    _display_batch_summary(results, errors)


@cli.command()
@click.argument("pdf_path", type=click.Path(exists=True, dir_okay=False))
def fonts(pdf_path: str):
    """List fonts per resource scope with their ToUnicode status."""

    try:
        document = PdfDocument.open(pdf_path)
    except (FileNotFoundError, RuntimeError) as e:
        console.print(f"[red]Error:[/] {e}")
        sys.exit(1)

    table = Table(title="Fonts", border_style="cyan")
    table.add_column("Scope", style="bold")
    table.add_column("Name")
    table.add_column("Subtype")
    table.add_column("Encoding")
    table.add_column("ToUnicode", justify="center")

    with document:
        try:
            for scope in document.get_resource_scopes():
                font_dict = document.get_dictionary(scope.resources.get("Font"))
                if not font_dict:
                    continue
                for name, ref in font_dict.items():
                    try:
                        font = document.get_dictionary(ref)
                    except STRUCTURAL_ERRORS as e:
                        logger.debug(f"Font {name} in {scope.label} unreadable: {e}")
                        table.add_row(scope.label, name, "[red]unreadable[/]", "-", "-")
                        continue
                    if font is None:
                        continue
                    table.add_row(
                        scope.label,
                        name,
                        _name_or_dash(font.get("Subtype")),
                        _name_or_dash(font.get("Encoding")),
                        "[green]✓[/]" if font.get("ToUnicode") is not None else "[red]✗[/]",
                    )
        except PdfObjectError as e:
            console.print(f"[red]Unreadable font resources:[/] {e}")
            sys.exit(1)

    console.print()
    console.print(table)
    console.print()


@cli.command(name="profiles")
def list_profiles():
    """List the available profiles."""
    table = Table(title="Profiles", border_style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Description")
    for kind in PROFILE_ORDER:
        table.add_row(kind.value, PROFILE_TEXTS[kind])
    console.print(table)


# ─── Display Helpers ──────────────────────────────────────────────────────────


def _name_or_dash(node) -> str:
    try:
        return node.get_string_value()
    except (AttributeError, PdfObjectError):
        return "-"


def _display_report(report: ConformanceReport):
    """Display a conformance report as rich tables."""
    console.print()

    doc = report.document
    table = Table(title="Document Information", border_style="cyan")
    table.add_column("Property", style="bold")
    table.add_column("Value")
    table.add_row("Source PDF", doc.source_pdf)
    table.add_row("Version", doc.pdf_version or "(unknown)")
    table.add_row("Pages", str(doc.page_count))
    table.add_row("Encrypted", "yes" if doc.encrypted else "no")
    table.add_row("File Hash", doc.file_hash[:16] + "...")
    console.print(table)
    console.print()

    results = Table(title="Profile Results", border_style="green")
    results.add_column("Profile", style="bold")
    results.add_column("Status", justify="center")
    results.add_column("Reasons", justify="right")
    for result in report.results:
        results.add_row(
            result.text,
            "[green]✓[/]" if result.conforms else "[red]✗[/]",
            str(len(result.reasons)),
        )
    console.print(results)
    console.print()

    for result in report.results:
        if not result.reasons:
            continue
        reasons = Table(title=result.text, border_style="yellow")
        reasons.add_column("Code", style="bold")
        reasons.add_column("Explanation")
        for reason in result.reasons:
            reasons.add_row(reason.label, reason.explanation)
        console.print(reasons)
        console.print()


def _display_batch_summary(results, errors):
    """Display batch processing summary."""
    console.print()

    table = Table(title="Batch Check Summary", border_style="cyan")
    table.add_column("PDF", style="bold")
    for kind in PROFILE_ORDER:
        table.add_column(kind.value, justify="center")

    conforming = 0
    for name, report in results:
        cells = []
        for kind in PROFILE_ORDER:
            result = report.result_for(kind)
            if result is None:
                cells.append("-")
            else:
                cells.append("[green]✓[/]" if result.conforms else "[red]✗[/]")
        if report.conforming_profiles:
            conforming += 1
        table.add_row(name, *cells)

    for name, error in errors:
        table.add_row(name, *(["[red]✗ FAILED[/]"] + ["-"] * (len(PROFILE_ORDER) - 1)))

    console.print(table)
    console.print()
    console.print(
        f"[bold]Total:[/] {len(results)} PDFs checked, "
        f"{conforming} conform to at least one profile, "
        f"{len(errors)} failures"
    )
    console.print()


# ─── Entry point (for python -m pdfcheck.cli) ─────────────────────────────────


if __name__ == "__main__":
    cli()
