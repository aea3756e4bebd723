"""Command line interface for filesniffer."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from filesniffer.config import SnifferConfig
from filesniffer.exceptions import SnifferError
from filesniffer.search.collectors import as_dict, as_list
from filesniffer.search.matcher import compile_criterion
from filesniffer.search.sniffer import FileSniffer
from filesniffer.utils.binary import classify as classify_file
from filesniffer.utils.files import iter_files


console = Console()
app = typer.Typer(help="filesniffer - search files line by line")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _build_sniffer(
    paths: List[Path], *, depth: int, gzip: bool, limit: Optional[int]
) -> FileSniffer:
    config = SnifferConfig.from_env()
    sniffer = FileSniffer.create(*paths, config=config)
    sniffer.depth(depth)
    if gzip:
        sniffer.gzip()
    if limit is not None:
        sniffer.limit(limit)
    return sniffer


@app.command()
def search(
    pattern: str = typer.Argument(..., help="Text or regular expression to look for"),
    paths: Optional[List[Path]] = typer.Argument(
        None, help="Files or directories to search (default: current directory)."
    ),
    regex: bool = typer.Option(False, "--regex", "-e", help="Treat PATTERN as a regular expression"),
    ignore_case: bool = typer.Option(False, "--ignore-case", "-i", help="Case-insensitive matching"),
    depth: int = typer.Option(0, "--depth", "-d", min=0, help="Directory recursion depth"),
    gzip: bool = typer.Option(False, "--gzip", "-z", help="Search inside .gz files"),
    group: bool = typer.Option(False, "--group", help="Summarise matches per file"),
    files_only: bool = typer.Option(False, "--files-only", "-l", help="Only list matching files"),
    limit: Optional[int] = typer.Option(None, "--limit", min=1, help="Maximum files scanned at once"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Print every line matching PATTERN."""
    _setup_logging(verbose)
    if not pattern:
        raise typer.BadParameter("Search string or pattern must be specified")
    try:
        criterion = compile_criterion(pattern, regex=regex, ignore_case=ignore_case)
    except re.error as exc:
        raise typer.BadParameter(f"Invalid pattern: {exc}") from exc

    sniffer = _build_sniffer(paths or [], depth=depth, gzip=gzip, limit=limit)
    sniffer.collect(as_dict() if group else as_list())
    sniffer.on(
        "error", lambda err: console.print(str(err), style="yellow", markup=False, soft_wrap=True)
    )

    try:
        results = sniffer.find_sync(criterion)
    except SnifferError as exc:
        console.print(str(exc), style="red", markup=False, soft_wrap=True)
        raise typer.Exit(code=1) from exc

    if not results:
        console.print("[yellow]No matches found.[/yellow]")
        return

    if files_only:
        for filename in sniffer.outcome.matched_files:
            console.print(filename, markup=False, highlight=False, soft_wrap=True)
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Path")
    if group:
        table.add_column("Matches", justify="right")
        table.add_column("First line")
        for path, lines in results.items():
            table.add_row(path, str(len(lines)), lines[0][:180])
    else:
        table.add_column("Line")
        for match in results:
            table.add_row(match.path, match.line[:180])

    console.print(table)
    console.print(
        f"Scanned: {sniffer.outcome.files_scanned}, "
        f"matched: {len(sniffer.outcome.matched_files)}, "
        f"errors: {len(sniffer.outcome.errors)}"
    )


@app.command()
def classify(
    inputs: List[Path] = typer.Argument(..., help="Files or directories to classify"),
    depth: int = typer.Option(0, "--depth", "-d", min=0, help="Directory recursion depth"),
    gzip: bool = typer.Option(False, "--gzip", "-z", help="Treat .gz files as text"),
) -> None:
    """Show whether each file would be scanned as text or skipped as binary."""
    files = list(iter_files(inputs, depth=depth))
    if not files:
        console.print("[yellow]No files found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Path")
    table.add_column("Kind")
    for path in files:
        try:
            kind = classify_file(path, gzip_mode=gzip)
        except OSError as exc:
            kind = f"[red]error: {exc.strerror or exc}[/red]"
        table.add_row(path, kind)
    console.print(table)


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
) -> None:
    """Start the HTTP search API."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    from filesniffer.web.app import app as web_app

    console.print(f"Starting search API on http://{host}:{port}")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
