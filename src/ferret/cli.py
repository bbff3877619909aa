"""Command line interface for Ferret."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from ferret.config import AppConfig, ConfigError
from ferret.index.indexer import Indexer
from ferret.index.writer import write_facts


console = Console()
app = typer.Typer(help="Ferret - TF-IDF indexer producing a Prolog fact base")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


@app.callback()
def main() -> None:
    """Index source trees into TF-IDF facts."""


@app.command()
def index(
    directories: List[Path] = typer.Argument(
        ...,
        help="Directories to index.",
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
    ),
    output: Path = typer.Option(AppConfig().output_path, "--output", "-o", help="Fact base path"),
    min_token_length: int = typer.Option(
        AppConfig().min_token_length, help="Shortest token kept, in characters"
    ),
    max_file_size: int = typer.Option(
        AppConfig().max_file_size_mb, help="Largest file indexed, in megabytes"
    ),
    workers: Optional[int] = typer.Option(None, help="Worker threads (default: CPU count)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Index one or more directories and write the fact base."""
    _setup_logging(verbose)
    config = AppConfig(
        directories=list(directories),
        min_token_length=min_token_length,
        max_file_size_mb=max_file_size,
        output_path=output,
        workers=workers,
    )
    try:
        config.validate()
    except ConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc

    console.print("Ferret indexer starting...")
    indexer = Indexer.from_config(config)
    result = indexer.index(config.directories)
    if not result.documents:
        console.print("[yellow]No indexable files found.[/yellow]")

    resolved_output = config.resolve_output_path(Path.cwd())
    try:
        facts = write_facts(resolved_output, result)
    except OSError as exc:
        console.print(f"[red]Cannot write {resolved_output}: {exc}[/red]")
        raise typer.Exit(code=1) from exc

    stats = indexer.stats
    table = Table(show_header=True, header_style="bold magenta")
    for column in ("Files", "Documents", "Empty", "Unreadable", "Vocabulary", "Facts"):
        table.add_column(column)
    table.add_row(
        str(stats.files),
        str(stats.documents),
        str(stats.empty),
        str(stats.unreadable),
        str(len(result.vocabulary)),
        str(facts),
    )
    console.print(table)
    console.print(f"Fact base written to [bold]{resolved_output}[/bold]")


if __name__ == "__main__":  # pragma: no cover
    app()
