"""Dependency command: imports, unused imports, cycles and the graph."""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from ..dependencies import DependencyReport
from ..exceptions import CodeshapeError
from ..logging_config import setup_logging
from . import app
from ._common import console, open_session, print_json, relative, resolve_config, styled


@app.command()
def deps(
    path: Path = typer.Argument(
        Path("."),
        help="Path to the project directory",
        exists=True,
        file_okay=False,
        dir_okay=True,
    ),
    fmt: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich, json (report plus graph) or dot (Graphviz)",
    ),
    include_external: bool = typer.Option(
        False,
        "--include-external",
        help="Add package imports to the graph as leaf nodes",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show every file"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress logging"),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
):
    """
    Analyze imports and exports, find unused imports and circular dependencies.

    [bold cyan]Examples:[/bold cyan]

      codeshape deps ./my-app

      codeshape deps . --format dot | dot -Tsvg > deps.svg
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    if fmt not in ("rich", "json", "dot"):
        console.print(f"[red]Error:[/red] unknown format '{fmt}' (expected rich, json or dot)")
        raise typer.Exit(1)

    try:
        settings = resolve_config(
            config=config, include_external=include_external, verbose=verbose, quiet=quiet
        )
        session = open_session(path, settings)
        report = session.analyze_project()

        if fmt == "dot":
            print(session.export_dot(), end="")
        elif fmt == "json":
            payload = report.to_dict()
            payload["graph"] = session.visualization_data()
            print_json(payload)
        else:
            _output_rich(report, path, verbose=verbose)

    except typer.Exit:
        raise
    except CodeshapeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except Exception as e:
        logger.exception("Unexpected error")
        console.print(f"[red]Unexpected error:[/red] {e}")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)


def _output_rich(report: DependencyReport, root: Path, verbose: bool = False):
    console.print()
    console.print(
        f"  [bold]{report.total_files}[/bold] files, "
        f"[bold]{report.total_imports}[/bold] imports, "
        f"[bold]{report.total_exports}[/bold] exports, "
        f"[bold]{report.unused_imports}[/bold] unused imports"
    )
    console.print()

    if report.circular_dependencies:
        console.print("[bold red]Circular Dependencies[/bold red]")
        for cycle in report.circular_dependencies:
            chain = " -> ".join(relative(p, root) for p in cycle.cycle + cycle.cycle[:1])
            console.print(f"  {styled(cycle.severity, chain)}")
        console.print()

    unused = [r for r in report.results if r.analysis.unused_imports]
    if unused:
        table = Table(title="Unused Imports")
        table.add_column("File", style="cyan")
        table.add_column("Import")
        for result in unused:
            for entry in result.analysis.unused_imports:
                table.add_row(relative(result.file_path, root), entry)
        console.print(table)
        console.print()

    summary = report.summary
    if summary.most_imported:
        console.print("[bold]Most imported[/bold]")
        for item in summary.most_imported:
            console.print(f"  {item.count:>4}  {relative(item.file, root)}")
        console.print()

    if summary.orphaned_files and verbose:
        console.print("[bold]Orphaned files[/bold]")
        for orphan in summary.orphaned_files:
            console.print(f"  [dim]{relative(orphan, root)}[/dim]")
        console.print()

    if not report.circular_dependencies and not unused:
        console.print("[green]No dependency issues found[/green]")
