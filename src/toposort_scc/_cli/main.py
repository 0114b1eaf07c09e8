import json
import logging
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from toposort_scc._graph import IndexGraph
from toposort_scc._io import GraphDocumentError, export_result_to_toml, load_graph_document, result_to_dict
from toposort_scc._result import Cycles, Sorted

from .config import ConfigError, OutputFormat, ToposortConfig, get_config

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()

# Sample graphs: acyclic, a single cycle 2 -> 4 -> 6 -> 2, several overlapping cycles
DEMO_GRAPHS: dict[str, list[list[int]]] = {
    "graph1": [[3], [3, 4], [4], [5, 6, 7], [6], [], [], []],
    "graph2": [[3], [3, 4], [4], [5, 6, 7], [6], [2], [2], []],
    "graph3": [[1], [2, 4, 5], [3, 6], [2, 7], [0, 5], [6], [5], [3, 6]],
}


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Topological sort or strongly connected components of a directed graph."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _load_config() -> ToposortConfig:
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=2) from e


def _render_result(title: str, result: Sorted[Any] | Cycles[Any]) -> Panel:
    """Build a rich panel describing a result."""
    table = Table(show_header=True, header_style="bold cyan")
    match result:
        case Sorted(order):
            table.add_column("Position", justify="right", style="dim")
            table.add_column("Vertex", style="bold")
            for position, vertex in enumerate(order):
                table.add_row(str(position), escape(str(vertex)))
            subtitle = f"[green]sorted, {len(order)} vertices[/green]"
            border_style = "green"
        case Cycles(components):
            table.add_column("Component", justify="right", style="dim")
            table.add_column("Size", justify="right", style="yellow")
            table.add_column("Members", style="bold")
            for number, component in enumerate(components, start=1):
                members = ", ".join(escape(str(vertex)) for vertex in component)
                table.add_row(str(number), str(len(component)), members)
            subtitle = f"[red]cyclic, {len(components)} component(s)[/red]"
            border_style = "red"

    return Panel(table, title=f"[bold]{escape(title)}[/bold]", subtitle=subtitle, border_style=border_style)


@app.command()
def sort(
    graph_file: Annotated[
        Path,
        typer.Argument(help="Path to a graph document (.toml or .json)"),
    ],
    *,
    output_format: Annotated[
        OutputFormat | None,
        typer.Option("-f", "--format", help="How to print the result (defaults to the configured format)"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Path to output TOML file"),
    ] = None,
    fail_on_cycle: Annotated[
        bool | None,
        typer.Option(
            "--fail-on-cycle/--no-fail-on-cycle",
            help="Exit non-zero if the graph contains a cycle (defaults to the configured value)",
        ),
    ] = None,
) -> None:
    """Sort a graph topologically, or list its cycles if it has any."""
    config = _load_config()
    output_format = output_format or config.format
    output = output or config.output
    if fail_on_cycle is None:
        fail_on_cycle = config.fail_on_cycle

    err_console.print(f"[cyan]Loading graph from:[/cyan] {graph_file}")
    try:
        graph = load_graph_document(graph_file).build()
    except GraphDocumentError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=2) from e

    result = graph.toposort_or_scc()
    logger.debug("Result: %r", result)

    match output_format:
        case OutputFormat.JSON:
            typer.echo(json.dumps(result_to_dict(result)))
        case OutputFormat.TEXT:
            out_console.print(_render_result(graph_file.name, result))

    if output is not None:
        err_console.print(f"[cyan]Writing result to:[/cyan] {output}")
        export_result_to_toml(result, output)

    if isinstance(result, Cycles) and fail_on_cycle:
        err_console.print("[red]✗ Graph contains a cycle[/red]")
        raise typer.Exit(code=1)


@app.command()
def check(
    graph_file: Annotated[
        Path,
        typer.Argument(help="Path to a graph document (.toml or .json)"),
    ],
) -> None:
    """Validate a graph document without running the algorithms."""
    err_console.print(f"[cyan]Loading graph from:[/cyan] {graph_file}")
    try:
        document = load_graph_document(graph_file)
        graph = document.build()
    except GraphDocumentError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=2) from e

    index_graph = graph if isinstance(graph, IndexGraph) else graph.index_graph

    table = Table(show_header=False)
    table.add_column("Property", style="bold")
    table.add_column("Value", justify="right", style="yellow")
    table.add_row("Form", "named" if document.is_named else "index")
    table.add_row("Vertices", str(index_graph.vertex_count))
    table.add_row("Edges", str(index_graph.edge_count))
    out_console.print(Panel(table, title=f"[bold]{escape(graph_file.name)}[/bold]", border_style="cyan"))
    err_console.print("[green]✓ Graph document is valid[/green]")


@app.command()
def demo() -> None:
    """Run the bundled sample graphs and print each result."""
    for name, adjacency in DEMO_GRAPHS.items():
        result = IndexGraph.from_adjacency(adjacency).toposort_or_scc()
        out_console.print(_render_result(name, result))


def main() -> None:
    app()
