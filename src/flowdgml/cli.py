"""CLI interface for flowdgml using Typer framework."""

import json as jsonlib
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from flowdgml import __description__, __version__
from flowdgml.config import LogLevel, OutputFormat, load_config
from flowdgml.errors import FlowGraphError
from flowdgml.graph import DgmlRenderer, FlowGraphBuilder, MermaidRenderer, RendererRegistry, read_dgml_summary
from flowdgml.loader import load_flow
from flowdgml.models.description import FlowDocument

app = typer.Typer(
    name="flowdgml",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

# Status output goes to stderr so rendered documents can be piped from stdout
console = Console(stderr=True)


def _configure_logging(level: LogLevel) -> None:
    logging.basicConfig(
        level=level.to_logging(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        typer.echo(f"flowdgml version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True, help="Show version and exit")
    ] = False,
) -> None:
    """flowdgml - Render workflow graphs as DGML diagrams."""


@app.command()
def render(
    flow_file: Annotated[
        Path,
        typer.Argument(help="Flow-description JSON file")
    ],
    out: Annotated[
        Optional[Path],
        typer.Option("--out", "-o", help="Output file path (default: stdout)")
    ] = None,
    format: Annotated[
        Optional[OutputFormat],
        typer.Option("--format", "-f", help="Output format: dgml, mermaid (default: from config)")
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .flowdgml.json)")
    ] = None,
) -> None:
    """Render a flow description as a diagram."""
    try:
        flowdgml_config = load_config(config)
        _configure_logging(flowdgml_config.logging.level)

        flow = load_flow(flow_file)
        builder = FlowGraphBuilder(flowdgml_config.category_table())
        document = builder.generate(flow)

        registry = RendererRegistry([
            DgmlRenderer(indent=flowdgml_config.output.indent),
            MermaidRenderer(),
        ])
        format_name = (format or flowdgml_config.output.format).value
        rendered = registry.render(document, format_name)

        if out is None:
            typer.echo(rendered, nl=False)
            return

        output_file = out.resolve()
        with open(output_file, "w", encoding="utf-8") as f:
            f.write(rendered)

        console.print(f"[green]Diagram generated:[/green] {output_file}")
        console.print(f"[blue]Nodes:[/blue] {len(document.nodes)}  [blue]Links:[/blue] {len(document.links)}")

    except (FlowGraphError, ValueError, OSError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def inspect(
    dgml_file: Annotated[
        Path,
        typer.Argument(help="DGML file to summarize")
    ],
) -> None:
    """Show node and link counts of a DGML file."""
    try:
        summary = read_dgml_summary(dgml_file)
    except FlowGraphError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    table = Table(title=f"{dgml_file.name}: {summary.node_count} nodes, {summary.link_count} links")
    table.add_column("Category", style="cyan")
    table.add_column("Nodes", justify="right")
    table.add_column("Links", justify="right")

    categories = list(summary.categories)
    for category in sorted(set(summary.nodes_by_category) | set(summary.links_by_category)):
        if category not in categories:
            categories.append(category)

    for category in categories:
        table.add_row(
            category or "(none)",
            str(summary.nodes_by_category.get(category, 0)),
            str(summary.links_by_category.get(category, 0)),
        )

    Console().print(table)


@app.command()
def schema() -> None:
    """Print the JSON schema of flow-description files."""
    typer.echo(jsonlib.dumps(FlowDocument.model_json_schema(by_alias=True), indent=2))


if __name__ == "__main__":
    app()
