"""Command-line interface for the document QA service."""

import asyncio
import json
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ....config.logging import setup_logging
from ....config.settings import get_settings
from ....core.domain import BatchResult
from ....core.services import TextChunker
from ...common.exception_handler import format_exception_json

app = typer.Typer(
    name="docquery",
    help="Answer questions about a policy document with retrieval-augmented generation",
    add_completion=False,
)

console = Console(force_terminal=True, legacy_windows=False)


def handle_cli_error(exc: Exception, debug: bool = False) -> None:
    """Display an error in the CLI.

    In debug mode, shows full JSON error details; otherwise a one-line
    message with the error code.
    """
    error_data = format_exception_json(exc, include_trace=debug)

    if debug:
        console.print(
            Panel(
                json.dumps(error_data, indent=2, default=str),
                title="[bold red]Error Details[/]",
                border_style="red",
            )
        )
        return

    error_code = error_data["error"].get("code", "UNKNOWN")
    console.print(f"\n[red]Error [{error_code}]:[/] {error_data['error']['message']}")
    console.print(f"[dim]Type: {error_data['error']['type']}[/]")
    console.print("[dim]Set DEBUG=true for full details[/]")


def _print_result(result: BatchResult) -> None:
    table = Table(title=f"Answers ({result.chunk_count} chunks indexed)", show_lines=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Question", style="cyan")
    table.add_column("Answer")
    table.add_column("ms", justify="right")
    table.add_column("Grounded", justify="center")

    for i, record in enumerate(result.records, 1):
        table.add_row(
            str(i),
            record.question,
            record.answer,
            f"{record.elapsed_seconds * 1000:.0f}",
            "[green]yes[/]" if record.grounded else "[yellow]no[/]",
        )
    console.print(table)

    metrics = result.metrics
    console.print(
        f"[bold]Total:[/] {metrics.total_seconds * 1000:.0f}ms  "
        f"[bold]Average:[/] {metrics.average_seconds * 1000:.2f}ms  "
        f"[bold]Accuracy:[/] {metrics.accuracy:.2f}%"
    )


@app.command()
def ask(
    url: str = typer.Argument(..., help="URL of the document"),
    question: list[str] = typer.Option(..., "--question", "-q", help="Question (repeatable)"),
    as_json: bool = typer.Option(False, "--json", help="Print the API response body"),
    in_memory: bool = typer.Option(False, "--in-memory", help="Use the in-process vector store"),
) -> None:
    """Run the full pipeline for a document and print the answers."""
    from ....adapters.outbound.vector_store import InMemoryVectorStore
    from ....composition.container import build_orchestrator

    settings = get_settings()
    setup_logging(settings.log_level, json_format=settings.log_json)

    orchestrator = build_orchestrator(
        settings, vector_store=InMemoryVectorStore() if in_memory else None
    )

    try:
        with orchestrator.fetcher, console.status("[bold green]Answering questions...[/]"):
            result = asyncio.run(orchestrator.run(url, question))
    except Exception as exc:
        handle_cli_error(exc, debug=settings.debug)
        raise typer.Exit(1)

    if as_json:
        console.print_json(json.dumps({"answers": result.answers}))
    else:
        _print_result(result)


@app.command()
def chunk(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Local PDF file"),
    size: int | None = typer.Option(None, "--size", help="Chunk size (defaults to settings)"),
    overlap: int | None = typer.Option(None, "--overlap", help="Chunk overlap"),
    show: int = typer.Option(3, "--show", help="Number of chunks to preview"),
) -> None:
    """Show how a local PDF would be chunked."""
    from ....adapters.outbound.documents import PdfDocumentParser

    settings = get_settings()
    try:
        chunker = TextChunker(
            size or settings.chunk_size,
            settings.chunk_overlap if overlap is None else overlap,
        )
        pages = PdfDocumentParser().extract(path)
    except Exception as exc:
        handle_cli_error(exc, debug=settings.debug)
        raise typer.Exit(1)

    chunks = chunker.split_document(pages, source=str(path))
    lengths = [len(c.text) for c in chunks]
    console.print(
        f"[bold]{len(pages)}[/] pages, [bold]{len(chunks)}[/] chunks "
        f"(size={chunker.chunk_size}, overlap={chunker.chunk_overlap})"
    )
    if lengths:
        average = sum(lengths) // len(lengths)
        console.print(f"Chunk length min/avg/max: {min(lengths)}/{average}/{max(lengths)}")
    for c in chunks[:show]:
        console.print(Panel(c.text, title=f"chunk {c.sequence} @ {c.start}", border_style="blue"))


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Bind address"),
    port: int = typer.Option(8080, help="Port"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("docquery.adapters.inbound.api.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
