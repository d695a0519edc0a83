"""CLI entry point — Typer app for arbitration-rag commands.

Usage:
    arbitration-rag query "Which tribunals addressed fair and equitable treatment?"
    arbitration-rag query "expropriation" --retrieval-only --top-k 8
    arbitration-rag stats
    arbitration-rag search --case-id ICSID-ARB-05-22 --type Opinion
    arbitration-rag case ICSID-ARB-05-22
    arbitration-rag chunks
    arbitration-rag chat
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from arbitration_rag.config import Settings
    from arbitration_rag.pipeline.schemas import RAGResponse
    from arbitration_rag.pipeline.service import RetrievalService
    from arbitration_rag.vectorstore.schemas import SearchResult, StoreStats

app = typer.Typer(
    name="arbitration-rag",
    help="Arbitration case RAG — index the case corpus and ask grounded questions.",
    no_args_is_help=True,
)

console = Console()

_SNIPPET = 160


@app.callback()
def main(
    ctx: typer.Context,
    settings_file: Path | None = typer.Option(
        None, "--settings", help="Settings YAML (default: discovered from cwd)",
    ),
    data_path: str | None = typer.Option(
        None, "--data-path", "-p", help="Directory of case JSON files",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Load settings and configure logging for every command."""
    from arbitration_rag.config import load_settings
    from arbitration_rag.logging_config import setup_logging

    settings = load_settings(settings_file)
    if data_path:
        settings.corpus.data_path = data_path
    setup_logging("DEBUG" if verbose else settings.logging.level)
    ctx.obj = settings


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _ready_service(settings: Settings) -> RetrievalService:
    from arbitration_rag.pipeline.service import RetrievalService

    service = RetrievalService.from_settings(settings)
    with console.status("Indexing arbitration cases..."):
        result = service.initialize()
    console.print(
        f"[bold green]Ready:[/] {result.chunks_stored} chunks "
        f"from {result.cases_loaded} cases",
    )
    for name in result.files_skipped:
        console.print(f"  [yellow]Skipped:[/] {name}")
    return service


def _print_sources(results: list[SearchResult]) -> None:
    table = Table(title="Sources")
    table.add_column("#", style="cyan")
    table.add_column("Score")
    table.add_column("Case")
    table.add_column("Document")
    table.add_column("Excerpt")
    for i, r in enumerate(results, 1):
        meta = r.chunk.metadata
        table.add_row(
            str(i),
            f"{r.score:.3f}",
            meta.case_title or meta.case_id,
            f"{meta.document_type} - {meta.document_title}",
            r.chunk.content[:_SNIPPET],
        )
    console.print(table)


def _print_response(response: RAGResponse) -> None:
    from arbitration_rag.pipeline.citations import format_citations
    from arbitration_rag.pipeline.schemas import AnswerStatus

    style = "bold green" if response.status == AnswerStatus.ANSWERED else "bold yellow"
    console.print(f"\n[bold]Q:[/] {response.query}")
    console.print(f"\n[{style}]A:[/] {response.answer}")
    if response.citations:
        console.print(format_citations(response.citations))
    if response.sources:
        _print_sources(response.sources)
    console.print(f"\n[dim]Model: {response.model} | Status: {response.status}[/]")


def _print_stats(stats: StoreStats) -> None:
    table = Table(title="Vector Store")
    table.add_column("Metric", style="cyan")
    table.add_column("Value")
    table.add_row("Total chunks", str(stats.total_chunks))
    table.add_row("Chunks with embeddings", str(stats.chunks_with_embeddings))
    table.add_row("Unique cases", str(stats.unique_cases))
    for doc_type, count in sorted(stats.chunks_by_type.items()):
        table.add_row(f"  {doc_type}", str(count))
    console.print(table)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def query(
    ctx: typer.Context,
    question: str = typer.Argument(..., help="Question to ask"),
    top_k: int | None = typer.Option(
        None, "--top-k", "-k", help="Number of passages to retrieve",
    ),
    retrieval_only: bool = typer.Option(
        False, "--retrieval-only", "-r", help="Show ranked sources without generating",
    ),
) -> None:
    """Ask a question against the case corpus."""
    settings: Settings = ctx.obj
    k = top_k or settings.retrieval.top_k
    service = _ready_service(settings)

    if retrieval_only:
        results = service.retrieve(question, k)
        if not results:
            console.print("[yellow]No relevant sources found.[/]")
            return
        _print_sources(results)
        return

    _print_response(service.query(question, k))


@app.command()
def stats(ctx: typer.Context) -> None:
    """Index the corpus and show vector store statistics."""
    service = _ready_service(ctx.obj)
    _print_stats(service.get_stats())


@app.command()
def search(
    ctx: typer.Context,
    case_id: str | None = typer.Option(None, "--case-id", "-c", help="Case identifier"),
    document_type: str | None = typer.Option(
        None, "--type", "-t", help="Document type (Decision, Opinion)",
    ),
    date: str | None = typer.Option(None, "--date", "-d", help="Exact document date"),
    top_k: int | None = typer.Option(None, "--top-k", "-k", help="Maximum chunks"),
) -> None:
    """List stored chunks matching metadata filters."""
    from arbitration_rag.vectorstore.schemas import MetadataFilter

    settings: Settings = ctx.obj
    service = _ready_service(settings)
    chunks = service.search_by_metadata(
        MetadataFilter(case_id=case_id, document_type=document_type, date=date),
        top_k or settings.retrieval.metadata_top_k,
    )

    table = Table(title=f"{len(chunks)} matching chunks")
    table.add_column("ID", style="cyan")
    table.add_column("Document")
    table.add_column("Date")
    table.add_column("Excerpt")
    for c in chunks:
        table.add_row(
            c.id,
            f"{c.metadata.document_type} - {c.metadata.document_title}",
            c.metadata.date or "",
            c.content[:_SNIPPET],
        )
    console.print(table)


@app.command()
def case(
    ctx: typer.Context,
    case_id: str = typer.Argument(..., help="Case identifier"),
) -> None:
    """Show every chunk stored for one case."""
    service = _ready_service(ctx.obj)
    chunks = service.get_case_chunks(case_id)
    if not chunks:
        console.print(f"[yellow]No chunks for case {case_id}[/]")
        raise typer.Exit(code=1)

    console.print(f"\n[bold]{chunks[0].metadata.case_title}[/] ({len(chunks)} chunks)\n")
    for c in chunks:
        meta = c.metadata
        console.print(
            f"[cyan]{c.id}[/] {meta.document_type} - {meta.document_title} "
            f"[dim]({meta.chunk_index + 1}/{meta.total_chunks})[/]",
        )


@app.command()
def chunks(ctx: typer.Context) -> None:
    """Show corpus and chunking statistics without embedding anything."""
    from arbitration_rag.chunking.sentence_chunker import SentenceChunker
    from arbitration_rag.corpus.loader import CaseLoader

    settings: Settings = ctx.obj
    loader = CaseLoader(settings.corpus.data_path)
    chunker = SentenceChunker(
        chunk_size=settings.chunking.chunk_size,
        overlap=settings.chunking.overlap,
    )

    loaded = loader.load_all()
    corpus = loader.data_stats(loaded.cases)
    chunk_stats = chunker.stats(chunker.chunk_all(loaded.cases))

    table = Table(title="Corpus")
    table.add_column("Metric", style="cyan")
    table.add_column("Value")
    table.add_row("Cases", str(corpus.total_cases))
    table.add_row("Skipped files", str(len(loaded.skipped)))
    table.add_row("Decisions", str(corpus.total_decisions))
    table.add_row("Opinions", str(corpus.total_opinions))
    table.add_row("Content length", f"{corpus.total_content_length:,} chars")
    table.add_row("Chunks", str(chunk_stats.total_chunks))
    table.add_row(
        "Chunk length (min / avg / max)",
        f"{chunk_stats.min_chunk_length} / {chunk_stats.avg_chunk_length} "
        f"/ {chunk_stats.max_chunk_length}",
    )
    for doc_type, count in sorted(chunk_stats.chunks_by_type.items()):
        table.add_row(f"  {doc_type}", str(count))
    console.print(table)


@app.command()
def chat(
    ctx: typer.Context,
    top_k: int | None = typer.Option(None, "--top-k", "-k", help="Passages per question"),
) -> None:
    """Interactive question loop (/help, /stats, /quit)."""
    settings: Settings = ctx.obj
    k = top_k or settings.retrieval.top_k
    service = _ready_service(settings)
    console.print("Type a question, or /help for commands.\n")

    while True:
        try:
            line = console.input("[bold cyan]Query:[/] ").strip()
        except (EOFError, KeyboardInterrupt):
            console.print()
            break

        if not line:
            continue
        command = line.lower()
        if command in {"/quit", "/exit"}:
            break
        if command == "/help":
            console.print("/help  show this help\n/stats  store statistics\n/quit  exit")
        elif command == "/stats":
            _print_stats(service.get_stats())
        elif command.startswith("/"):
            console.print(f"[yellow]Unknown command {line}[/]")
        else:
            _print_response(service.query(line, k))


if __name__ == "__main__":
    app()
