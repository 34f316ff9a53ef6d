"""CLI entrypoints for chatrender."""

from __future__ import annotations

import json
from pathlib import Path

import typer
from pydantic import TypeAdapter, ValidationError
from rich.console import Console

from chatrender.client import AuthContext, RagApiError, RagClient
from chatrender.config import load_settings
from chatrender.formatting.assembler import parse_message
from chatrender.formatting.sources import unresolved_citations
from chatrender.logging import configure_logging, get_logger, log_exception, message_context
from chatrender.models.blocks import Document
from chatrender.models.chat import Source
from chatrender.render import render, render_rich

app = typer.Typer(add_completion=False, help="Render RAG chat answers as structured output")
logger = get_logger(__name__)

_FORMATS = ("rich", "html", "text", "json")
_SOURCES_ADAPTER = TypeAdapter(list[Source])


def _check_format(fmt: str | None) -> str | None:
    if fmt is not None and fmt not in _FORMATS:
        raise typer.BadParameter(f"format must be one of: {', '.join(_FORMATS)}")
    return fmt


def _load_sources(path: Path) -> list[Source]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise typer.BadParameter(f"{path} is not valid JSON: {e}") from e
    # Accept either a bare list or a search response with a "sources" key.
    if isinstance(raw, dict):
        raw = raw.get("sources", [])
    try:
        return _SOURCES_ADAPTER.validate_python(raw)
    except ValidationError as e:
        raise typer.BadParameter(f"{path} does not contain valid sources: {e}") from e


def _emit(
    document: Document,
    sources: list[Source],
    *,
    fmt: str,
    output: Path | None,
    excerpt_chars: int,
) -> None:
    if fmt == "rich" and output is None:
        Console().print(render_rich(document, sources, excerpt_chars=excerpt_chars))
        return

    rendered = render(document, fmt, sources, excerpt_chars=excerpt_chars)  # type: ignore[arg-type]
    if output is None:
        typer.echo(rendered)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(rendered, encoding="utf-8")
    typer.echo(str(output))


@app.command("render")
def render_cmd(
    text: str = typer.Argument(
        "",
        help="Assistant message text. If omitted, you must provide --file.",
        show_default=False,
    ),
    file: Path | None = typer.Option(None, "--file", "-f", help="UTF-8 file with the message"),
    sources_file: Path | None = typer.Option(
        None,
        "--sources",
        help="JSON file with a list of sources (or a search response containing one)",
    ),
    fmt: str | None = typer.Option(
        None,
        "--format",
        help="Output format: rich, html, text or json (overrides CHATRENDER_RENDER_FORMAT)",
        callback=_check_format,
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write output to a file"),
) -> None:
    """Parse an assistant message and render it."""

    if not text:
        if file is None:
            raise typer.BadParameter("You must provide either a positional TEXT or --file.")
        text = file.read_text(encoding="utf-8")

    settings = load_settings()
    configure_logging(settings.log_level)

    sources = _load_sources(sources_file) if sources_file is not None else []
    with message_context(message_id=file.name if file is not None else "cli"):
        document = parse_message(text)
        if sources:
            unresolved_citations(document, sources)

    _emit(
        document,
        sources,
        fmt=fmt or settings.render_format,
        output=output,
        excerpt_chars=settings.source_excerpt_chars,
    )


@app.command()
def ask(
    query: str = typer.Argument(..., help="Question to ask the RAG backend"),
    token: str | None = typer.Option(
        None, "--token", envvar="CHATRENDER_API_TOKEN", help="Bearer token for the backend"
    ),
    top_k: int | None = typer.Option(None, "--top-k", min=1, max=50, help="Chunks to retrieve"),
    document_ids: list[str] | None = typer.Option(
        None, "--document-id", help="Restrict retrieval to this document (repeatable)"
    ),
    fmt: str | None = typer.Option(
        None, "--format", help="Output format: rich, html, text or json", callback=_check_format
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write output to a file"),
) -> None:
    """Ask the backend a question and render its answer with sources."""

    settings = load_settings()
    configure_logging(settings.log_level)

    logger.info("CLI ask requested")
    with RagClient(settings) as client:
        try:
            answer = client.answer(
                query,
                auth=AuthContext(token=token),
                document_ids=document_ids or None,
                top_k=top_k,
            )
        except RagApiError as e:
            log_exception(logger, "Backend request failed", base_url=settings.api_base_url)
            typer.echo(f"error: {e}", err=True)
            raise typer.Exit(code=1) from e

    _emit(
        answer.document,
        answer.message.sources,
        fmt=fmt or settings.render_format,
        output=output,
        excerpt_chars=settings.source_excerpt_chars,
    )


if __name__ == "__main__":
    app()
