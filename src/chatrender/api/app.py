"""FastAPI app exposing the answer formatter."""

from __future__ import annotations

from fastapi import FastAPI
from pydantic import BaseModel, Field

from chatrender.config import RenderFormat, load_settings
from chatrender.formatting.assembler import DocumentAssembler
from chatrender.formatting.sources import unresolved_citations
from chatrender.logging import configure_logging, get_logger, message_context
from chatrender.models.blocks import Document
from chatrender.models.chat import Source
from chatrender.render import render


class FormatRequest(BaseModel):
    """Format request."""

    content: str | None = None
    sources: list[Source] = Field(default_factory=list)
    format: RenderFormat | None = None
    message_id: str | None = None


class FormatResponse(BaseModel):
    """Format response."""

    document: Document
    rendered: str | None = None
    unresolved_citations: list[int] = Field(default_factory=list)


def create_app() -> FastAPI:
    """Create FastAPI app."""

    settings = load_settings()
    configure_logging(settings.log_level)
    logger = get_logger(__name__)
    assembler = DocumentAssembler()

    app = FastAPI(title="chatrender", version="0.1.0")

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/format")
    def format_message(req: FormatRequest) -> FormatResponse:
        content = req.content or ""
        logger.info("API format requested", extra={"content_len": len(content)})

        with message_context(message_id=req.message_id or "-"):
            document = assembler.assemble(content)
            missing = unresolved_citations(document, req.sources) if req.sources else []

        rendered: str | None = None
        if req.format is not None:
            rendered = render(
                document,
                req.format,
                req.sources,
                excerpt_chars=settings.source_excerpt_chars,
            )
        return FormatResponse(document=document, rendered=rendered, unresolved_citations=missing)

    return app
