"""Chat message and retrieval models.

These mirror the payloads exchanged with the RAG backend. The formatter never reads them; they
feed the source listing and the client.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator


Role = Literal["user", "assistant"]


class SourceMetadata(BaseModel):
    """Where a retrieved chunk comes from."""

    filename: str | None = None
    page: int | None = None
    chunk_index: int | None = None


class Source(BaseModel):
    """A retrieval result attached to an assistant answer.

    Sources are correlated with `[N]` markers only by display position (1-based); nothing
    guarantees that a marker's number is in range.
    """

    chunk_id: str
    text: str = ""
    similarity_score: float | None = Field(default=None, ge=0.0, le=1.0)
    metadata: SourceMetadata = Field(default_factory=SourceMetadata)


class Message(BaseModel):
    """A chat message as stored by the backend."""

    id: str
    content: str = ""
    role: Role
    timestamp: datetime | None = None
    sources: list[Source] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> Any:
        # The backend hands out integer ids for persisted messages.
        if isinstance(v, int):
            return str(v)
        return v

    @field_validator("content", mode="before")
    @classmethod
    def _none_content_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class SearchMetadata(BaseModel):
    query: str
    total_chunks_found: int = Field(ge=0)
    processing_time: float = Field(ge=0.0)


class TokenUsage(BaseModel):
    prompt_tokens: int = Field(ge=0)
    completion_tokens: int = Field(ge=0)
    total_tokens: int = Field(ge=0)


class SearchResponse(BaseModel):
    """Response of the backend's LLM-backed search endpoint."""

    response: str = ""
    sources: list[Source] = Field(default_factory=list)
    metadata: SearchMetadata | None = None
    model_used: str | None = None
    timestamp: datetime | None = None
    token_usage: TokenUsage | None = None
    query: str | None = None

    @field_validator("response", mode="before")
    @classmethod
    def _none_response_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v
