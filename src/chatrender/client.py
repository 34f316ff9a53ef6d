"""Client for the RAG backend's LLM search endpoint.

Authentication is passed explicitly: every request-issuing method takes an `AuthContext`
argument instead of reading a token getter configured somewhere else in the process.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Any, Sequence

import httpx
from pydantic import ValidationError

from chatrender.config import Settings
from chatrender.formatting.assembler import parse_message
from chatrender.logging import get_logger
from chatrender.models.blocks import Document
from chatrender.models.chat import Message, SearchResponse

logger = get_logger(__name__)

_TRANSIENT_STATUS = {429, 500, 502, 503, 504}


class RagApiError(RuntimeError):
    pass


class RagApiStatusError(RagApiError):
    """Backend answered with a non-success status."""

    def __init__(self, message: str, *, status_code: int, body: str) -> None:
        super().__init__(f"{message}: {status_code} - {body}")
        self.status_code = status_code
        self.body = body


class RagApiResponseError(RagApiError):
    """Backend answered 2xx but the body is not what we expected."""


@dataclass(frozen=True)
class AuthContext:
    """Credentials for a single request."""

    token: str | None = None

    def headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}


@dataclass(frozen=True)
class Answer:
    """An assistant answer with its parsed document."""

    message: Message
    document: Document
    response: SearchResponse


class RagClient:
    """Synchronous client for the RAG backend."""

    def __init__(self, settings: Settings, *, transport: httpx.BaseTransport | None = None) -> None:
        self._settings = settings
        self._client = httpx.Client(
            base_url=settings.api_base_url.rstrip("/"),
            timeout=httpx.Timeout(settings.api_timeout_s),
            headers={"Content-Type": "application/json"},
            follow_redirects=True,
            transport=transport,
        )

    def __enter__(self) -> RagClient:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def search_llm(
        self,
        query: str,
        *,
        auth: AuthContext | None = None,
        document_ids: Sequence[str] | None = None,
        top_k: int | None = None,
    ) -> SearchResponse:
        """Ask the backend to answer `query` from the user's documents.

        Args:
            query: User question.
            auth: Credentials for this call.
            document_ids: Restrict retrieval to these documents.
            top_k: Number of chunks to retrieve (defaults to settings).

        Returns:
            The parsed search response.
        """

        payload: dict[str, Any] = {
            "query": query,
            "top_k": top_k if top_k is not None else self._settings.search_top_k,
        }
        if document_ids is not None:
            payload["document_ids"] = list(document_ids)
        resp = self._request("POST", "/rag/search-llm", auth=auth, json=payload)
        try:
            return SearchResponse.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise RagApiResponseError("search-llm returned an unexpected body") from e

    def health(self, *, auth: AuthContext | None = None) -> dict[str, Any]:
        """Check backend health."""

        resp = self._request("GET", "/rag/health", auth=auth)
        try:
            data = resp.json()
        except ValueError as e:
            raise RagApiResponseError("health returned a non-JSON body") from e
        if not isinstance(data, dict):
            raise RagApiResponseError("health response not a JSON object")
        return data

    def answer(
        self,
        query: str,
        *,
        auth: AuthContext | None = None,
        document_ids: Sequence[str] | None = None,
        top_k: int | None = None,
        message_id: str = "answer",
    ) -> Answer:
        """Search, wrap the reply as an assistant message, and parse it."""

        response = self.search_llm(query, auth=auth, document_ids=document_ids, top_k=top_k)
        message = Message(
            id=message_id,
            content=response.response,
            role="assistant",
            timestamp=response.timestamp,
            sources=response.sources,
        )
        return Answer(message=message, document=parse_message(message.content), response=response)

    def _request(
        self,
        method: str,
        path: str,
        *,
        auth: AuthContext | None,
        json: Any = None,
    ) -> httpx.Response:
        headers = (auth or AuthContext()).headers()
        max_retries = self._settings.api_max_retries
        last_err: Exception | None = None
        started = time.monotonic()

        for attempt in range(max_retries + 1):
            status_code: int | None = None
            try:
                resp = self._client.request(method, path, headers=headers, json=json)
                status_code = resp.status_code
                if status_code in _TRANSIENT_STATUS:
                    raise httpx.HTTPStatusError(
                        f"transient status={status_code}", request=resp.request, response=resp
                    )
                if resp.is_error:
                    raise RagApiStatusError(
                        f"{method} {path} failed", status_code=status_code, body=resp.text
                    )
                logger.info(
                    "RAG request ok",
                    extra={
                        "method": method,
                        "path": path,
                        "attempt": attempt,
                        "status_code": status_code,
                        "authenticated": bool(headers),
                        "elapsed_ms": int((time.monotonic() - started) * 1000),
                    },
                )
                return resp
            except (httpx.TimeoutException, httpx.RequestError, httpx.HTTPStatusError) as e:
                last_err = e

            if attempt >= max_retries:
                break

            retry_after_s: float | None = None
            if isinstance(last_err, httpx.HTTPStatusError) and last_err.response.status_code == 429:
                ra = last_err.response.headers.get("retry-after")
                if ra is not None:
                    try:
                        parsed = float(ra)
                    except ValueError:
                        parsed = math.nan
                    if math.isfinite(parsed) and parsed >= 0:
                        retry_after_s = min(self._settings.api_retry_max_backoff_s, parsed)

            backoff = min(
                self._settings.api_retry_max_backoff_s,
                self._settings.api_retry_backoff_s * (2**attempt),
            )
            sleep_s = retry_after_s if retry_after_s is not None else backoff
            logger.warning(
                "RAG request retry",
                extra={
                    "method": method,
                    "path": path,
                    "attempt": attempt,
                    "max_retries": max_retries,
                    "status_code": status_code,
                    "sleep_s": sleep_s,
                },
            )
            time.sleep(sleep_s)

        msg = f"{method} {path} failed after {max_retries + 1} attempt(s)"
        logger.error(
            msg,
            extra={
                "error_type": type(last_err).__name__ if last_err is not None else None,
                "error": str(last_err) if last_err is not None else None,
                "elapsed_ms": int((time.monotonic() - started) * 1000),
            },
        )
        if isinstance(last_err, httpx.HTTPStatusError):
            raise RagApiStatusError(
                msg, status_code=last_err.response.status_code, body=last_err.response.text
            ) from last_err
        raise RagApiError(msg) from last_err
