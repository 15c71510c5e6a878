"""
OpenAI Service - Embedding provider using the OpenAI API.

Wraps an AsyncOpenAI client with retries on transient errors, an
in-process embedding cache and de-duplication of concurrent requests
for the same text.
"""
from typing import Dict, List, Optional
import asyncio
import logging

import openai
from openai import AsyncOpenAI
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from core.cache import EmbeddingCacheService, make_cache_key
from core.llm.interfaces import (
    EmbeddingProvider,
    EmbeddingNotConfiguredError,
    EmbeddingServiceError,
    EmbeddingInvalidResponseError,
)

logger = logging.getLogger(__name__)

PLACEHOLDER_API_KEY = "YOUR_KEY_HERE"
DEFAULT_EMBEDDING_MODEL = "text-embedding-3-small"

# Matching runs inside a user request, so waits stay short.
MAX_RETRY_AFTER_SECONDS = 10.0

_RETRYABLE_ERRORS = (
    openai.RateLimitError,
    openai.APITimeoutError,
    openai.APIConnectionError,
    openai.InternalServerError,
)


# ---------------------------------------------------------------------------
# Retry helpers
# ---------------------------------------------------------------------------

def has_usable_key(api_key: Optional[str]) -> bool:
    """True when the key is non-blank and not the sample-config placeholder."""
    key = str(api_key or "").strip()
    return bool(key) and key != PLACEHOLDER_API_KEY


def _log_retry(retry_state: RetryCallState) -> None:
    """Log a warning before each retry sleep."""
    exc = retry_state.outcome.exception()
    wait = retry_state.next_action.sleep if retry_state.next_action else 0
    logger.warning(
        "Transient embedding API error (attempt %s). Waiting %.1fs before retry. Details: %s",
        retry_state.attempt_number, wait, exc,
    )


def _wait_respecting_retry_after(retry_state: RetryCallState) -> float:
    """Honour a server-declared retry-after on rate limits, else exponential backoff."""
    exc = retry_state.outcome.exception()
    if isinstance(exc, openai.RateLimitError):
        try:
            retry_after = float(exc.response.headers.get("retry-after", ""))
        except (AttributeError, TypeError, ValueError):
            retry_after = 0.0
        if retry_after > 0:
            return min(retry_after, MAX_RETRY_AFTER_SECONDS)

    return wait_exponential(multiplier=0.5, min=0.5, max=MAX_RETRY_AFTER_SECONDS)(retry_state)


class OpenAIEmbeddingService(EmbeddingProvider):
    """
    OpenAI Embedding Service.

    Unconfigured (no key, or the placeholder key) instances never build a
    client; embed() then raises EmbeddingNotConfiguredError.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: str = DEFAULT_EMBEDDING_MODEL,
        dimensions: Optional[int] = None,
        timeout_seconds: float = 30.0,
        max_attempts: int = 4,
        cache: Optional[EmbeddingCacheService] = None,
        client: Optional[AsyncOpenAI] = None
    ):
        self.api_key = api_key
        self.model = model
        self.dimensions = dimensions
        self.max_attempts = max(1, max_attempts)
        self.cache = cache
        self._in_flight: Dict[str, "asyncio.Task[List[float]]"] = {}

        if client is not None:
            self.client = client
        elif has_usable_key(api_key):
            client_kwargs = {'api_key': api_key, 'timeout': timeout_seconds, 'max_retries': 0}
            if base_url:
                client_kwargs['base_url'] = base_url
            self.client = AsyncOpenAI(**client_kwargs)
        else:
            self.client = None

    def is_configured(self) -> bool:
        return self.client is not None and has_usable_key(self.api_key)

    async def embed(self, text: str) -> List[float]:
        """Generate embedding vector for text, served from cache when possible."""
        if not self.is_configured():
            raise EmbeddingNotConfiguredError("OPENAI_API_KEY is missing; switch matching mode to local")

        input_text = str(text or "").strip()
        if not input_text:
            raise EmbeddingInvalidResponseError("Text cannot be empty")

        if self.cache is not None:
            cached = self.cache.get(input_text)
            if cached:
                return cached

        key = make_cache_key(input_text)
        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._fetch_embedding(input_text))
            self._in_flight[key] = task
            task.add_done_callback(lambda done, k=key: self._finish_in_flight(k, done))

        # Shielded so one cancelled caller does not cancel the shared request.
        return list(await asyncio.shield(task))

    def _finish_in_flight(self, key: str, task: "asyncio.Task[List[float]]") -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]
        if not task.cancelled() and task.exception() is not None:
            logger.debug(f"Embedding request for '{key[:32]}' failed: {task.exception()}")

    async def _fetch_embedding(self, text: str) -> List[float]:
        request_kwargs = {'input': text, 'model': self.model}
        if self.dimensions:
            request_kwargs['dimensions'] = self.dimensions

        try:
            async for attempt in AsyncRetrying(
                retry=retry_if_exception_type(_RETRYABLE_ERRORS),
                wait=_wait_respecting_retry_after,
                stop=stop_after_attempt(self.max_attempts),
                before_sleep=_log_retry,
                reraise=True,
            ):
                with attempt:
                    response = await self.client.embeddings.create(**request_kwargs)
        except openai.OpenAIError as e:
            raise EmbeddingServiceError(f"OpenAI embedding request failed: {e}") from e

        try:
            embedding = response.data[0].embedding
        except (AttributeError, IndexError, TypeError) as e:
            raise EmbeddingInvalidResponseError(f"No embedding returned from API: {e}") from e

        if not embedding:
            raise EmbeddingInvalidResponseError("Empty embedding returned from API")

        embedding = [float(value) for value in embedding]
        if self.cache is not None:
            self.cache.set(text, embedding)
        return embedding

    def get_status(self) -> Dict[str, object]:
        """Provider readiness details (no network call)."""
        return {
            'configured': self.is_configured(),
            'model': self.model,
            'cache': self.cache.get_cache_stats() if self.cache is not None else None,
        }
