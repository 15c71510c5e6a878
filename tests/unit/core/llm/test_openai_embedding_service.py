"""
Unit tests for the OpenAI embedding service.

Tests verify:
- Placeholder / missing keys count as unconfigured
- Embedding requests, caching and in-flight de-duplication
- Retry behaviour on transient errors and error translation
"""
import asyncio
from unittest.mock import AsyncMock, MagicMock

import httpx
import openai
import pytest

from core.cache import EmbeddingCacheService
from core.llm import openai_service
from core.llm.interfaces import (
    EmbeddingInvalidResponseError,
    EmbeddingNotConfiguredError,
    EmbeddingServiceError,
)
from core.llm.openai_service import OpenAIEmbeddingService, has_usable_key

REQUEST = httpx.Request("POST", "https://api.openai.com/v1/embeddings")


def embedding_response(vector):
    item = MagicMock()
    item.embedding = vector
    response = MagicMock()
    response.data = [item]
    return response


def rate_limit_error(retry_after=None):
    headers = {"retry-after": retry_after} if retry_after else {}
    return openai.RateLimitError(
        "rate limited", response=httpx.Response(429, headers=headers, request=REQUEST), body=None
    )


@pytest.fixture
def client():
    mock_client = MagicMock()
    mock_client.embeddings.create = AsyncMock(return_value=embedding_response([0.1, 0.2, 0.3]))
    return mock_client


@pytest.fixture
def no_wait(monkeypatch):
    monkeypatch.setattr(openai_service, "_wait_respecting_retry_after", lambda retry_state: 0)


def make_service(client, **kwargs):
    kwargs.setdefault("api_key", "sk-test")
    return OpenAIEmbeddingService(client=client, **kwargs)


class TestConfiguration:

    @pytest.mark.parametrize("key, usable", [
        ("sk-real", True),
        ("", False),
        ("   ", False),
        (None, False),
        ("YOUR_KEY_HERE", False),
    ])
    def test_has_usable_key(self, key, usable):
        assert has_usable_key(key) is usable

    def test_placeholder_key_builds_no_client(self):
        service = OpenAIEmbeddingService(api_key="YOUR_KEY_HERE")
        assert service.client is None
        assert service.is_configured() is False

    def test_real_key_builds_client(self):
        service = OpenAIEmbeddingService(api_key="sk-test", base_url="http://localhost:9999/v1")
        assert service.client is not None
        assert service.is_configured() is True

    @pytest.mark.asyncio
    async def test_embed_unconfigured_raises(self):
        with pytest.raises(EmbeddingNotConfiguredError):
            await OpenAIEmbeddingService(api_key=None).embed("Python")

    def test_status(self, client):
        status = make_service(client, cache=EmbeddingCacheService()).get_status()
        assert status["configured"] is True
        assert status["model"] == "text-embedding-3-small"
        assert status["cache"]["items"] == 0


class TestEmbed:

    @pytest.mark.asyncio
    async def test_returns_vector(self, client):
        service = make_service(client)

        vector = await service.embed("  Python ")

        assert vector == [0.1, 0.2, 0.3]
        client.embeddings.create.assert_awaited_once_with(input="Python", model="text-embedding-3-small")

    @pytest.mark.asyncio
    async def test_dimensions_forwarded(self, client):
        service = make_service(client, model="text-embedding-3-large", dimensions=256)

        await service.embed("Python")

        client.embeddings.create.assert_awaited_once_with(
            input="Python", model="text-embedding-3-large", dimensions=256
        )

    @pytest.mark.asyncio
    async def test_blank_text_rejected(self, client):
        with pytest.raises(EmbeddingInvalidResponseError):
            await make_service(client).embed("   ")
        client.embeddings.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_embedding_rejected(self, client):
        client.embeddings.create.return_value = embedding_response([])
        with pytest.raises(EmbeddingInvalidResponseError):
            await make_service(client).embed("Python")

    @pytest.mark.asyncio
    async def test_missing_data_rejected(self, client):
        response = MagicMock()
        response.data = []
        client.embeddings.create.return_value = response
        with pytest.raises(EmbeddingInvalidResponseError):
            await make_service(client).embed("Python")


class TestCaching:

    @pytest.mark.asyncio
    async def test_cache_hit_skips_api(self, client):
        cache = EmbeddingCacheService()
        service = make_service(client, cache=cache)

        first = await service.embed("Python")
        second = await service.embed("python")

        assert first == second
        assert client.embeddings.create.await_count == 1
        assert len(cache) == 1

    @pytest.mark.asyncio
    async def test_concurrent_requests_share_one_call(self, client):
        async def slow_create(**kwargs):
            await asyncio.sleep(0.01)
            return embedding_response([1.0, 0.0])

        client.embeddings.create = AsyncMock(side_effect=slow_create)
        service = make_service(client)

        results = await asyncio.gather(*[service.embed("Python") for _ in range(5)])

        assert all(vector == [1.0, 0.0] for vector in results)
        assert client.embeddings.create.await_count == 1
        assert service._in_flight == {}

    @pytest.mark.asyncio
    async def test_failed_request_is_not_shared_afterwards(self, client, no_wait):
        client.embeddings.create = AsyncMock(side_effect=[
            openai.APIConnectionError(request=REQUEST),
            embedding_response([0.5, 0.5]),
        ])
        service = make_service(client, max_attempts=1)

        with pytest.raises(EmbeddingServiceError):
            await service.embed("Python")
        assert service._in_flight == {}

        assert await service.embed("Python") == [0.5, 0.5]


class TestRetries:

    @pytest.mark.asyncio
    async def test_transient_error_retried(self, client, no_wait):
        client.embeddings.create = AsyncMock(side_effect=[
            openai.APIConnectionError(request=REQUEST),
            rate_limit_error(),
            embedding_response([0.3, 0.4]),
        ])

        vector = await make_service(client, max_attempts=4).embed("Python")

        assert vector == [0.3, 0.4]
        assert client.embeddings.create.await_count == 3

    @pytest.mark.asyncio
    async def test_retries_exhausted(self, client, no_wait):
        client.embeddings.create = AsyncMock(side_effect=openai.APIConnectionError(request=REQUEST))

        with pytest.raises(EmbeddingServiceError):
            await make_service(client, max_attempts=3).embed("Python")

        assert client.embeddings.create.await_count == 3

    @pytest.mark.asyncio
    async def test_auth_error_not_retried(self, client, no_wait):
        client.embeddings.create = AsyncMock(side_effect=openai.AuthenticationError(
            "bad key", response=httpx.Response(401, request=REQUEST), body=None
        ))

        with pytest.raises(EmbeddingServiceError):
            await make_service(client).embed("Python")

        assert client.embeddings.create.await_count == 1


class TestRetryWait:

    def _state(self, exc, attempt=1):
        state = MagicMock()
        state.outcome.exception.return_value = exc
        state.attempt_number = attempt
        return state

    def test_honours_retry_after(self):
        assert openai_service._wait_respecting_retry_after(self._state(rate_limit_error("3"))) == 3.0

    def test_retry_after_is_capped(self):
        wait = openai_service._wait_respecting_retry_after(self._state(rate_limit_error("120")))
        assert wait == openai_service.MAX_RETRY_AFTER_SECONDS

    def test_exponential_backoff_otherwise(self):
        exc = openai.APIConnectionError(request=REQUEST)
        assert openai_service._wait_respecting_retry_after(self._state(exc, attempt=1)) == 0.5
        assert openai_service._wait_respecting_retry_after(self._state(exc, attempt=3)) == 2.0
