"""LLM Module - Embedding providers and interfaces."""
from core.llm.interfaces import (
    EmbeddingProvider, EmbeddingError, EmbeddingNotConfiguredError,
    EmbeddingServiceError, EmbeddingInvalidResponseError
)
from core.llm.openai_service import OpenAIEmbeddingService

__all__ = [
    'EmbeddingProvider', 'OpenAIEmbeddingService', 'EmbeddingError',
    'EmbeddingNotConfiguredError', 'EmbeddingServiceError', 'EmbeddingInvalidResponseError'
]
