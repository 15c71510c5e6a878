"""
Embedding Provider Interface - Abstract base for text-embedding services.

This module defines the interface for embedding providers (OpenAI, local
models, test doubles) and the errors they raise.
"""
from abc import ABC, abstractmethod
from typing import List


class EmbeddingProvider(ABC):
    """
    Abstract Interface for Embedding Providers.
    """

    @abstractmethod
    def is_configured(self) -> bool:
        """
        Report whether a usable credential is configured.

        Must not make a network call.
        """
        pass

    @abstractmethod
    async def embed(self, text: str) -> List[float]:
        """
        Generate a fixed-length embedding vector for the given text.

        Raises:
            EmbeddingError: on any failure (not configured, network, quota,
                malformed response). Callers treat it as "no signal".
        """
        pass


class EmbeddingError(Exception):
    """Base exception for embedding operations"""
    pass


class EmbeddingNotConfiguredError(EmbeddingError):
    """No usable provider credential"""
    pass


class EmbeddingServiceError(EmbeddingError):
    """Provider unavailable, rate limited or returned an API error"""
    pass


class EmbeddingInvalidResponseError(EmbeddingError):
    """Provider returned an invalid or empty response"""
    pass
