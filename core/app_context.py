from dataclasses import dataclass

from sqlalchemy.orm import sessionmaker

from core.cache import EmbeddingCacheService
from core.config_loader import AppConfig, EmbeddingConfig
from core.llm.openai_service import OpenAIEmbeddingService
from core.matcher.candidate_store import CandidateRepository
from core.matcher.models import MatchingStatus
from core.matcher.service import MatcherService, matching_status
from database.database import create_db_engine, create_session_factory


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    The embedding provider and its cache are process-wide and shared by
    every request. DB access should be obtained via mentor_uow(ctx.session_factory)
    per request; matcher_service() then binds the matcher to that repository.
    """
    config: AppConfig
    embedding_service: OpenAIEmbeddingService
    embedding_cache: EmbeddingCacheService
    session_factory: sessionmaker

    @classmethod
    def build(cls, config: AppConfig) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration

        Returns:
            Fully wired AppContext instance (no DB session attached)
        """
        embedding_cache = EmbeddingCacheService(
            ttl_seconds=config.embedding.cache_ttl_seconds,
            max_items=config.embedding.cache_max_items
        )
        embedding_service = cls._build_embedding_service(config.embedding, embedding_cache)

        engine = create_db_engine(config.database.url, echo=config.database.echo)
        session_factory = create_session_factory(engine)

        return cls(
            config=config,
            embedding_service=embedding_service,
            embedding_cache=embedding_cache,
            session_factory=session_factory
        )

    @staticmethod
    def _build_embedding_service(
        embedding_config: EmbeddingConfig,
        cache: EmbeddingCacheService
    ) -> OpenAIEmbeddingService:
        """Build OpenAI embedding service from embedding configuration."""
        return OpenAIEmbeddingService(
            api_key=embedding_config.api_key,
            base_url=embedding_config.base_url,
            model=embedding_config.model,
            dimensions=embedding_config.dimensions,
            timeout_seconds=embedding_config.timeout_seconds,
            max_attempts=embedding_config.max_retries,
            cache=cache
        )

    def matching_status(self) -> MatchingStatus:
        """Readiness view built from config and the provider alone."""
        return matching_status(self.embedding_service, self.config.matching)

    def matcher_service(self, repository: CandidateRepository) -> MatcherService:
        """MatcherService bound to a per-request repository."""
        return MatcherService(
            repository=repository,
            provider=self.embedding_service,
            config=self.config.matching
        )
