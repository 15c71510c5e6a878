#!/usr/bin/env python3
"""
Semantic Matcher - Rank mentors by embedding similarity of skill names.

Missing taught-skill embeddings are computed lazily and written back to
the candidate repository once per candidate, after all of that
candidate's skills have resolved. Later requests reuse the stored
vectors instead of calling the provider again.

Concurrent requests can compute and write the same missing embedding;
the vectors are deterministic per text, so the duplicate write is only
wasted provider cost.
"""
from typing import List, Optional, Sequence, Tuple
import asyncio
import logging

from core.utils import normalize_skill_name
from core.llm.interfaces import EmbeddingProvider, EmbeddingError
from core.matcher.candidate_store import CandidateRepository
from core.matcher.errors import QueryEmbeddingError
from core.matcher.models import Candidate, MatchRequest, MatchResult, TaughtSkill, MAX_RESULTS
from core.matcher.ranking import TopKAccumulator, build_match_result
from core.matcher.similarity import SimilarityCalculator
from core.scorer import CandidateScorer

logger = logging.getLogger(__name__)

SEMANTIC_SIMILARITY_FLOOR = 0.78
MIN_MATCH_SCORE = 0.25
DEFAULT_MAX_CONCURRENT_EMBEDDINGS = 8


class SemanticMatcher:
    """
    Embedding-based matcher.

    Provider calls are bounded by one semaphore per request, shared
    across candidates and across the skills of a single candidate.
    Repository writes run in a worker thread, one at a time per request.
    """

    def __init__(
        self,
        provider: EmbeddingProvider,
        repository: CandidateRepository,
        similarity_calc: Optional[SimilarityCalculator] = None,
        scorer: Optional[CandidateScorer] = None,
        max_concurrent_embeddings: int = DEFAULT_MAX_CONCURRENT_EMBEDDINGS,
        similarity_floor: float = SEMANTIC_SIMILARITY_FLOOR,
        min_match_score: float = MIN_MATCH_SCORE,
        max_results: int = MAX_RESULTS
    ):
        """
        Initialize semantic matcher.

        Args:
            provider: EmbeddingProvider used for query and skill vectors
            repository: CandidateRepository receiving embedding write-backs
            similarity_calc: SimilarityCalculator instance
            scorer: CandidateScorer for the composed score
            max_concurrent_embeddings: Upper bound on in-flight provider calls
            similarity_floor: Candidates whose best cosine is below this are dropped
            min_match_score: Candidates whose composed score falls below this are dropped
            max_results: Maximum results returned
        """
        self.provider = provider
        self.repository = repository
        self.similarity_calc = similarity_calc or SimilarityCalculator()
        self.scorer = scorer or CandidateScorer()
        self.max_concurrent_embeddings = max(1, max_concurrent_embeddings)
        self.similarity_floor = similarity_floor
        self.min_match_score = min_match_score
        self.max_results = max_results

    async def match(
        self,
        request: MatchRequest,
        candidates: Sequence[Candidate],
        requester_goals: Sequence[str]
    ) -> List[MatchResult]:
        """
        Rank candidates by cosine similarity to the embedded skill query.

        Returns:
            Up to max_results results, sorted by match_score descending.
            Empty when the provider is unconfigured or the query is blank.

        Raises:
            QueryEmbeddingError: if the query itself could not be embedded
        """
        if not self.provider.is_configured():
            return []

        query = str(request.skill_query or "").strip()
        if not normalize_skill_name(query):
            return []

        try:
            query_embedding = await self.provider.embed(query)
        except EmbeddingError as e:
            raise QueryEmbeddingError(f"Failed to embed skill query '{query}': {e}") from e

        semaphore = asyncio.Semaphore(self.max_concurrent_embeddings)
        save_lock = asyncio.Lock()
        best_matches = await asyncio.gather(*[
            self._resolve_candidate(candidate, query_embedding, semaphore, save_lock)
            for candidate in candidates
        ])

        top_k = TopKAccumulator(self.max_results)
        for candidate, (best_skill, best_similarity) in zip(candidates, best_matches):
            if best_skill is None or best_similarity < self.similarity_floor:
                continue

            breakdown = self.scorer.score(
                candidate,
                best_skill,
                best_similarity,
                request.desired_level,
                request.requester_availability,
                requester_goals
            )
            if breakdown.match_score < self.min_match_score:
                continue

            top_k.push(build_match_result(candidate, best_skill, breakdown))

        results = top_k.results()
        logger.debug(f"Semantic match for '{query}': {len(results)} results from {len(candidates)} candidates")
        return results

    async def _resolve_candidate(
        self,
        candidate: Candidate,
        query_embedding: List[float],
        semaphore: asyncio.Semaphore,
        save_lock: asyncio.Lock
    ) -> Tuple[Optional[TaughtSkill], float]:
        """
        Fill in missing embeddings for one candidate and find its best skill.

        Works on a copy of the skill list; the stored record is only
        replaced by the single save after every skill has resolved.
        """
        working_skills = [
            TaughtSkill(name=skill.name, level=skill.level, embedding=skill.embedding)
            for skill in candidate.taught_skills
        ]
        missing = [skill for skill in working_skills if skill.name and not skill.has_embedding]

        fresh = await asyncio.gather(*[
            self._embed_skill(skill.name, semaphore) for skill in missing
        ])

        dirty = False
        for skill, embedding in zip(missing, fresh):
            if embedding:
                skill.embedding = embedding
                dirty = True

        if dirty:
            await self._save_skills(candidate, working_skills, save_lock)

        best_skill = None
        best_similarity = 0.0
        for skill in working_skills:
            if not skill.has_embedding:
                continue
            similarity = self.similarity_calc.calculate(query_embedding, skill.embedding)
            if best_skill is None or similarity > best_similarity:
                best_skill = skill
                best_similarity = similarity

        return best_skill, best_similarity

    async def _embed_skill(self, skill_name: str, semaphore: asyncio.Semaphore) -> Optional[List[float]]:
        async with semaphore:
            try:
                return await self.provider.embed(skill_name)
            except EmbeddingError as e:
                logger.warning(f"Skipping skill '{skill_name}': embedding failed: {e}")
                return None

    async def _save_skills(
        self,
        candidate: Candidate,
        taught_skills: List[TaughtSkill],
        save_lock: asyncio.Lock
    ) -> None:
        """Persist off the event loop; the lock keeps one repository call in flight per request."""
        try:
            async with save_lock:
                await asyncio.to_thread(self.repository.save_candidate_skills, candidate.id, taught_skills)
        except Exception as e:
            # The fresh vectors are still used for this request's ranking.
            logger.warning(f"Failed to persist skill embeddings for candidate {candidate.id}: {e}")
