#!/usr/bin/env python3
"""
Matcher Service - Mode resolution and dispatch for mentor matching.

Resolves the requested mode (local, openai, hybrid), runs the lexical
and/or semantic matcher and reports how the results were produced:

- local:  lexical only.
- openai: semantic only; never substitutes lexical results.
- hybrid: semantic first, lexical fallback on any non-OK outcome.

Every failure path resolves to a MatchResponse; only cancellation
propagates to the caller.
"""
from typing import List, Optional, Tuple
import asyncio
import logging

from core.config_loader import MatchingConfig
from core.utils import normalize_mode, normalize_skill_name
from core.llm.interfaces import EmbeddingProvider
from core.matcher.candidate_store import CandidateRepository
from core.matcher.lexical_matcher import LexicalMatcher
from core.matcher.semantic_matcher import SemanticMatcher
from core.matcher.models import (
    Candidate, MatchMode, MatchOutcome, MatchRequest, MatchResponse,
    MatchResult, MatchingStatus, OutcomeReason
)

logger = logging.getLogger(__name__)


class MatcherService:
    """
    Orchestrates one match request end to end.

    Loads the requester profile and the candidate pool once per request
    and hands both to the matcher(s) selected by the resolved mode.
    """

    def __init__(
        self,
        repository: CandidateRepository,
        provider: EmbeddingProvider,
        config: Optional[MatchingConfig] = None,
        lexical_matcher: Optional[LexicalMatcher] = None,
        semantic_matcher: Optional[SemanticMatcher] = None
    ):
        """
        Initialize matcher service with dependencies.

        Args:
            repository: CandidateRepository for candidates and embedding write-back
            provider: EmbeddingProvider for the semantic path
            config: MatchingConfig with the default mode and concurrency bound
            lexical_matcher: Optional pre-built LexicalMatcher
            semantic_matcher: Optional pre-built SemanticMatcher
        """
        self.repository = repository
        self.provider = provider
        self.config = config or MatchingConfig()
        self.lexical_matcher = lexical_matcher or LexicalMatcher()
        self.semantic_matcher = semantic_matcher or SemanticMatcher(
            provider=provider,
            repository=repository,
            max_concurrent_embeddings=self.config.max_concurrent_embeddings
        )

    @property
    def default_mode(self) -> MatchMode:
        return configured_mode(self.config)

    def resolve_mode(self, requested: Optional[str]) -> MatchMode:
        """Per-request override, else the configured default, else local. Unknown strings count as unset."""
        mode = normalize_mode(requested)
        if mode:
            return MatchMode(mode)
        return self.default_mode

    async def find_mentor_matches(self, request: MatchRequest) -> MatchResponse:
        """
        Rank mentors for a request.

        Args:
            request: MatchRequest with skill query, level, availability and mode

        Returns:
            MatchResponse with up to 20 results and the outcome descriptor
        """
        mode = self.resolve_mode(request.mode)

        try:
            candidates, goals = await asyncio.to_thread(self._load_inputs, request)
        except Exception as e:
            logger.warning(f"Failed to load candidates for requester {request.requester_id}: {e}")
            return MatchResponse(results=[], meta=self._read_failure_outcome(mode))

        results, outcome = await self._dispatch(mode, request, candidates, goals)
        logger.info(
            f"Matched '{request.skill_query}' for {request.requester_id}: {len(results)} results "
            f"(requested={outcome.requested_mode.value}, used={outcome.mode_used.value}, "
            f"fallback={outcome.fallback_used}, reason={outcome.reason.value})"
        )
        return MatchResponse(results=results, meta=outcome)

    def status(self) -> MatchingStatus:
        return matching_status(self.provider, self.config)

    def _load_inputs(self, request: MatchRequest) -> Tuple[List[Candidate], List[str]]:
        """
        Requester goals and candidate pool; both empty for blank queries or unknown requesters.

        Blocking repository reads; called from a worker thread.
        """
        if not normalize_skill_name(request.skill_query):
            return [], []

        profile = self.repository.get_requester_profile(request.requester_id)
        if profile is None:
            logger.info(f"Unknown requester {request.requester_id}; returning no matches")
            return [], []

        candidates = self.repository.list_candidates_with_teachable_skills(request.requester_id)
        return candidates, list(profile.learning_goals or [])

    async def _dispatch(
        self,
        mode: MatchMode,
        request: MatchRequest,
        candidates: List[Candidate],
        goals: List[str]
    ) -> Tuple[List[MatchResult], MatchOutcome]:
        if mode is MatchMode.LOCAL:
            results = self.lexical_matcher.match(request, candidates, goals)
            return results, MatchOutcome(mode, MatchMode.LOCAL, False, OutcomeReason.OK)

        reason, semantic_results = await self._run_semantic(request, candidates, goals)

        if mode is MatchMode.OPENAI:
            return semantic_results, MatchOutcome(mode, MatchMode.OPENAI, False, reason)

        # Hybrid
        if reason is OutcomeReason.OK:
            return semantic_results, MatchOutcome(mode, MatchMode.OPENAI, False, reason)

        logger.info(f"Hybrid match falling back to lexical ({reason.value})")
        results = self.lexical_matcher.match(request, candidates, goals)
        return results, MatchOutcome(mode, MatchMode.LOCAL, True, reason)

    async def _run_semantic(
        self,
        request: MatchRequest,
        candidates: List[Candidate],
        goals: List[str]
    ) -> Tuple[OutcomeReason, List[MatchResult]]:
        """Semantic pass reduced to a reason code; results are empty unless OK."""
        if not self.provider.is_configured():
            return OutcomeReason.NO_KEY, []

        try:
            results = await self.semantic_matcher.match(request, candidates, goals)
        except Exception as e:
            logger.warning(f"Semantic match failed for '{request.skill_query}': {e}")
            return OutcomeReason.PROVIDER_ERROR, []

        if not results:
            return OutcomeReason.EMPTY, []
        return OutcomeReason.OK, results

    def _read_failure_outcome(self, mode: MatchMode) -> MatchOutcome:
        if mode is MatchMode.LOCAL:
            return MatchOutcome(mode, MatchMode.LOCAL, False, OutcomeReason.OK)
        if mode is MatchMode.OPENAI:
            return MatchOutcome(mode, MatchMode.OPENAI, False, OutcomeReason.PROVIDER_ERROR)
        return MatchOutcome(mode, MatchMode.LOCAL, True, OutcomeReason.PROVIDER_ERROR)


def configured_mode(config: MatchingConfig) -> MatchMode:
    return MatchMode(normalize_mode(config.default_mode) or MatchMode.LOCAL.value)


def matching_status(provider: EmbeddingProvider, config: MatchingConfig) -> MatchingStatus:
    """Read-only readiness view; needs neither a repository nor the network."""
    configured = provider.is_configured()
    return MatchingStatus(
        default_mode=configured_mode(config),
        openai_available=configured,
        reason=OutcomeReason.OK if configured else OutcomeReason.NO_KEY,
        recommended_mode=MatchMode.HYBRID if configured else MatchMode.LOCAL
    )
