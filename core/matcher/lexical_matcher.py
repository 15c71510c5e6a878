#!/usr/bin/env python3
"""
Lexical Matcher - Rank mentors by string similarity of skill names.

For each candidate, find the best taught skill by string similarity and
compose the final match score. No external calls.
"""
from typing import List, Optional, Sequence, Tuple
import logging

from core.utils import normalize_skill_name
from core.matcher.models import Candidate, MatchRequest, MatchResult, TaughtSkill, MAX_RESULTS
from core.matcher.ranking import TopKAccumulator, build_match_result
from core.matcher.similarity import SimilarityCalculator
from core.scorer import CandidateScorer

logger = logging.getLogger(__name__)

LEXICAL_SKILL_FLOOR = 0.35
MIN_MATCH_SCORE = 0.25


class LexicalMatcher:
    """Heuristic matcher over skill names (pure, synchronous)."""

    def __init__(
        self,
        similarity_calc: Optional[SimilarityCalculator] = None,
        scorer: Optional[CandidateScorer] = None,
        skill_floor: float = LEXICAL_SKILL_FLOOR,
        min_match_score: float = MIN_MATCH_SCORE,
        max_results: int = MAX_RESULTS
    ):
        """
        Initialize lexical matcher.

        Args:
            similarity_calc: SimilarityCalculator instance
            scorer: CandidateScorer for the composed score
            skill_floor: Skills scoring below this are treated as noise
            min_match_score: Candidates whose composed score falls below this are dropped
            max_results: Maximum results returned
        """
        self.similarity_calc = similarity_calc or SimilarityCalculator()
        self.scorer = scorer or CandidateScorer()
        self.skill_floor = skill_floor
        self.min_match_score = min_match_score
        self.max_results = max_results

    def match(
        self,
        request: MatchRequest,
        candidates: Sequence[Candidate],
        requester_goals: Sequence[str]
    ) -> List[MatchResult]:
        """
        Rank candidates against the requested skill.

        Args:
            request: Match request (skill query, level, availability)
            candidates: Candidates in repository order
            requester_goals: Learner's learning goals for the multi-skill bonus

        Returns:
            Up to max_results results, sorted by match_score descending
        """
        if not normalize_skill_name(request.skill_query):
            return []

        top_k = TopKAccumulator(self.max_results)

        for candidate in candidates:
            best_skill, best_similarity = self._best_skill(request.skill_query, candidate.taught_skills)
            if best_skill is None:
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
        logger.debug(f"Lexical match for '{request.skill_query}': {len(results)} results")
        return results

    def _best_skill(
        self,
        skill_query: str,
        taught_skills: Sequence[TaughtSkill]
    ) -> Tuple[Optional[TaughtSkill], float]:
        """Highest-similarity skill at or above the floor; the first one wins ties."""
        best_skill = None
        best_similarity = 0.0

        for skill in taught_skills:
            if not skill or not skill.name:
                continue

            similarity = self.similarity_calc.skill_name(skill_query, skill.name)
            if similarity < self.skill_floor:
                continue

            if similarity > best_similarity:
                best_similarity = similarity
                best_skill = skill

        return best_skill, best_similarity
