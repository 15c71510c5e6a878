#!/usr/bin/env python3
"""
Ranking - Bounded top-K accumulator for match results.

Keeps only the best K results while candidates stream in, instead of
sorting the whole pool and truncating. Ties keep arrival order.
"""
import heapq
from typing import List, Tuple

from core.matcher.models import Candidate, MatchedSkill, MatchResult, TaughtSkill, MAX_RESULTS
from core.scorer.models import ScoreBreakdown


class TopKAccumulator:
    """Min-heap of the K highest-scoring results seen so far."""

    def __init__(self, limit: int = MAX_RESULTS):
        self.limit = limit
        self._heap: List[Tuple[float, int, MatchResult]] = []
        self._seen = 0

    def __len__(self) -> int:
        return len(self._heap)

    def push(self, result: MatchResult) -> None:
        """Offer a result; the earlier of two equal scores ranks higher."""
        # Negated sequence number: on equal scores the later arrival is the
        # heap minimum and is evicted first.
        entry = (result.match_score, -self._seen, result)
        self._seen += 1

        if self.limit <= 0:
            return
        if len(self._heap) < self.limit:
            heapq.heappush(self._heap, entry)
        elif entry[:2] > self._heap[0][:2]:
            heapq.heapreplace(self._heap, entry)

    def results(self) -> List[MatchResult]:
        """Results sorted by score descending, ties in arrival order."""
        ordered = sorted(self._heap, key=lambda entry: entry[:2], reverse=True)
        return [entry[2] for entry in ordered]


def build_match_result(
    candidate: Candidate,
    best_skill: TaughtSkill,
    breakdown: ScoreBreakdown
) -> MatchResult:
    """Assemble the display payload for a ranked candidate (embeddings stripped)."""
    return MatchResult(
        mentor_id=str(candidate.id),
        display_name=candidate.display_name or "Unknown mentor",
        match_score=breakdown.match_score,
        matched_skill=MatchedSkill(
            name=best_skill.name,
            level=best_skill.level or "Not specified",
            similarity_score=breakdown.skill_similarity
        ),
        taught_skills=[skill.without_embedding() for skill in candidate.taught_skills],
        availability=list(candidate.availability),
        score_components=breakdown.as_dict()
    )
