#!/usr/bin/env python3
"""
Scoring Service - Turns a candidate's best skill match into a match score.

Shared by the lexical and semantic matchers: both find the best taught
skill their own way, then hand the similarity to CandidateScorer for the
level, availability, profile-quality and multi-skill signals.
"""

from typing import Iterable, Sequence, TYPE_CHECKING
import logging

from core.scorer.models import ScoreBreakdown
from core.scorer.availability import availability_score
from core.scorer.signals import level_compatibility, profile_quality, multi_skill_bonus
from core.scorer.composite import clamp_unit, compose_score

if TYPE_CHECKING:
    from core.matcher.models import AvailabilitySlot, Candidate, TaughtSkill

logger = logging.getLogger(__name__)

DEFAULT_DESIRED_LEVEL = "Beginner"
UNSPECIFIED_LEVEL = "Not specified"


class CandidateScorer:
    """Compose the final match score for one candidate."""

    def score(
        self,
        candidate: 'Candidate',
        best_skill: 'TaughtSkill',
        skill_similarity: float,
        desired_level: str,
        requester_slots: Sequence['AvailabilitySlot'],
        requester_goals: Iterable[str]
    ) -> ScoreBreakdown:
        """
        Score a candidate whose best-matching taught skill is already known.

        Args:
            candidate: Mentor being ranked
            best_skill: The candidate's best-matching taught skill
            skill_similarity: Similarity of best_skill to the query (0.0-1.0)
            desired_level: Level the learner asked for
            requester_slots: Learner's weekly availability
            requester_goals: Learner's other learning goals

        Returns:
            ScoreBreakdown with every sub-score clamped to [0, 1]
        """
        level = level_compatibility(
            desired_level or DEFAULT_DESIRED_LEVEL,
            best_skill.level or UNSPECIFIED_LEVEL
        )
        availability = availability_score(requester_slots, candidate.availability)
        quality = profile_quality(candidate)
        bonus = multi_skill_bonus(requester_goals, candidate.taught_skills)

        breakdown = ScoreBreakdown(
            skill_similarity=clamp_unit(skill_similarity),
            level_score=clamp_unit(level),
            availability_score=clamp_unit(availability),
            quality_score=clamp_unit(quality),
            multi_skill_bonus=bonus,
        )
        breakdown.match_score = compose_score(
            breakdown.skill_similarity,
            breakdown.level_score,
            breakdown.availability_score,
            breakdown.quality_score,
            breakdown.multi_skill_bonus
        )
        return breakdown
