#!/usr/bin/env python3
"""
Scoring Module - Per-candidate relevance signals.

Public API:
- CandidateScorer: Composes the final match score for a candidate
- ScoreBreakdown: Dataclass for the sub-scores

Split into focused, single-responsibility modules:

- availability.py: Weekly slot overlap scoring
- signals.py: Level compatibility, profile quality, multi-skill bonus
- composite.py: Weighted composition and clamping
- models.py: Data structures (ScoreBreakdown)
- service.py: CandidateScorer
"""

from core.scorer.models import ScoreBreakdown
from core.scorer.service import CandidateScorer
from core.scorer.composite import compose_score, clamp_unit
from core.scorer.availability import availability_score, availability_overlap_minutes
from core.scorer.signals import level_compatibility, profile_quality, multi_skill_bonus

__all__ = [
    'CandidateScorer',
    'ScoreBreakdown',
    'compose_score',
    'clamp_unit',
    'availability_score',
    'availability_overlap_minutes',
    'level_compatibility',
    'profile_quality',
    'multi_skill_bonus',
]
