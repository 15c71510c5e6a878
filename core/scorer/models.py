#!/usr/bin/env python3
"""
Scoring Models - Data structures for scoring results.
"""

from typing import Dict
from dataclasses import dataclass


@dataclass
class ScoreBreakdown:
    """Per-candidate sub-scores and the composed match score."""
    skill_similarity: float = 0.0
    level_score: float = 0.0
    availability_score: float = 0.0
    quality_score: float = 0.0
    multi_skill_bonus: float = 0.0
    match_score: float = 0.0

    def as_dict(self) -> Dict[str, float]:
        return {
            'skill_similarity': self.skill_similarity,
            'level_score': self.level_score,
            'availability_score': self.availability_score,
            'quality_score': self.quality_score,
            'multi_skill_bonus': self.multi_skill_bonus,
            'match_score': self.match_score,
        }
