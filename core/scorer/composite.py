#!/usr/bin/env python3
"""
Composite Score - Weighted blend of the per-candidate signals.

    match_score = clamp(0.6 * skill + 0.2 * level + 0.15 * availability
                        + 0.05 * quality + bonus, 0, 1)

Skill relevance dominates; level and availability act as feasibility
signals; profile quality only breaks near-ties. The multi-skill bonus is
added after weighting so the small quality weight cannot dilute it.
"""

import math
from typing import Optional

WEIGHT_SKILL = 0.6
WEIGHT_LEVEL = 0.2
WEIGHT_AVAILABILITY = 0.15
WEIGHT_PROFILE_QUALITY = 0.05


def clamp_unit(value: Optional[float]) -> float:
    """Clamp to [0, 1]; None and NaN become 0."""
    if value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number):
        return 0.0
    return max(0.0, min(1.0, number))


def _safe(value: Optional[float]) -> float:
    if value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(number) else number


def compose_score(
    skill_similarity: float,
    level_score: float,
    availability_score: float,
    quality_score: float,
    bonus: float = 0.0
) -> float:
    """Combine sub-scores into the final match score in [0, 1]."""
    score = (
        WEIGHT_SKILL * _safe(skill_similarity)
        + WEIGHT_LEVEL * _safe(level_score)
        + WEIGHT_AVAILABILITY * _safe(availability_score)
        + WEIGHT_PROFILE_QUALITY * _safe(quality_score)
        + _safe(bonus)
    )
    return clamp_unit(score)
