#!/usr/bin/env python3
"""
Candidate Signals - Level fit, profile quality and cross-goal bonus.
"""

from typing import Iterable, Sequence, TYPE_CHECKING

from core.utils import normalize_skill_name

if TYPE_CHECKING:
    from core.matcher.models import Candidate, TaughtSkill

BEGINNER = 1
INTERMEDIATE = 2
ADVANCED = 3

MULTI_SKILL_BONUS_STEP = 0.05
MULTI_SKILL_BONUS_CAP = 0.2


def level_to_rank(level: str) -> int:
    """Map a free-text level to 1..3; anything unrecognized is intermediate."""
    text = str(level or "").lower().strip()
    if "advanced" in text:
        return ADVANCED
    if "intermediate" in text:
        return INTERMEDIATE
    if "beginner" in text:
        return BEGINNER
    return INTERMEDIATE


def level_compatibility(desired: str, offered: str) -> float:
    """
    Directional level fit (0.0 to 1.0).

    A mentor at or above the requested level always beats one below it:
        same level 1.0, one above 0.9, two above 0.8,
        one below 0.5, two below 0.2.
    """
    diff = level_to_rank(offered) - level_to_rank(desired)

    if diff == 0:
        return 1.0
    if diff == 1:
        return 0.9
    if diff > 1:
        return 0.8
    if diff == -1:
        return 0.5
    return 0.2


def profile_quality(candidate: 'Candidate') -> float:
    """
    Completeness and trust heuristic for a mentor profile (0.0 to 1.0).

    Rewards a display name, a real rating (scaled by average and volume),
    a non-trivial teaching list, published availability, earned points/xp
    and listed languages.
    """
    score = 0.0

    if candidate.display_name:
        score += 0.05

    if candidate.avg_rating is not None and candidate.rating_count > 0:
        score += 0.25 * max(0.0, min(candidate.avg_rating / 5.0, 1.0))
        if candidate.rating_count >= 5:
            score += 0.05
        if candidate.rating_count >= 20:
            score += 0.05

    if len(candidate.taught_skills) >= 1:
        score += 0.1
    if len(candidate.taught_skills) >= 3:
        score += 0.15

    if candidate.availability:
        score += 0.15

    if candidate.points > 0:
        score += 0.05
    if candidate.xp > 0:
        score += 0.05

    if candidate.languages:
        score += 0.05

    return min(score, 1.0)


def multi_skill_bonus(
    requester_goals: Iterable[str],
    taught_skills: Sequence['TaughtSkill']
) -> float:
    """Additive reward of 0.05 per learning goal the mentor also teaches, capped at 0.2."""
    goal_names = {normalize_skill_name(goal) for goal in requester_goals or [] if goal}
    goal_names.discard("")
    if not goal_names or not taught_skills:
        return 0.0

    taught_names = {normalize_skill_name(skill.name) for skill in taught_skills}
    common = len(goal_names & taught_names)

    return min(common * MULTI_SKILL_BONUS_STEP, MULTI_SKILL_BONUS_CAP)
