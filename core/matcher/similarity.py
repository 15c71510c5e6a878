#!/usr/bin/env python3
"""
Similarity Calculator - String and vector similarity between skills.
"""
import math
from typing import List, Optional, Sequence

from core.utils import normalize_skill_name

EXACT_MATCH_SCORE = 1.0
PREFIX_MATCH_SCORE = 0.9
SUBSTRING_MATCH_SCORE = 0.7
TOKEN_OVERLAP_FLOOR = 0.3
TOKEN_OVERLAP_CEILING = 0.6


def string_similarity(a: Optional[str], b: Optional[str]) -> float:
    """
    Lexical similarity between two skill names (0.0 to 1.0).

    Tiers, checked in order on normalized names:
        equal -> 1.0, prefix -> 0.9, substring -> 0.7,
        otherwise token Jaccard squeezed into [0.3, 0.6].

    Partial token overlap lands in a "maybe relevant" band so it never
    competes with a real prefix or substring hit.
    """
    s1 = normalize_skill_name(a)
    s2 = normalize_skill_name(b)

    if not s1 or not s2:
        return 0.0
    if s1 == s2:
        return EXACT_MATCH_SCORE
    if s1.startswith(s2) or s2.startswith(s1):
        return PREFIX_MATCH_SCORE
    if s1 in s2 or s2 in s1:
        return SUBSTRING_MATCH_SCORE

    tokens1 = set(s1.split())
    tokens2 = set(s2.split())
    union = tokens1 | tokens2
    if not union:
        return 0.0

    jaccard = len(tokens1 & tokens2) / len(union)
    return max(TOKEN_OVERLAP_FLOOR, min(TOKEN_OVERLAP_CEILING, jaccard))


def _as_number(value) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(number) else number


def cosine_similarity(vec1: Optional[Sequence[float]], vec2: Optional[Sequence[float]]) -> float:
    """
    Cosine similarity clamped to [0.0, 1.0].

    Returns 0.0 when either vector is missing or empty, when lengths differ,
    or when either norm is zero. Negative cosine is reported as 0.0.
    """
    if not vec1 or not vec2 or len(vec1) != len(vec2):
        return 0.0

    dot_product = 0.0
    norm1 = 0.0
    norm2 = 0.0
    for a, b in zip(vec1, vec2):
        x = _as_number(a)
        y = _as_number(b)
        dot_product += x * y
        norm1 += x * x
        norm2 += y * y

    denominator = math.sqrt(norm1) * math.sqrt(norm2)
    if denominator == 0:
        return 0.0

    return max(0.0, min(1.0, dot_product / denominator))


class SimilarityCalculator:
    """Calculate skill similarity, lexically or between embeddings."""

    @staticmethod
    def calculate(vec1: List[float], vec2: List[float]) -> float:
        """Cosine similarity between two embedding vectors (0.0 to 1.0)."""
        return cosine_similarity(vec1, vec2)

    @staticmethod
    def skill_name(a: str, b: str) -> float:
        """Lexical similarity between two skill names (0.0 to 1.0)."""
        return string_similarity(a, b)
