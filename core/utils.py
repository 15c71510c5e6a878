import re
import logging
from typing import Optional

logger = logging.getLogger(__name__)

SKILL_SYNONYMS = {
    'js': 'javascript',
    'node': 'node.js',
    'nodejs': 'node.js',
    'rn': 'react-native',
    'react native': 'react-native',
}

_SKILL_STRIP_CHARS = re.compile(r"[()+\-_/]")
_WHITESPACE = re.compile(r"\s+")


def normalize_skill_name(name: Optional[str]) -> str:
    """
    Normalize a free-text skill name for comparison.

    Lowercases, replaces the characters ``()+-_/`` with spaces, collapses
    whitespace and maps common aliases through SKILL_SYNONYMS, so that
    "Node", "nodejs" and "node.js" compare equal.

    Args:
        name: Raw skill name (None is treated as empty)

    Returns:
        Normalized name, or "" for empty input
    """
    if not name:
        return ""

    normalized = str(name).lower().strip()
    normalized = _SKILL_STRIP_CHARS.sub(" ", normalized)
    normalized = _WHITESPACE.sub(" ", normalized).strip()

    return SKILL_SYNONYMS.get(normalized, normalized)


def normalize_mode(raw: Optional[str]) -> Optional[str]:
    """Lowercase/trim a matching mode string; None when it is not a known mode."""
    mode = str(raw or "").strip().lower()
    if mode in ("local", "openai", "hybrid"):
        return mode
    return None
