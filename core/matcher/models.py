#!/usr/bin/env python3
"""
Matcher Models - Data structures for mentor matching.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Dict, Any, Optional

MAX_RESULTS = 20


class MatchMode(str, Enum):
    """Matching strategy requested by the caller."""
    LOCAL = "local"
    OPENAI = "openai"
    HYBRID = "hybrid"


class OutcomeReason(str, Enum):
    """How a result set was produced."""
    OK = "OK"
    NO_KEY = "NO_KEY"
    EMPTY = "EMPTY"
    PROVIDER_ERROR = "PROVIDER_ERROR"


@dataclass
class AvailabilitySlot:
    """Weekly time window; day_of_week 0-6, start/end as "HH:MM"."""
    day_of_week: int
    start: str
    end: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AvailabilitySlot':
        return cls(
            day_of_week=int(data.get('dayOfWeek', data.get('day_of_week', 0))),
            start=str(data.get('from', data.get('start', '00:00'))),
            end=str(data.get('to', data.get('end', '00:00')))
        )

    def to_dict(self) -> Dict[str, Any]:
        return {'dayOfWeek': self.day_of_week, 'from': self.start, 'to': self.end}


@dataclass
class TaughtSkill:
    """Skill a mentor teaches; embedding is the lazily populated cache."""
    name: str
    level: str = "Not specified"
    embedding: Optional[List[float]] = None

    @property
    def has_embedding(self) -> bool:
        return bool(self.embedding)

    def without_embedding(self) -> 'TaughtSkill':
        return replace(self, embedding=None)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TaughtSkill':
        embedding = data.get('embedding')
        return cls(
            name=str(data.get('name') or ''),
            level=data.get('level') or "Not specified",
            embedding=list(embedding) if embedding else None
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'name': self.name, 'level': self.level}
        if self.embedding:
            data['embedding'] = list(self.embedding)
        return data


@dataclass
class Candidate:
    """Mentor profile eligible for ranking."""
    id: str
    display_name: str
    taught_skills: List[TaughtSkill] = field(default_factory=list)
    availability: List[AvailabilitySlot] = field(default_factory=list)
    avg_rating: Optional[float] = None
    rating_count: int = 0
    points: int = 0
    xp: int = 0
    languages: List[str] = field(default_factory=list)


@dataclass
class RequesterProfile:
    """The learner asking for matches; goals feed the multi-skill bonus."""
    learning_goals: List[str] = field(default_factory=list)


@dataclass
class MatchRequest:
    """A single mentor-matching request."""
    requester_id: str
    skill_query: str
    desired_level: str = "Beginner"
    requester_availability: List[AvailabilitySlot] = field(default_factory=list)
    mode: Optional[str] = None


@dataclass
class MatchedSkill:
    """The candidate's skill that best matched the query."""
    name: str
    level: str
    similarity_score: float


@dataclass
class MatchResult:
    """One ranked mentor."""
    mentor_id: str
    display_name: str
    match_score: float
    matched_skill: MatchedSkill
    taught_skills: List[TaughtSkill] = field(default_factory=list)
    availability: List[AvailabilitySlot] = field(default_factory=list)
    score_components: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'mentor_id': self.mentor_id,
            'display_name': self.display_name,
            'match_score': self.match_score,
            'matched_skill': {
                'name': self.matched_skill.name,
                'level': self.matched_skill.level,
                'similarity_score': self.matched_skill.similarity_score,
            },
            'taught_skills': [skill.without_embedding().to_dict() for skill in self.taught_skills],
            'availability': [slot.to_dict() for slot in self.availability],
            'score_components': dict(self.score_components),
        }


@dataclass
class MatchOutcome:
    """How the results were produced; mode_used is never hybrid."""
    requested_mode: MatchMode
    mode_used: MatchMode
    fallback_used: bool
    reason: OutcomeReason

    def to_dict(self) -> Dict[str, Any]:
        return {
            'requested_mode': self.requested_mode.value,
            'mode_used': self.mode_used.value,
            'fallback_used': self.fallback_used,
            'reason': self.reason.value,
        }


@dataclass
class MatchResponse:
    """Uniform return value of the orchestrator."""
    results: List[MatchResult]
    meta: MatchOutcome

    def to_dict(self) -> Dict[str, Any]:
        return {'results': [result.to_dict() for result in self.results], 'meta': self.meta.to_dict()}


@dataclass
class MatchingStatus:
    """Read-only view of matching readiness for operational tooling."""
    default_mode: MatchMode
    openai_available: bool
    reason: OutcomeReason
    recommended_mode: MatchMode

    def to_dict(self) -> Dict[str, Any]:
        return {
            'default_mode': self.default_mode.value,
            'openai_available': self.openai_available,
            'reason': self.reason.value,
            'recommended_mode': self.recommended_mode.value,
        }
