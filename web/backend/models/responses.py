#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, Field
from typing import List, Dict


class AvailabilitySlotResponse(BaseModel):
    day_of_week: int
    start: str
    end: str


class TaughtSkillResponse(BaseModel):
    """Taught skill for display (never carries an embedding)."""
    name: str
    level: str


class MatchedSkillResponse(BaseModel):
    name: str
    level: str
    similarity_score: float = Field(ge=0, le=1)


class MentorMatch(BaseModel):
    """One ranked mentor."""
    mentor_id: str
    display_name: str
    match_score: float = Field(ge=0, le=1)
    matched_skill: MatchedSkillResponse
    taught_skills: List[TaughtSkillResponse]
    availability: List[AvailabilitySlotResponse]
    score_components: Dict[str, float] = Field(default_factory=dict)


class MatchMeta(BaseModel):
    """How the results were produced."""
    requested_mode: str
    mode_used: str
    fallback_used: bool
    reason: str


class MentorMatchesResponse(BaseModel):
    """Response for mentor matching."""
    success: bool = True
    count: int
    results: List[MentorMatch]
    meta: MatchMeta


class MatchingStatusResponse(BaseModel):
    """Matching readiness."""
    default_mode: str
    openai_available: bool
    reason: str
    recommended_mode: str
