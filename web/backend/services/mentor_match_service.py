#!/usr/bin/env python3
"""
Mentor match service - translates between API models and the matcher.
"""

import logging

from core.matcher.models import AvailabilitySlot, MatchRequest, MatchResponse, MatchResult, MatchingStatus
from core.matcher.service import MatcherService
from ..exceptions import InvalidMatchRequestException
from ..models.requests import MentorMatchRequest
from ..models.responses import (
    AvailabilitySlotResponse,
    MatchedSkillResponse,
    MatchMeta,
    MatchingStatusResponse,
    MentorMatch,
    MentorMatchesResponse,
    TaughtSkillResponse
)

logger = logging.getLogger(__name__)


class MentorMatchService:
    """Service for mentor matching requests."""

    def __init__(self, matcher: MatcherService):
        self.matcher = matcher

    async def find_mentors(self, payload: MentorMatchRequest) -> MentorMatchesResponse:
        """
        Validate the payload and run the matcher.

        Raises:
            InvalidMatchRequestException: if skill or level is missing or blank.
        """
        request = self.to_match_request(payload)
        response = await self.matcher.find_mentor_matches(request)
        return self.to_response(response)

    @staticmethod
    def to_status_response(status: MatchingStatus) -> MatchingStatusResponse:
        return MatchingStatusResponse(
            default_mode=status.default_mode.value,
            openai_available=status.openai_available,
            reason=status.reason.value,
            recommended_mode=status.recommended_mode.value
        )

    @staticmethod
    def to_match_request(payload: MentorMatchRequest) -> MatchRequest:
        skill = (payload.skill or "").strip()
        level = (payload.level or "").strip()
        if not skill or not level:
            raise InvalidMatchRequestException("skill and level are required")

        return MatchRequest(
            requester_id=payload.requester_id,
            skill_query=skill,
            desired_level=level,
            requester_availability=[
                AvailabilitySlot(day_of_week=slot.day_of_week, start=slot.start, end=slot.end)
                for slot in payload.availability_slots
            ],
            mode=payload.mode
        )

    @staticmethod
    def to_response(response: MatchResponse) -> MentorMatchesResponse:
        results = [MentorMatchService._to_mentor_match(result) for result in response.results]
        meta = response.meta
        return MentorMatchesResponse(
            success=True,
            count=len(results),
            results=results,
            meta=MatchMeta(
                requested_mode=meta.requested_mode.value,
                mode_used=meta.mode_used.value,
                fallback_used=meta.fallback_used,
                reason=meta.reason.value
            )
        )

    @staticmethod
    def _to_mentor_match(result: MatchResult) -> MentorMatch:
        return MentorMatch(
            mentor_id=result.mentor_id,
            display_name=result.display_name,
            match_score=result.match_score,
            matched_skill=MatchedSkillResponse(
                name=result.matched_skill.name,
                level=result.matched_skill.level,
                similarity_score=result.matched_skill.similarity_score
            ),
            taught_skills=[
                TaughtSkillResponse(name=skill.name, level=skill.level)
                for skill in result.taught_skills
            ],
            availability=[
                AvailabilitySlotResponse(day_of_week=slot.day_of_week, start=slot.start, end=slot.end)
                for slot in result.availability
            ],
            score_components=dict(result.score_components)
        )
