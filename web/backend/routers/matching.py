#!/usr/bin/env python3
"""
Mentor matching endpoints.
"""

import logging
from fastapi import APIRouter, Depends

from core.app_context import AppContext
from core.matcher.candidate_store import CandidateRepository
from ..dependencies import get_app_context, get_candidate_repository
from ..services.mentor_match_service import MentorMatchService
from ..models.requests import MentorMatchRequest
from ..models.responses import MentorMatchesResponse, MatchingStatusResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["matching"])


@router.post("/matches/mentors", response_model=MentorMatchesResponse)
async def find_mentor_matches(
    payload: MentorMatchRequest,
    ctx: AppContext = Depends(get_app_context),
    repository: CandidateRepository = Depends(get_candidate_repository)
):
    """
    Rank mentors for a skill.

    Returns up to 20 mentors sorted by match score, plus a meta block
    describing which mode produced them and whether a fallback happened.
    """
    service = MentorMatchService(ctx.matcher_service(repository))
    return await service.find_mentors(payload)


@router.get("/matching/status", response_model=MatchingStatusResponse)
def get_matching_status(ctx: AppContext = Depends(get_app_context)):
    """
    Report the default mode and whether semantic matching is available.

    Opens no database session.
    """
    return MentorMatchService.to_status_response(ctx.matching_status())
