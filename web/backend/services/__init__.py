"""Business logic services."""

from .mentor_match_service import MentorMatchService
