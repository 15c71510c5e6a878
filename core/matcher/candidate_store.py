#!/usr/bin/env python3
"""
Candidate Store - Interface for reading mentors and persisting skill embeddings.

Provides abstraction layer for persistence operations.
"""
from typing import Protocol, runtime_checkable, List, Dict, Optional
import copy

from core.matcher.models import Candidate, RequesterProfile, TaughtSkill


@runtime_checkable
class CandidateRepository(Protocol):
    """Protocol for the mentor candidate source and embedding write-back."""

    def get_requester_profile(self, user_id: str) -> Optional[RequesterProfile]:
        """
        Fetch the learner's profile.

        Args:
            user_id: Requesting user's identifier

        Returns:
            RequesterProfile, or None if the user is unknown
        """
        ...

    def list_candidates_with_teachable_skills(self, exclude_user_id: str) -> List[Candidate]:
        """
        List every mentor with at least one taught skill.

        Args:
            exclude_user_id: User to leave out (the requester)

        Returns:
            Candidates in stable repository order
        """
        ...

    def save_candidate_skills(self, candidate_id: str, taught_skills: List[TaughtSkill]) -> None:
        """
        Overwrite a candidate's full taught-skills list.

        Args:
            candidate_id: Mentor identifier
            taught_skills: Complete list, including embeddings to persist
        """
        ...


class InMemoryCandidateRepository:
    """In-memory implementation of the candidate repository for testing and demos."""

    def __init__(
        self,
        candidates: Optional[List[Candidate]] = None,
        profiles: Optional[Dict[str, RequesterProfile]] = None
    ):
        """Initialize in-memory storage."""
        self._candidates: Dict[str, Candidate] = {}
        self._profiles: Dict[str, RequesterProfile] = dict(profiles or {})
        self.save_calls: List[str] = []
        for candidate in candidates or []:
            self.add_candidate(candidate)

    def add_candidate(self, candidate: Candidate) -> None:
        self._candidates[candidate.id] = candidate
        self._profiles.setdefault(candidate.id, RequesterProfile())

    def add_profile(self, user_id: str, profile: RequesterProfile) -> None:
        self._profiles[user_id] = profile

    def get_requester_profile(self, user_id: str) -> Optional[RequesterProfile]:
        return self._profiles.get(user_id)

    def list_candidates_with_teachable_skills(self, exclude_user_id: str) -> List[Candidate]:
        """Return deep copies so callers cannot mutate stored state."""
        return [
            copy.deepcopy(candidate)
            for candidate_id, candidate in self._candidates.items()
            if candidate_id != exclude_user_id and candidate.taught_skills
        ]

    def save_candidate_skills(self, candidate_id: str, taught_skills: List[TaughtSkill]) -> None:
        self.save_calls.append(candidate_id)
        candidate = self._candidates.get(candidate_id)
        if candidate is None:
            raise KeyError(f"Unknown candidate: {candidate_id}")
        candidate.taught_skills = copy.deepcopy(list(taught_skills))

    def get_candidate(self, candidate_id: str) -> Optional[Candidate]:
        return self._candidates.get(candidate_id)

    def clear(self) -> None:
        """Clear all stored data."""
        self._candidates.clear()
        self._profiles.clear()
        self.save_calls.clear()
