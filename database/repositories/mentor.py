import logging
from typing import Any, List, Optional

from sqlalchemy import select

from core.matcher.models import AvailabilitySlot, Candidate, RequesterProfile, TaughtSkill
from database.models import User
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class MentorRepository(BaseRepository):
    """SQL-backed candidate repository for mentor matching."""

    def get_requester_profile(self, user_id: str) -> Optional[RequesterProfile]:
        user = self.get_by_id(User, user_id)
        if user is None:
            return None
        return RequesterProfile(learning_goals=self._learning_goals(user.skills_to_learn))

    def list_candidates_with_teachable_skills(self, exclude_user_id: str) -> List[Candidate]:
        stmt = (
            select(User)
            .where(User.id != str(exclude_user_id))
            .order_by(User.created_at, User.id)
        )
        users = self.db.execute(stmt).scalars().all()

        candidates = []
        for user in users:
            candidate = self.to_candidate(user)
            if candidate.taught_skills:
                candidates.append(candidate)
        return candidates

    def save_candidate_skills(self, candidate_id: str, taught_skills: List[TaughtSkill]) -> None:
        user = self.get_by_id(User, candidate_id)
        if user is None:
            raise ValueError(f"User {candidate_id} not found")

        # Savepoint: a failed write leaves the outer transaction usable
        with self.db.begin_nested():
            # Reassign so the JSON column is flagged dirty
            user.skills_to_teach = [skill.to_dict() for skill in taught_skills]
            self.flush()
        logger.debug(f"Saved {len(taught_skills)} taught skills for user {candidate_id}")

    def create_user(self, **fields: Any) -> User:
        user = User(**fields)
        self.db.add(user)
        self.flush()
        return user

    @staticmethod
    def to_candidate(user: User) -> Candidate:
        return Candidate(
            id=str(user.id),
            display_name=user.full_name or "",
            taught_skills=[
                TaughtSkill.from_dict(item)
                for item in (user.skills_to_teach or [])
                if isinstance(item, dict) and item.get('name')
            ],
            availability=[
                AvailabilitySlot.from_dict(item)
                for item in (user.availability_slots or [])
                if isinstance(item, dict)
            ],
            avg_rating=user.avg_rating,
            rating_count=user.rating_count or 0,
            points=user.points or 0,
            xp=user.xp or 0,
            languages=[str(language) for language in (user.languages or []) if language]
        )

    @staticmethod
    def _learning_goals(raw: Optional[List[Any]]) -> List[str]:
        goals = []
        for item in raw or []:
            name = item.get('name') if isinstance(item, dict) else item
            if name:
                goals.append(str(name))
        return goals
