import uuid

from sqlalchemy import Column, Text, Integer, Float, TIMESTAMP, JSON, func, Index

from .base import Base


def generate_user_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    """
    Platform user. Anyone with skills_to_teach is a mentor candidate.

    JSON payload shapes:
        skills_to_learn:    ["Python", ...]
        skills_to_teach:    [{"name": "React", "level": "Advanced", "embedding": [...]}, ...]
        availability_slots: [{"dayOfWeek": 1, "from": "18:00", "to": "20:00"}, ...]
    """
    __tablename__ = 'users'

    id = Column(Text, primary_key=True, default=generate_user_id)
    email = Column(Text, unique=True)
    full_name = Column(Text)

    # Matching profile
    skills_to_learn = Column(JSON, nullable=False, default=list)
    skills_to_teach = Column(JSON, nullable=False, default=list)
    availability_slots = Column(JSON, nullable=False, default=list)
    languages = Column(JSON, nullable=False, default=list)

    # Trust / engagement signals
    avg_rating = Column(Float)
    rating_count = Column(Integer, nullable=False, default=0)
    points = Column(Integer, nullable=False, default=0)
    xp = Column(Integer, nullable=False, default=0)

    # Audit
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_users_email', 'email'),
    )
