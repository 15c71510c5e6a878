"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures shared by
the unit tests. Async tests run under pytest-asyncio.
"""

import pytest
from sqlalchemy.pool import StaticPool

from core.matcher.candidate_store import InMemoryCandidateRepository
from core.matcher.models import AvailabilitySlot, RequesterProfile
from database.database import create_db_engine, create_session_factory
from database.models import Base
from tests.mocks.matcher_mocks import MockEmbeddingProvider, make_candidate


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as requiring database (deselect with '-m \"not db\"')"
    )


@pytest.fixture
def evening_slots():
    return [AvailabilitySlot(day_of_week=1, start="18:00", end="22:00")]


@pytest.fixture
def repository(evening_slots):
    """In-memory repository with a requester and three mentors."""
    repo = InMemoryCandidateRepository()
    repo.add_profile("learner", RequesterProfile(learning_goals=["Python", "SQL"]))
    repo.add_candidate(make_candidate(
        "m-react", [("React Native", "Intermediate"), ("Python", "Advanced")],
        availability=evening_slots, avg_rating=4.5, rating_count=10
    ))
    repo.add_candidate(make_candidate(
        "m-python", [("Python", "Beginner")], availability=evening_slots
    ))
    repo.add_candidate(make_candidate("m-cooking", [("Italian Cooking", "Advanced")]))
    return repo


@pytest.fixture
def provider():
    return MockEmbeddingProvider()


@pytest.fixture
def sqlite_session_factory():
    """
    In-memory SQLite shared across connections, with all tables created.
    """
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield create_session_factory(engine)
    engine.dispose()


@pytest.fixture
def db_session(sqlite_session_factory):
    session = sqlite_session_factory()
    try:
        yield session
    finally:
        session.close()
