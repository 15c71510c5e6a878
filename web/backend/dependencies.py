#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

from functools import lru_cache
from typing import Generator

from fastapi import Depends

from core.app_context import AppContext
from core.matcher.candidate_store import CandidateRepository
from database.uow import mentor_uow
from .config import get_config


@lru_cache()
def get_app_context() -> AppContext:
    """
    Process-wide AppContext (embedding provider, cache, session factory).

    Tests replace it through app.dependency_overrides.
    """
    return AppContext.build(get_config())


def get_candidate_repository(
    ctx: AppContext = Depends(get_app_context)
) -> Generator[CandidateRepository, None, None]:
    """
    FastAPI dependency that yields a MentorRepository in a unit of work.

    Embedding write-backs made while matching are committed when the
    request completes.

    Yields:
        CandidateRepository bound to a fresh session.
    """
    with mentor_uow(ctx.session_factory) as repo:
        yield repo
