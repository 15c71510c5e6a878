import contextlib
import logging
from typing import Optional

from sqlalchemy.orm import sessionmaker

from database.database import SessionLocal
from database.repositories.mentor import MentorRepository

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def mentor_uow(session_factory: Optional[sessionmaker] = None):
    """Per-unit-of-work transaction scope.

    Yields a MentorRepository bound to a fresh Session. Commits on success
    (including any embedding write-back done during matching), rolls back
    on exception, always closes.

    Usage:
        with mentor_uow() as repo:
            response = await matcher.find_mentor_matches(request)
        # commit happens automatically on successful exit
    """
    session = (session_factory or SessionLocal)()
    try:
        repo = MentorRepository(session)
        yield repo
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
