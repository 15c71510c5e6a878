from database.repositories.base import BaseRepository
from database.repositories.mentor import MentorRepository

__all__ = [
    'BaseRepository',
    'MentorRepository',
]
