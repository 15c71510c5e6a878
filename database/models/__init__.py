from .base import Base
from .user import User, generate_user_id

__all__ = [
    'Base',
    'User',
    'generate_user_id',
]
