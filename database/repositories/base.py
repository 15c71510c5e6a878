from typing import Any, Optional, Type, TypeVar

from sqlalchemy.orm import Session

T = TypeVar('T')


class BaseRepository:
    """Session holder shared by repositories; transaction scope belongs to the unit of work."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, model: Type[T], entity_id: Any) -> Optional[T]:
        return self.db.get(model, str(entity_id))

    def flush(self) -> None:
        self.db.flush()
