"""
Base repository interface for data access layer.
This follows the Repository pattern to separate business logic from data access.
"""

from typing import Generic, TypeVar, Optional, Tuple, Type
from sqlalchemy.orm import Session, Query
from sqlalchemy.exc import IntegrityError
from abc import ABC

from app.exceptions import ConflictError

ModelType = TypeVar("ModelType")


def paginate(query: Query, page: int, limit: int) -> Tuple[list, int]:
    """Run a count and one page of ``query``; returns ``(rows, total)``."""
    total = query.order_by(None).count()
    rows = query.offset((page - 1) * limit).limit(limit).all()
    return rows, total


class BaseRepository(Generic[ModelType], ABC):
    """
    Base repository providing common CRUD operations.
    All repositories should inherit from this class.
    """

    conflict_message = "Resource already exists"

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def get_by_id(self, entity_id: int) -> Optional[ModelType]:
        """Get entity by its integer primary key"""
        return self.db.get(self.model, entity_id)

    def count(self) -> int:
        return self.db.query(self.model).count()

    def create(self, entity: ModelType) -> ModelType:
        """Create new entity; unique-key violations become ConflictError"""
        try:
            self.db.add(entity)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(self.conflict_message)
        self.db.refresh(entity)
        return entity

    def update(self, entity: ModelType) -> ModelType:
        """Update existing entity"""
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(self.conflict_message)
        self.db.refresh(entity)
        return entity

    def delete(self, entity_id: int) -> bool:
        """Delete entity by ID"""
        entity = self.get_by_id(entity_id)
        if entity:
            self.db.delete(entity)
            self.db.commit()
            return True
        return False

    def exists(self, entity_id: int) -> bool:
        """Check if entity exists"""
        return self.get_by_id(entity_id) is not None
