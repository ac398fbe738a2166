"""
Base repository class for data access.

Repositories hold query logic so services deal in domain operations and
tests can swap the data layer. They never commit: the calling service owns
the transaction boundary.

Example:
    class GameRepository(BaseRepository[Game]):
        def find_by_week(self, season: int, week: int) -> List[Game]:
            return self.query().filter(Game.season == season, Game.week == week).all()
"""
from abc import ABC
from typing import TypeVar, Generic, Type, Optional, Any
from sqlalchemy.orm import Query, Session

T = TypeVar("T")


class BaseRepository(Generic[T], ABC):
    """
    Common data access methods for one model.

    Attributes:
        model_type: The SQLAlchemy model class this repository manages
        db: The database session
    """

    def __init__(self, model_type: Type[T], db: Session):
        self.model_type = model_type
        self.db = db

    # ========================================================================
    # CRUD
    # ========================================================================

    def find_by_id(self, id: Any) -> Optional[T]:
        """Find a single record by primary key."""
        return self.db.query(self.model_type).filter(self.model_type.id == id).first()

    def create(self, **kwargs) -> T:
        """Add a new record to the session (not committed)."""
        instance = self.model_type(**kwargs)
        self.db.add(instance)
        return instance

    def update(self, instance: T, **kwargs) -> T:
        """Set the given attributes on an instance, ignoring unknown keys."""
        for key, value in kwargs.items():
            if hasattr(instance, key):
                setattr(instance, key, value)
        return instance

    def delete(self, id: Any) -> bool:
        """
        Delete a record by primary key.

        Returns:
            True if deleted, False if not found
        """
        instance = self.find_by_id(id)
        if instance:
            self.db.delete(instance)
            return True
        return False

    # ========================================================================
    # Query helpers
    # ========================================================================

    def query(self) -> Query:
        """Get a new query object for this model."""
        return self.db.query(self.model_type)

    def where_first(self, *criterion) -> Optional[T]:
        """Filter records using SQLAlchemy expressions and return the first match."""
        return self.db.query(self.model_type).filter(*criterion).first()

