"""Base repository pattern implementation.

Repositories expose the three store primitives the curriculum engine is
built on: upsert by key, delete by id and ordered reads. They flush but
never commit; services decide where a unit of work ends.
"""

import uuid
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, cast
from uuid import UUID

from sqlalchemy.orm import Session

ModelType = TypeVar("ModelType")


@dataclass
class UpsertOutcome(Generic[ModelType]):
    instance: ModelType
    created: bool
    changed: bool


class BaseRepository(Generic[ModelType]):
    """Generic repository over a model with a UUID ``id`` primary key.

    Example:
        ```python
        class SectionRepository(BaseRepository[Section]):
            def __init__(self, db: Session):
                super().__init__(db, Section)
        ```
    """

    def __init__(self, db: Session, model: type[ModelType]):
        """Initialize repository with database session and model class.

        Args:
            db: SQLAlchemy session.
            model: The model class this repository operates on.
        """
        self.db = db
        self.model = model

    def get_by_id(self, entity_id: UUID) -> ModelType | None:
        """Get a single entity by ID, or None."""
        return cast(ModelType | None, self.db.get(self.model, entity_id))

    def upsert(self, entity_id: UUID | None, **fields: Any) -> UpsertOutcome[ModelType]:
        """Create the entity or update it in place, keyed by ``entity_id``.

        An absent id gets a fresh UUID; an unknown id is created as given.
        Only attributes whose value differs are assigned, so an unchanged
        row produces no UPDATE.

        Args:
            entity_id: Primary key, or None for a new entity.
            **fields: Column values to write.

        Returns:
            The instance plus whether it was created or changed.
        """
        instance = self.get_by_id(entity_id) if entity_id is not None else None

        if instance is None:
            instance = self.model(id=entity_id or uuid.uuid4(), **fields)  # type: ignore[call-arg]
            self.db.add(instance)
            self.db.flush()
            return UpsertOutcome(instance=instance, created=True, changed=True)

        changed = False
        for key, value in fields.items():
            if getattr(instance, key) != value:
                setattr(instance, key, value)
                changed = True
        if changed:
            self.db.flush()
        return UpsertOutcome(instance=instance, created=False, changed=changed)

    def delete(self, instance: ModelType) -> None:
        """Delete an entity, letting ORM cascades remove its children."""
        self.db.delete(instance)
        self.db.flush()

    def delete_by_id(self, entity_id: UUID) -> bool:
        """Delete an entity by ID.

        Returns:
            False when nothing with that id exists.
        """
        instance = self.get_by_id(entity_id)
        if instance is None:
            return False
        self.delete(instance)
        return True
