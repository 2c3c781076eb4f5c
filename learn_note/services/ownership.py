"""
Ownership, uniqueness and CRUD for the user-owned, uniquely titled entities.

Folders, topics and resources share the same rules and differ only in
where the parent lives, whether it is mandatory, and how wide the title
uniqueness scope is. Each entity is described once by an
`OwnedEntityPolicy`; `OwnedEntityService` applies the rules for it.

Every query is filtered on the acting user's id, so a record owned by
someone else is indistinguishable from one that does not exist.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Type

from sqlalchemy import asc, desc
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from learn_note.database import commit_or_raise
from learn_note.models import Folder, Topic, Resource
from learn_note.utils.errors import Conflict, NotFound, ReferenceInvalid, ValidationFailure
from learn_note.utils.validation import coerce_parent

logger = logging.getLogger(__name__)

ORDER_DIRECTIONS = {"asc": asc, "desc": desc}


@dataclass(frozen=True)
class OwnedEntityPolicy:
    model: Type
    label: str
    parent_model: Optional[Type] = None
    parent_required: bool = False
    # True: titles only collide with siblings under the same parent
    unique_within_parent: bool = False
    # API order key -> model attribute name
    orderable: Dict[str, str] = field(default_factory=dict)
    default_direction: str = "asc"

    @property
    def conflict_message(self) -> str:
        return f"{self.label} with this title already exists"


FOLDER_POLICY = OwnedEntityPolicy(
    model=Folder,
    label="Folder",
    orderable={"id": "id", "title": "title", "createdAt": "created_at", "updatedAt": "updated_at"},
)

TOPIC_POLICY = OwnedEntityPolicy(
    model=Topic,
    label="Topic",
    parent_model=Folder,
    orderable={"id": "id", "title": "title", "createdAt": "created_at", "updatedAt": "updated_at"},
    default_direction="desc",
)

RESOURCE_POLICY = OwnedEntityPolicy(
    model=Resource,
    label="Resource",
    parent_model=Topic,
    parent_required=True,
    unique_within_parent=True,
    orderable={"id": "id", "title": "title", "lastOpened": "last_opened", "completed": "completed"},
    default_direction="desc",
)


def validate_parent(db: Session, user_id: int, parent_id: Any, policy: OwnedEntityPolicy) -> Optional[int]:
    """Confirm the claimed parent exists and belongs to `user_id`.

    Returns the parent id as an integer, or None for an absent optional
    parent.
    """
    try:
        parent_id = coerce_parent(parent_id, required=policy.parent_required)
    except ValueError as e:
        raise ValidationFailure(str(e))

    if parent_id is None:
        return None

    parent = db.query(policy.parent_model).filter(
        policy.parent_model.id == parent_id,
        policy.parent_model.user_id == user_id,
    ).first()
    if parent is None:
        raise ReferenceInvalid("Parent id is invalid")
    return parent_id


def check_unique(
    db: Session,
    user_id: int,
    title: str,
    policy: OwnedEntityPolicy,
    parent_id: Optional[int] = None,
    exclude_id: Optional[int] = None,
) -> None:
    model = policy.model
    query = db.query(model.id).filter(model.user_id == user_id, model.title == title)
    if policy.unique_within_parent:
        query = query.filter(model.parent == parent_id)
    if exclude_id is not None:
        query = query.filter(model.id != exclude_id)

    if query.first() is not None:
        raise Conflict(policy.conflict_message)


class OwnedEntityService:
    def __init__(self, policy: OwnedEntityPolicy):
        self.policy = policy
        self.model = policy.model

    def _query(self, db: Session, user_id: int, with_parent: bool = False):
        if not with_parent or self.policy.parent_model is None:
            return db.query(self.model).filter(self.model.user_id == user_id)
        # outer join so an orphaned reference still yields the row, with a null title
        parent = self.policy.parent_model
        return db.query(self.model, parent.title).outerjoin(
            parent, parent.id == self.model.parent
        ).filter(self.model.user_id == user_id)

    def get(self, db: Session, user_id: int, entity_id: int, with_parent: bool = False):
        row = self._query(db, user_id, with_parent).filter(self.model.id == entity_id).first()
        if row is None:
            raise NotFound(f"{self.policy.label} not found")
        return row

    def parent_title(self, db: Session, entity) -> Optional[str]:
        parent_id = getattr(entity, "parent", None)
        if parent_id is None or self.policy.parent_model is None:
            return None
        parent = self.policy.parent_model
        return db.query(parent.title).filter(parent.id == parent_id).scalar()

    def ordering(self, order_by: Optional[str], direction: Optional[str]):
        """Translate API ordering params into an ORDER BY clause."""
        if order_by is None:
            return None
        column = self.policy.orderable.get(order_by)
        if column is None:
            raise ValidationFailure(f"Cannot order by `{order_by}`")
        direction = (direction or self.policy.default_direction).lower()
        if direction not in ORDER_DIRECTIONS:
            raise ValidationFailure("orderDirection must be `asc` or `desc`")
        return ORDER_DIRECTIONS[direction](getattr(self.model, column))

    def list(
        self,
        db: Session,
        user_id: int,
        order_by: Optional[str] = None,
        direction: Optional[str] = None,
        limit: Optional[int] = None,
        parent_id: Optional[int] = None,
        with_parent: bool = False,
    ):
        """Rows owned by `user_id`; `(entity, parent_title)` pairs when
        `with_parent` is set."""
        if limit is not None and limit < 1:
            raise ValidationFailure("limit must be a positive integer")

        query = self._query(db, user_id, with_parent)
        if parent_id is not None:
            query = query.filter(self.model.parent == parent_id)
        clause = self.ordering(order_by, direction)
        query = query.order_by(clause if clause is not None else self.model.id)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def create(self, db: Session, user_id: int, values: Dict[str, Any]):
        policy = self.policy
        parent_id = values.get("parent")

        check_unique(db, user_id, values["title"], policy, parent_id=parent_id)
        if policy.parent_model is not None:
            values["parent"] = validate_parent(db, user_id, parent_id, policy)

        entity = self.model(user_id=user_id, **values)
        db.add(entity)
        commit_or_raise(db, policy.conflict_message)
        db.refresh(entity)

        logger.info("Created %s %s for user %s", policy.label.lower(), entity.id, user_id)
        return entity

    def update(self, db: Session, user_id: int, entity_id: int, values: Dict[str, Any]):
        policy = self.policy
        entity = self.get(db, user_id, entity_id)

        if "title" in values:
            parent_id = values.get("parent", getattr(entity, "parent", None))
            check_unique(db, user_id, values["title"], policy, parent_id=parent_id, exclude_id=entity.id)
        if "parent" in values and policy.parent_model is not None:
            values["parent"] = validate_parent(db, user_id, values["parent"], policy)

        for key, value in values.items():
            setattr(entity, key, value)
        if hasattr(self.model, "updated_at"):
            entity.updated_at = func.now()

        commit_or_raise(db, policy.conflict_message)
        db.refresh(entity)

        logger.info("Updated %s %s for user %s", policy.label.lower(), entity.id, user_id)
        return entity

    def delete(self, db: Session, user_id: int, entity_id: int) -> None:
        entity = self.get(db, user_id, entity_id)
        db.delete(entity)
        commit_or_raise(db, self.policy.conflict_message)
        logger.info("Deleted %s %s for user %s", self.policy.label.lower(), entity_id, user_id)


folders = OwnedEntityService(FOLDER_POLICY)
topics = OwnedEntityService(TOPIC_POLICY)
resources = OwnedEntityService(RESOURCE_POLICY)
