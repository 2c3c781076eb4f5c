from pydantic import BaseModel, field_validator
from typing import Any, Dict, List, Optional
from datetime import datetime

from learn_note.schemas.base import CamelModel
from learn_note.utils.validation import coerce_title, coerce_parent, check_notebook, check_id_list


class ParentRef(BaseModel):
    id: int
    title: Optional[str] = None


class TopicCreate(CamelModel):
    title: Any
    parent: Optional[Any] = None
    notebook: Optional[Any] = None
    resource_order: Optional[Any] = None

    @field_validator("title", mode="before")
    @classmethod
    def _title(cls, value):
        return coerce_title(value)

    @field_validator("parent", mode="before")
    @classmethod
    def _parent(cls, value):
        return coerce_parent(value)

    @field_validator("notebook", mode="before")
    @classmethod
    def _notebook(cls, value):
        return check_notebook(value)

    @field_validator("resource_order", mode="before")
    @classmethod
    def _resource_order(cls, value):
        return check_id_list(value, "resourceOrder")


class TopicUpdate(TopicCreate):
    """Every field optional; only the keys present in the body are applied."""

    title: Optional[Any] = None


class TopicResourceOut(CamelModel):
    id: int
    title: str
    type: str
    uri: str
    completed: bool
    last_opened: Optional[datetime] = None


class TopicOut(CamelModel):
    id: int
    title: str
    parent: Optional[ParentRef] = None
    notebook: Optional[Dict[str, Any]] = None
    resource_order: Optional[List[int]] = None
    resources: Optional[List[TopicResourceOut]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
