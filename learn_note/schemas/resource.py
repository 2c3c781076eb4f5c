from pydantic import field_validator
from pydantic.alias_generators import to_camel
from typing import Any, Optional
from datetime import datetime

from learn_note.schemas.base import CamelModel
from learn_note.schemas.topic import ParentRef
from learn_note.utils.validation import coerce_title, coerce_parent, check_uri, check_resource_type


class ResourceCreate(CamelModel):
    title: Any
    parent: Any
    uri: Any
    type: Optional[Any] = None
    completed: bool = False
    last_opened: Optional[datetime] = None

    @field_validator("title", mode="before")
    @classmethod
    def _title(cls, value):
        return coerce_title(value)

    @field_validator("parent", mode="before")
    @classmethod
    def _parent(cls, value):
        return coerce_parent(value, required=True)

    @field_validator("uri", mode="before")
    @classmethod
    def _uri(cls, value):
        return check_uri(value)

    @field_validator("type", mode="before")
    @classmethod
    def _type(cls, value):
        return check_resource_type(value)

    @field_validator("completed", "last_opened", mode="before")
    @classmethod
    def _not_null(cls, value, info):
        if value is None:
            raise ValueError(f"{to_camel(info.field_name)} cannot be null")
        return value


class ResourceUpdate(ResourceCreate):
    title: Optional[Any] = None
    parent: Optional[Any] = None
    uri: Optional[Any] = None
    completed: Optional[bool] = None


class ResourceOut(CamelModel):
    id: int
    title: str
    parent: Optional[ParentRef] = None
    uri: str
    type: str
    completed: bool
    last_opened: Optional[datetime] = None
