from pydantic import field_validator
from typing import Any, Optional
from datetime import datetime

from learn_note.schemas.base import CamelModel
from learn_note.utils.validation import coerce_title


class FolderCreate(CamelModel):
    title: Any

    @field_validator("title", mode="before")
    @classmethod
    def _title(cls, value):
        return coerce_title(value, "Folder title")


class FolderUpdate(FolderCreate):
    pass


class FolderOut(CamelModel):
    id: int
    title: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
