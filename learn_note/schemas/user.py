from pydantic import BaseModel, field_validator
from typing import Any, List, Optional

from learn_note.schemas.base import CamelModel
from learn_note.utils.validation import check_email, check_password, coerce_title, check_id_list


class UserCreate(BaseModel):
    email: str
    password: str
    name: str

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, value):
        return check_email(value)

    @field_validator("password", mode="before")
    @classmethod
    def _password(cls, value):
        return check_password(value)

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, value):
        return coerce_title(value, "Name")


class UserUpdate(CamelModel):
    topic_order: Any

    @field_validator("topic_order", mode="before")
    @classmethod
    def _topic_order(cls, value):
        return check_id_list(value, "topicOrder")


class UserOut(BaseModel):
    id: int
    name: str
    email: str


class UserProfileOut(CamelModel):
    id: int
    name: str
    email: str
    topic_order: List[int] = []


class LoginRequest(BaseModel):
    email: Any
    password: Any


class CurrentUser(BaseModel):
    """Identity carried inside the bearer token."""

    id: int
    email: str
    name: Optional[str] = None


class AuthTokenOut(BaseModel):
    authToken: str
    id: int
    email: str
    name: Optional[str] = None


class MetaOut(BaseModel):
    title: str
    uri: str
