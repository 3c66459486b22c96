"""Pydantic schemas for request bodies and serialized responses."""
from datetime import datetime
from typing import Annotated, Optional
from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator
from pydantic_core import PydanticCustomError

LIST_BODY_LIMIT = 200
ELLIPSIS = "..."

NonEmptyStr = Annotated[StrictStr, Field(min_length=1)]


class RequestBody(BaseModel):
    """Base for request payloads: unknown keys are rejected"""
    model_config = ConfigDict(extra="forbid")


class RegisterBody(RequestBody):
    """Payload of POST /auth/register"""
    username: StrictStr = Field(min_length=3, max_length=20, pattern=r"^[A-Za-z0-9]+$")
    password: NonEmptyStr


class LoginBody(RequestBody):
    """Payload of POST /auth/login"""
    username: NonEmptyStr
    password: NonEmptyStr


class PostCreate(RequestBody):
    """Payload of POST /posts"""
    title: NonEmptyStr
    body: NonEmptyStr
    tags: list[StrictStr]


class PostUpdate(RequestBody):
    """Payload of PATCH /posts/{id}; omitted fields stay as they are"""
    title: Optional[NonEmptyStr] = None
    body: Optional[NonEmptyStr] = None
    tags: Optional[list[StrictStr]] = None

    @field_validator("title", "body", "tags", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise PydanticCustomError("null_not_allowed", "Field may be omitted but not null")
        return value


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str


class PostAuthor(BaseModel):
    id: int
    username: str


class PostOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    body: str
    tags: list[str]
    user: PostAuthor
    created_at: datetime = Field(serialization_alias="createdAt")


def truncate_body(text: str, limit: int = LIST_BODY_LIMIT) -> str:
    """Shorten a post body for list views"""
    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS
