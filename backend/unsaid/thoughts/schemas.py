from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from ..models import CustomModel
from ..tags.schemas import TagOut
from ..users.schema import AuthorPublic

# path segments under /api/thoughts that shadow a slug of the same name
RESERVED_SLUGS = {"my"}


def _check_slug(v):
    if v in RESERVED_SLUGS:
        raise ValueError(f"Slug '{v}' is reserved")
    return v


class ThoughtCreate(CustomModel):
    """Body of POST /api/thoughts. wordCount and readingTime are computed by the client."""
    title: str = Field(..., min_length=1, json_schema_extra={"example": "Hello"})
    slug: str = Field(..., min_length=1, json_schema_extra={"example": "hello"})
    content: str = Field(..., min_length=1)
    excerpt: Optional[str] = None
    reading_time: int = Field(1, ge=0)
    word_count: int = Field(0, ge=0)
    is_published: bool = True
    tag_names: List[str] = Field(default_factory=list, json_schema_extra={"example": ["philosophy"]})

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: str) -> str:
        return _check_slug(v)


class ThoughtUpdate(CustomModel):
    """
    Body of PATCH /api/thoughts/{id}. Only the keys present are applied.
    Sending `tagNames` (even `[]`) replaces the thought's tags; leaving it out keeps them.
    """
    title: Optional[str] = Field(None, min_length=1)
    slug: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = Field(None, min_length=1)
    excerpt: Optional[str] = None
    reading_time: Optional[int] = Field(None, ge=0)
    word_count: Optional[int] = Field(None, ge=0)
    is_published: Optional[bool] = None
    tag_names: Optional[List[str]] = None

    @field_validator("title", "slug", "content", "reading_time", "word_count", "is_published", "tag_names", mode="before")
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} may not be null")
        return v

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: str) -> str:
        return _check_slug(v)


class ThoughtOut(CustomModel):
    id: str
    title: str
    slug: str
    content: str
    excerpt: Optional[str] = None
    reading_time: int
    word_count: int
    author_id: str
    is_published: bool
    view_count: int
    created_at: datetime
    updated_at: datetime
    author: AuthorPublic
    tags: List[TagOut] = []
