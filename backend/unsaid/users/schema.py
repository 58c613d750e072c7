from urllib.parse import urlparse

from pydantic import Field, field_validator
from typing import Optional
from datetime import datetime

from ..models import CustomModel

class AuthorPublic(CustomModel):
    """The slice of a user that is shown next to their thoughts."""
    id: str
    username: str
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None

class UserPublic(AuthorPublic):
    email: str
    bio: Optional[str] = None
    is_admin: bool = False
    created_at: datetime

class ProfileUpdate(CustomModel):
    display_name: Optional[str] = Field(None, max_length=100, json_schema_extra={"example": "Alice"})
    bio: Optional[str] = Field(None, max_length=2000, json_schema_extra={"example": "Writing things down."})
    avatar_url: Optional[str] = Field(None, json_schema_extra={"example": "https://example.com/alice.png"})

    @field_validator("avatar_url")
    @classmethod
    def validate_avatar_url(cls, v):
        if not v:
            return v
        if not (v.startswith("http://") or v.startswith("https://")):
            raise ValueError("Avatar URL must start with http:// or https://")
        parsed = urlparse(v)
        if not parsed.netloc or " " in v:
            raise ValueError("Invalid Avatar URL format")
        return v
