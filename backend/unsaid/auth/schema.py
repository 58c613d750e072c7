from typing import Optional

from pydantic import ConfigDict, EmailStr, Field, field_validator

from ..models import CustomModel
from ..users.schema import UserPublic


class RegisterRequest(CustomModel):
    username: str = Field(..., json_schema_extra={"example": "alice"})
    email: EmailStr = Field(..., json_schema_extra={"example": "alice@example.com"})
    password: str = Field(..., json_schema_extra={"example": "secret1"})
    display_name: Optional[str] = Field(None, max_length=100, json_schema_extra={"example": "Alice"})

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        if len(v) < 3:
            raise ValueError("Username must be at least 3 characters")
        if len(v) > 30:
            raise ValueError("Username too long")
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v


class LoginRequest(CustomModel):
    email: EmailStr = Field(..., json_schema_extra={"example": "alice@example.com"})
    password: str = Field(..., json_schema_extra={"example": "secret1"})

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v


class AuthResponse(CustomModel):
    user: UserPublic
    token: str


class TokenPayload(CustomModel):
    """Claims carried by a bearer token."""
    model_config = ConfigDict(extra="ignore")

    sub: str
    id: str
    email: str
    username: str
