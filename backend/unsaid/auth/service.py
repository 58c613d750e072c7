import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict

from jose import jwt, JWTError
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..users import service as user_service
from ..users.models import User
from .schema import RegisterRequest, TokenPayload

logger = logging.getLogger(__name__)


async def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """
    Issue a signed bearer token for `user`.
    The token carries the user's id, email and username and expires after
    ACCESS_TOKEN_EXPIRE_DAYS unless `expires_delta` says otherwise.
    """
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS))
    to_encode = {
        "sub": user.id,
        "id": user.id,
        "email": user.email,
        "username": user.username,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

async def _decode_token(token: str) -> Optional[Dict]:
    """Check signature and expiry; a tampered or expired token decodes to None."""
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None

async def verify_token(token: str) -> Optional[TokenPayload]:
    payload = await _decode_token(token)
    if payload is None:
        return None
    try:
        return TokenPayload.model_validate(payload)
    except ValidationError:
        return None

async def get_user_from_access_token(token: str, db: AsyncSession) -> Optional[User]:
    """
    Resolve a bearer token to the stored user it was issued for.
    Returns None for invalid tokens and for users that no longer exist.
    """
    claims = await verify_token(token)
    if claims is None:
        return None
    return await user_service.get_user_by_id(claims.id, db)

async def authenticate_user(db: AsyncSession, email: str, password: str) -> Optional[User]:
    """
    Look the user up by email and check the password.
    Unknown email and wrong password both return None so callers cannot tell them apart.
    """
    user = await user_service.get_user_by_email(email, db)
    if not user or not user_service.verify_password(password, user.hashed_password):
        logger.warning(f"Failed login attempt for email={email!r}")
        return None
    return user

async def register_user(db: AsyncSession, data: RegisterRequest) -> User:
    return await user_service.create_user(
        db,
        username=data.username,
        email=data.email,
        password=data.password,
        display_name=data.display_name,
    )
