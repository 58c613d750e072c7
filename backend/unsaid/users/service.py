import logging
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy import select, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from passlib.context import CryptContext

from ..config import settings
from .models import User as UserModel
from .schema import ProfileUpdate

logger = logging.getLogger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)

DUPLICATE_ACCOUNT_DETAIL = "Username or email already in use"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

async def create_user(
    db: AsyncSession,
    *,
    username: str,
    email: str,
    password: str,
    display_name: Optional[str] = None,
    is_admin: bool = False,
) -> UserModel:
    """Store a new user with a bcrypt-hashed password. Username and email must both be free."""
    existing = await db.execute(
        select(UserModel.id).where(or_(UserModel.email == email, UserModel.username == username))
    )
    if existing.first() is not None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_ACCOUNT_DETAIL)

    db_user = UserModel(
        username=username,
        email=email,
        hashed_password=hash_password(password),
        display_name=display_name,
        is_admin=is_admin,
    )
    db.add(db_user)
    try:
        await db.commit()
    except IntegrityError:
        # lost a race against a concurrent registration
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_ACCOUNT_DETAIL)
    await db.refresh(db_user)
    logger.info(f"Registered user id={db_user.id} username={db_user.username!r}")
    return db_user

async def get_user_by_id(user_id: str, db: AsyncSession) -> Optional[UserModel]:
    result = await db.execute(select(UserModel).where(UserModel.id == user_id))
    return result.scalar_one_or_none()

async def get_user_by_email(email: str, db: AsyncSession) -> Optional[UserModel]:
    result = await db.execute(select(UserModel).where(UserModel.email == email))
    return result.scalar_one_or_none()

async def update_profile(db: AsyncSession, db_user: UserModel, profile_in: ProfileUpdate) -> UserModel:
    """Write only the profile fields the client actually sent."""
    update_data = profile_in.model_dump(exclude_unset=True)

    for field, value in update_data.items():
        setattr(db_user, field, value)

    await db.commit()
    await db.refresh(db_user)
    return db_user
