from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from ..database import SessionDep

from ..users.models import User
from ..auth import service as auth_service

# auto_error is off so both gate modes can share the scheme and word their own 401s.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)

async def get_current_user_from_access_token(
    db: SessionDep,
    token: Optional[str] = Depends(oauth2_scheme),
) -> User:
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = await auth_service.get_user_from_access_token(token=token, db=db)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user

async def get_optional_user(
    db: SessionDep,
    token: Optional[str] = Depends(oauth2_scheme),
) -> Optional[User]:
    """Attach the caller when a valid token is present; anonymous requests pass through as None."""
    if not token:
        return None
    return await auth_service.get_user_from_access_token(token=token, db=db)

CurrentUser = Depends(get_current_user_from_access_token)
OptionalUser = Depends(get_optional_user)
