from fastapi import APIRouter, HTTPException, status

from ..database import SessionDep
from .schema import AuthResponse, LoginRequest, RegisterRequest
from .service import authenticate_user, create_access_token, register_user

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/register", response_model=AuthResponse)
async def register(body: RegisterRequest, db: SessionDep):
    user = await register_user(db, body)
    token = await create_access_token(user=user)
    return {"user": user, "token": token}

@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, db: SessionDep):
    user = await authenticate_user(db, body.email, body.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = await create_access_token(user=user)
    return {"user": user, "token": token}
