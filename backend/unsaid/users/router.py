from fastapi import APIRouter

from ..database import SessionDep
from ..users.models import User as UserModel

from .schema import ProfileUpdate, UserPublic
from . import service as user_service
from ..auth.dependencies import CurrentUser

router = APIRouter(prefix="/profile", tags=["profile"])

@router.get("", response_model=UserPublic)
async def read_profile(current_user: UserModel = CurrentUser):
    return current_user

@router.patch("", response_model=UserPublic)
async def update_profile(
    db: SessionDep,
    profile_data: ProfileUpdate,
    current_user: UserModel = CurrentUser,
):
    return await user_service.update_profile(db, db_user=current_user, profile_in=profile_data)
