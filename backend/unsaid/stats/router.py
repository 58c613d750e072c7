from fastapi import APIRouter

from ..auth.dependencies import CurrentUser
from ..database import SessionDep
from ..users.models import User
from . import service
from .schemas import Stats

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=Stats)
async def get_stats(db: SessionDep):
    return await service.get_stats(db)


@router.get("/my", response_model=Stats)
async def get_my_stats(db: SessionDep, current_user: User = CurrentUser):
    return await service.get_stats(db, author_id=current_user.id)
