# backend/unsaid/thoughts/router.py
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Response, status

from ..auth.dependencies import CurrentUser, OptionalUser
from ..database import SessionDep
from ..users.models import User
from . import service
from .schemas import ThoughtCreate, ThoughtOut, ThoughtUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/thoughts", tags=["thoughts"])


async def _get_owned_thought(db, thought_id: str, user: User, action: str):
    """404 for an unknown id, 403 when the caller is not the author."""
    thought = await service.get_thought_by_id(db, thought_id)
    if not thought:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Thought not found")
    if thought.author_id != user.id:
        logger.warning(f"User {user.id} tried to {action} thought {thought_id} owned by {thought.author_id}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=f"Not authorized to {action} this thought")
    return thought


@router.get("", response_model=list[ThoughtOut])
async def list_thoughts(
    db: SessionDep,
    limit: Optional[int] = Query(None, ge=1),
    tag: Optional[str] = None,
    search: Optional[str] = None,
    exclude: Optional[str] = None,
):
    filters = service.ThoughtFilter(limit=limit, tag=tag, search=search, exclude=exclude)
    return await service.get_thoughts(db, filters)


@router.get("/my", response_model=list[ThoughtOut])
async def list_my_thoughts(db: SessionDep, current_user: User = CurrentUser):
    filters = service.ThoughtFilter(author_id=current_user.id, include_drafts=True)
    return await service.get_thoughts(db, filters)


@router.get("/by-id/{thought_id}", response_model=ThoughtOut)
async def get_thought_by_id(thought_id: str, db: SessionDep):
    thought = await service.get_thought_by_id(db, thought_id)
    if not thought:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Thought not found")
    return thought


@router.get("/{slug}", response_model=ThoughtOut)
async def get_thought_by_slug(
    slug: str,
    db: SessionDep,
    viewer: Optional[User] = OptionalUser,
):
    thought = await service.get_thought_by_slug(db, slug)
    if not thought or (not thought.is_published and (viewer is None or viewer.id != thought.author_id)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Thought not found")

    # Respond with the thought as read; the view is counted afterwards.
    payload = ThoughtOut.model_validate(thought)
    await service.increment_view_count(db, thought.id)
    return payload


@router.post("", response_model=ThoughtOut, status_code=status.HTTP_201_CREATED)
async def create_thought(body: ThoughtCreate, db: SessionDep, current_user: User = CurrentUser):
    return await service.create_thought(db, body, current_user.id, body.tag_names)


@router.patch("/{thought_id}", response_model=ThoughtOut)
async def update_thought(
    thought_id: str,
    body: ThoughtUpdate,
    db: SessionDep,
    current_user: User = CurrentUser,
):
    thought = await _get_owned_thought(db, thought_id, current_user, "edit")
    return await service.update_thought(db, thought, body)


@router.delete("/{thought_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_thought(thought_id: str, db: SessionDep, current_user: User = CurrentUser):
    await _get_owned_thought(db, thought_id, current_user, "delete")
    await service.delete_thought(db, thought_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
