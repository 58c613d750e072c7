from fastapi import APIRouter, HTTPException, status

from ..database import SessionDep
from . import service
from .schemas import TagOut, TagWithCount

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("", response_model=list[TagWithCount])
async def list_tags(db: SessionDep):
    return await service.list_tags_with_counts(db)


@router.get("/{slug}", response_model=TagOut)
async def get_tag(slug: str, db: SessionDep):
    tag = await service.get_tag_by_slug(db, slug)
    if not tag:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tag not found")
    return tag
