import uuid
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from fastapi import HTTPException, status
from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..database import utcnow
from ..tags.models import ThoughtTag
from ..tags.service import get_or_create_tag, normalize_tag_names
from .models import Thought
from .schemas import ThoughtCreate, ThoughtUpdate

logger = logging.getLogger(__name__)

EXCERPT_LENGTH = 200
SLUG_TAKEN_DETAIL = "Slug already in use"


@dataclass
class ThoughtFilter:
    """
    Options for listing thoughts.

    `include_drafts` only takes effect together with `author_id`: an author
    may see their own drafts, nobody sees anyone else's.
    """
    limit: Optional[int] = None
    tag: Optional[str] = None
    author_id: Optional[str] = None
    search: Optional[str] = None
    exclude: Optional[str] = None
    include_drafts: bool = False


def make_excerpt(content: str) -> str:
    excerpt = content[:EXCERPT_LENGTH]
    if len(content) > EXCERPT_LENGTH:
        excerpt += "..."
    return excerpt


def apply_filters(thoughts: Sequence[Thought], filters: ThoughtFilter) -> List[Thought]:
    """
    Narrow an already ordered list of thoughts.

    Order matters and is fixed: tag, then exclude, then search, then limit.
    `limit` is a prefix cap on whatever survives the other filters.
    """
    result = list(thoughts)

    if filters.tag:
        result = [t for t in result if any(tag.slug == filters.tag for tag in t.tags)]
    if filters.exclude:
        result = [t for t in result if t.id != filters.exclude]
    if filters.search:
        term = filters.search.lower()
        result = [
            t for t in result
            if term in t.title.lower()
            or term in (t.excerpt or "").lower()
            or term in t.content.lower()
        ]
    if filters.limit:
        result = result[:filters.limit]

    return result


def _joined_select():
    return (
        select(Thought)
        .options(selectinload(Thought.author), selectinload(Thought.tags))
        .execution_options(populate_existing=True)
    )


async def get_thoughts(db: AsyncSession, filters: Optional[ThoughtFilter] = None) -> List[Thought]:
    """Newest first, each with its author and tags loaded."""
    filters = filters or ThoughtFilter()

    stmt = _joined_select().order_by(Thought.created_at.desc())
    if not (filters.include_drafts and filters.author_id):
        stmt = stmt.where(Thought.is_published.is_(True))
    if filters.author_id:
        stmt = stmt.where(Thought.author_id == filters.author_id)

    result = await db.execute(stmt)
    return apply_filters(result.scalars().all(), filters)


async def get_thought_by_id(db: AsyncSession, thought_id: str) -> Optional[Thought]:
    result = await db.execute(_joined_select().where(Thought.id == thought_id))
    return result.scalar_one_or_none()


async def get_thought_by_slug(db: AsyncSession, slug: str) -> Optional[Thought]:
    result = await db.execute(_joined_select().where(Thought.slug == slug))
    return result.scalar_one_or_none()


async def _slug_taken(db: AsyncSession, slug: str, *, ignore_id: Optional[str] = None) -> bool:
    stmt = select(Thought.id).where(Thought.slug == slug)
    if ignore_id:
        stmt = stmt.where(Thought.id != ignore_id)
    return (await db.execute(stmt)).first() is not None


async def _raise_if_slug_taken(db: AsyncSession, slug: str, *, ignore_id: Optional[str] = None) -> None:
    """400 when another thought already uses `slug`."""
    if await _slug_taken(db, slug, ignore_id=ignore_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=SLUG_TAKEN_DETAIL)


async def _link_tags(db: AsyncSession, thought_id: str, tag_names: List[str]) -> None:
    rows = []
    for name in tag_names:
        tag = await get_or_create_tag(db, name)
        rows.append({"thought_id": thought_id, "tag_id": tag.id})
    if rows:
        await db.execute(insert(ThoughtTag), rows)


async def create_thought(
    db: AsyncSession,
    data: ThoughtCreate,
    author_id: str,
    tag_names: Optional[List[str]] = None,
) -> Thought:
    """
    Store a thought and link its tags in a single transaction.
    The excerpt is derived from the content when the client sent none.
    """
    await _raise_if_slug_taken(db, data.slug)

    fields = data.model_dump(exclude={"tag_names"})
    if not fields.get("excerpt"):
        fields["excerpt"] = make_excerpt(fields["content"])

    now = utcnow()
    thought = Thought(id=str(uuid.uuid4()), author_id=author_id, created_at=now, updated_at=now, **fields)
    try:
        db.add(thought)
        await db.flush()
        await _link_tags(db, thought.id, normalize_tag_names(tag_names))
        await db.commit()
    except IntegrityError:
        await db.rollback()
        await _raise_if_slug_taken(db, data.slug)
        raise
    except Exception:
        await db.rollback()
        raise

    logger.info(f"Created thought id={thought.id} slug={thought.slug!r} author_id={author_id}")
    return await get_thought_by_id(db, thought.id)


async def update_thought(db: AsyncSession, thought: Thought, data: ThoughtUpdate) -> Thought:
    """
    Apply a partial update in a single transaction.

    The excerpt is re-derived only when the content changes and no excerpt
    was sent with it. Tags are replaced wholesale when `tag_names` is present.
    """
    update_data = data.model_dump(exclude_unset=True)
    tag_names = update_data.pop("tag_names", None)

    if "content" in update_data and not update_data.get("excerpt"):
        update_data["excerpt"] = make_excerpt(update_data["content"])

    if "slug" in update_data:
        await _raise_if_slug_taken(db, update_data["slug"], ignore_id=thought.id)

    thought_id = thought.id
    try:
        for field, value in update_data.items():
            setattr(thought, field, value)
        thought.updated_at = utcnow()

        if tag_names is not None:
            await db.execute(delete(ThoughtTag).where(ThoughtTag.thought_id == thought_id))
            await _link_tags(db, thought_id, normalize_tag_names(tag_names))
        await db.commit()
    except IntegrityError:
        await db.rollback()
        if "slug" in update_data:
            await _raise_if_slug_taken(db, update_data["slug"], ignore_id=thought_id)
        raise
    except Exception:
        await db.rollback()
        raise

    return await get_thought_by_id(db, thought_id)


async def delete_thought(db: AsyncSession, thought_id: str) -> bool:
    """Delete by id; the database drops the tag links. Returns whether a row went away."""
    result = await db.execute(delete(Thought).where(Thought.id == thought_id))
    await db.commit()
    deleted = result.rowcount > 0
    if deleted:
        logger.info(f"Deleted thought id={thought_id}")
    return deleted


async def increment_view_count(db: AsyncSession, thought_id: str) -> None:
    await db.execute(
        update(Thought)
        .where(Thought.id == thought_id)
        .values(view_count=Thought.view_count + 1)
    )
    await db.commit()
