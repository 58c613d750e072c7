import re
import uuid
import logging
from typing import Iterable, List, Optional

from sqlalchemy import desc, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..thoughts.models import Thought
from .models import Tag, ThoughtTag
from .schemas import TagWithCount

logger = logging.getLogger(__name__)

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """
    Canonical slug for a tag name: lowercase, every run of characters outside
    [a-z0-9] becomes one hyphen, and hyphens at either end are dropped.

    >>> slugify("  Machine Learning!! ")
    'machine-learning'
    """
    return _NON_ALNUM_RUN.sub("-", name.lower()).strip("-")


def normalize_tag_names(names: Optional[Iterable[str]]) -> List[str]:
    """
    Collapse a submitted tag list to one entry per slug, keeping the first
    spelling seen and the submission order. Names without any [a-z0-9]
    character have no slug and are dropped.
    """
    seen = set()
    result: List[str] = []
    for name in names or []:
        slug = slugify(name)
        if not slug or slug in seen:
            continue
        seen.add(slug)
        result.append(name)
    return result


async def get_tag_by_slug(db: AsyncSession, slug: str) -> Optional[Tag]:
    result = await db.execute(select(Tag).where(Tag.slug == slug))
    return result.scalar_one_or_none()


async def get_or_create_tag(db: AsyncSession, name: str) -> Tag:
    """
    Return the tag whose slug matches `name`, creating it when missing.

    An existing tag is returned untouched even if `name` is spelled
    differently. New tags are flushed inside a savepoint, so they commit or
    roll back with the caller's transaction, and a slug inserted concurrently
    by another request is picked up instead of failing the whole transaction.
    """
    slug = slugify(name)
    if not slug:
        raise ValueError(f"Tag name {name!r} does not contain any letters or digits")

    existing = await get_tag_by_slug(db, slug)
    if existing:
        return existing

    tag = Tag(id=str(uuid.uuid4()), name=name.strip().lower(), slug=slug)
    try:
        async with db.begin_nested():
            db.add(tag)
    except IntegrityError:
        # another request inserted the same slug after our lookup
        existing = await get_tag_by_slug(db, slug)
        if existing is None:
            raise
        logger.info(f"Tag slug={slug!r} was created concurrently, reusing it")
        return existing

    logger.info(f"Created tag slug={slug!r}")
    return tag


async def list_tags_with_counts(db: AsyncSession) -> List[TagWithCount]:
    """Tags used by at least one published thought, most used first."""
    count = func.count(ThoughtTag.thought_id).label("count")
    stmt = (
        select(Tag, count)
        .join(ThoughtTag, ThoughtTag.tag_id == Tag.id)
        .join(Thought, Thought.id == ThoughtTag.thought_id)
        .where(Thought.is_published.is_(True))
        .group_by(Tag.id, Tag.name, Tag.slug)
        .order_by(desc(count), Tag.name)
    )
    result = await db.execute(stmt)
    return [
        TagWithCount(id=tag.id, name=tag.name, slug=tag.slug, count=tag_count)
        for tag, tag_count in result.all()
    ]
