from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..tags.models import ThoughtTag
from ..thoughts.models import Thought
from .schemas import Stats


async def get_stats(db: AsyncSession, author_id: Optional[str] = None) -> Stats:
    """
    Totals over published thoughts, optionally for a single author.
    `total_tags` always counts distinct tags used by any published thought,
    whichever author was asked for.
    """
    published = Thought.is_published.is_(True)
    conditions = [published]
    if author_id:
        conditions.append(Thought.author_id == author_id)

    totals = await db.execute(
        select(
            func.count(Thought.id),
            func.coalesce(func.sum(Thought.word_count), 0),
            func.coalesce(func.sum(Thought.view_count), 0),
        ).where(*conditions)
    )
    total_thoughts, total_words, total_views = totals.one()

    total_tags = await db.scalar(
        select(func.count(func.distinct(ThoughtTag.tag_id)))
        .join(Thought, Thought.id == ThoughtTag.thought_id)
        .where(published)
    )

    return Stats(
        total_thoughts=total_thoughts,
        total_tags=total_tags or 0,
        total_words=total_words,
        total_views=total_views,
    )
