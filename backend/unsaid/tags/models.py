# backend/unsaid/tags/models.py
import uuid
from sqlalchemy import Column, String, Text, ForeignKey, Index
from ..database import Base

class Tag(Base):
    __tablename__ = "tags"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(Text, unique=True, nullable=False)
    slug = Column(Text, unique=True, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"Tag(id={self.id!r}, name={self.name!r}, slug={self.slug!r})"
    def __str__(self) -> str:
        return self.name


class ThoughtTag(Base):
    """
    Many-to-many link between thoughts and tags.
    Rows disappear with either parent through ON DELETE CASCADE.
    """
    __tablename__ = "thought_tags"
    __table_args__ = (
        Index("ix_thought_tags_tag_id", "tag_id"),
    )

    thought_id = Column(String(36), ForeignKey("thoughts.id", ondelete="CASCADE"), primary_key=True)
    tag_id = Column(String(36), ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True)

    def __repr__(self) -> str:
        return f"ThoughtTag(thought_id={self.thought_id!r}, tag_id={self.tag_id!r})"
