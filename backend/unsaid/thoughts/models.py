# backend/unsaid/thoughts/models.py
import uuid
from sqlalchemy import (
    Column, Integer, String, Text, DateTime, ForeignKey, Boolean, Index
)
from sqlalchemy.orm import relationship
from ..database import Base, utcnow

class Thought(Base):
    __tablename__ = "thoughts"
    __table_args__ = (
        Index("ix_thoughts_published_created", "is_published", "created_at"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(Text, nullable=False)
    slug = Column(Text, unique=True, nullable=False, index=True)
    content = Column(Text, nullable=False)
    excerpt = Column(Text)
    reading_time = Column(Integer, default=1, nullable=False)
    word_count = Column(Integer, default=0, nullable=False)
    author_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    is_published = Column(Boolean, default=True, nullable=False)
    view_count = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    author = relationship("User", back_populates="thoughts")
    # Read-only view of the thought_tags link; writes go through ThoughtTag statements.
    tags = relationship(
        "Tag",
        secondary="thought_tags",
        order_by="Tag.name",
        viewonly=True,
    )

    def __repr__(self) -> str:
        return f"Thought(id={self.id!r}, slug={self.slug!r}, author_id={self.author_id!r}, is_published={self.is_published})"
    def __str__(self) -> str:
        return self.title
