# backend/unsaid/users/models.py
import uuid
from sqlalchemy import Column, String, Text, Boolean, DateTime
from sqlalchemy.orm import relationship
from ..database import Base, utcnow

class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    username = Column(Text, unique=True, nullable=False, index=True)
    email = Column(Text, unique=True, nullable=False, index=True)
    hashed_password = Column("password", Text, nullable=False)
    display_name = Column(Text)
    bio = Column(Text)
    avatar_url = Column(Text)
    is_admin = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    thoughts = relationship("Thought", back_populates="author")

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, username={self.username!r}, email={self.email!r}, is_admin={self.is_admin})"
    def __str__(self) -> str:
        return f"{self.username} ({self.email})"
