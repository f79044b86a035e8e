"""Post model."""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import Text
from sqlmodel import Column, DateTime, Field, SQLModel

from src.core.config import settings


def generate_post_id() -> str:
    return str(uuid4())


class Post(SQLModel, table=True):
    """Post model class."""

    __tablename__ = "blog_posts"  # type: ignore
    id: str = Field(default_factory=generate_post_id, primary_key=True, max_length=36)
    content: str = Field(sa_column=Column(Text, nullable=False))
    user_id: int = Field(foreign_key="users.id", index=True)
    timestamp: datetime = Field(
        default_factory=settings.get_now,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
    )
