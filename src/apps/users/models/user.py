"""User model."""

from sqlmodel import Field
from src.core.database import BaseModel


class User(BaseModel, table=True):
    """A principal that can author posts."""

    __tablename__ = "users"  # type: ignore
    username: str = Field(index=True, unique=True, max_length=50)
    password_hash: str = Field()
