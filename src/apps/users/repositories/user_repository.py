"""User repository."""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from src.core.bases.base_repository import BaseRepository
from src.apps.users.models.user import User


class UserRepository(BaseRepository[User]):
    """User repository class."""

    model = User

    async def get_by_username(self, username: str) -> Optional[User]:
        """Case-insensitive lookup by username."""
        async with self.get_session() as db:
            try:
                stmt = select(User).where(func.lower(User.username) == username.strip().lower())
                result = await db.exec(stmt)
                return result.first()
            except SQLAlchemyError as e:
                self._handle_db_error(e, "get_by_username")
