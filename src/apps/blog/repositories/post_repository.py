"""Post repository."""

from typing import List, Optional

from sqlalchemy import and_
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import col, select

from src.core.bases.base_repository import BaseRepository
from src.apps.blog.models.post import Post


class PostRepository(BaseRepository[Post]):
    """Post repository class."""

    model = Post
    immutable_fields = {"id", "user_id", "timestamp"}

    def _build_find_all_stmt(
        self,
        *,
        limit: int,
        offset: int,
        search: Optional[str] = None,
        author_id: Optional[int] = None,
    ):
        conditions = []
        if search is not None:
            # Literal, case-insensitive substring match; % and _ are escaped.
            conditions.append(col(Post.content).icontains(search, autoescape=True))
        if author_id is not None:
            conditions.append(col(Post.user_id) == author_id)

        stmt = select(Post)
        if conditions:
            stmt = stmt.where(and_(*conditions))

        # Order before slicing so offset/limit walk a stable newest-first list.
        return stmt.order_by(col(Post.timestamp).desc()).offset(offset).limit(limit)

    async def find_all(
        self,
        *,
        limit: int,
        offset: int,
        search: Optional[str] = None,
        author_id: Optional[int] = None,
    ) -> List[Post]:  # type:ignore
        """Newest-first page of posts, optionally filtered by content and author."""
        async with self.get_session() as db:
            try:
                stmt = self._build_find_all_stmt(
                    limit=limit, offset=offset, search=search, author_id=author_id
                )
                result = await db.exec(stmt)
                return list(result.all())
            except SQLAlchemyError as e:
                self._handle_db_error(e, "find_all")
