"""Post service."""

from typing import Any, Dict, List, Optional

from src.core.bases.base_repository import RepositoryError
from src.core.bases.base_service import BaseService
from src.apps.blog.models.post import Post
from src.apps.blog.repositories.post_repository import PostRepository
from src.apps.blog.schemas.post import PostCreate, PostUpdate


class PostService(BaseService[Post]):
    """Post service class."""

    def __init__(self, repository: PostRepository):
        super().__init__(repository)
        self.repository: PostRepository = repository

    async def find_all(
        self,
        limit: int,
        offset: int,
        search: Optional[str] = None,
        author_id: Optional[int] = None,
    ) -> List[Post]:  # type:ignore
        try:
            return await self.repository.find_all(
                limit=limit, offset=offset, search=search, author_id=author_id
            )
        except RepositoryError as e:
            self._raise_service_error(e, "list")

    async def find_one(self, post_id: str) -> Optional[Post]:
        return await self.get_by_id(post_id)

    async def create(self, post_in: PostCreate, author_id: int) -> Post:  # type: ignore[override]
        data: Dict[str, Any] = post_in.model_dump()
        data["user_id"] = author_id
        return await super().create(data)

    async def update(self, post_id: str, post_in: PostUpdate) -> Optional[Post]:
        return await super().update(post_id, post_in)
