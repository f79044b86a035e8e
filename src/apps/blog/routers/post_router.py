"""Post router."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from src.core import exceptions
from src.core.config import settings
from src.core.database import get_session
from src.core.guards import GuardChain, RequestContext
from src.core.response.schemas import MessageResponse, PaginatedResponse, Pagination
from src.apps.blog.guards import PostOwnershipGuard
from src.apps.blog.models.post import Post
from src.apps.blog.repositories.post_repository import PostRepository
from src.apps.blog.schemas.post import PostCreate, PostRead, PostUpdate
from src.apps.blog.services.post_service import PostService
from src.apps.users.routers.auth_router import auth_guards, user_service
from src.apps.users.services.user_service import UserService

# Largest value SQLite and PostgreSQL accept for LIMIT/OFFSET.
SQL_INT_MAX = 2**63 - 1


def get_post_repository():
    """Get post repository instance."""
    return PostRepository(get_session)  # type:ignore


def get_post_service():
    """Get post service instance."""
    repository = get_post_repository()
    return PostService(repository)


def to_post_read(post: Post) -> PostRead:
    return PostRead.model_validate(post)


class PostRouter:
    """Post router class.

    Collaborators are passed in explicitly. ``auth_guards`` must authenticate
    the caller; ``owner_guards`` must also check post ownership.
    """

    def __init__(
        self,
        post_service: PostService,
        user_service: UserService,
        auth_guards: GuardChain,
        owner_guards: GuardChain,
        prefix: str = "/posts",
    ):
        self.post_service = post_service
        self.user_service = user_service
        self.auth_guards = auth_guards
        self.owner_guards = owner_guards
        self.router = APIRouter(prefix=prefix, tags=["Posts"])
        self._register_routes()

    def _register_routes(self) -> None:
        """Register all post routes."""
        self._register_list()
        self._register_get_by_id()
        self._register_create()
        self._register_update()
        self._register_delete()

    def _register_list(self) -> None:
        @self.router.get(
            "",
            response_model=PaginatedResponse[PostRead],
            summary="List posts, newest first",
            responses={404: {"description": "Username not found"}},
        )
        async def list_posts(
            limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=0, le=SQL_INT_MAX),
            offset: int = Query(0, ge=0, le=SQL_INT_MAX),
            search: Optional[str] = Query(None, description="Case-insensitive content filter"),
            username: Optional[str] = Query(None, description="Only posts by this user"),
        ) -> PaginatedResponse[PostRead]:
            author_id = None
            if username:
                user = await self.user_service.find_by_username(username)
                if user is None:
                    raise exceptions.NotFoundException(
                        f"User with username {username} not found"
                    )
                author_id = user.id

            posts = await self.post_service.find_all(limit, offset, search, author_id)
            return PaginatedResponse[PostRead](
                filter=username,
                search=search,
                pagination=Pagination(limit=limit, offset=offset),
                data=[to_post_read(post) for post in posts],
            )

    def _register_get_by_id(self) -> None:
        @self.router.get(
            "/{post_id}",
            response_model=PostRead,
            summary="Get post by ID",
            responses={404: {"description": "Post not found"}},
        )
        async def get_post(post_id: str) -> PostRead:
            post = await self.post_service.find_one(post_id)
            if post is None:
                raise exceptions.NotFoundException(f"Post with ID {post_id} not found")
            return to_post_read(post)

    def _register_create(self) -> None:
        @self.router.post(
            "",
            response_model=PostRead,
            status_code=status.HTTP_201_CREATED,
            summary="Create new post",
            responses={401: {"description": "Not authenticated"}},
        )
        async def create_post(
            post_in: PostCreate,
            context: RequestContext = Depends(self.auth_guards),
        ) -> PostRead:
            post = await self.post_service.create(post_in, context.require_principal())
            return to_post_read(post)

    def _register_update(self) -> None:
        @self.router.patch(
            "/{post_id}",
            response_model=PostRead,
            summary="Update own post",
            responses={
                401: {"description": "Not authenticated"},
                403: {"description": "Not the author"},
                404: {"description": "Post not found"},
            },
        )
        async def update_post(
            post_id: str,
            post_in: PostUpdate,
            context: RequestContext = Depends(self.owner_guards),
        ) -> PostRead:
            post = await self.post_service.update(post_id, post_in)
            if post is None:
                # Removed between the ownership check and the write.
                raise exceptions.NotFoundException(f"Post with ID {post_id} not found")
            return to_post_read(post)

    def _register_delete(self) -> None:
        @self.router.delete(
            "/{post_id}",
            response_model=MessageResponse,
            summary="Delete own post",
            responses={
                401: {"description": "Not authenticated"},
                403: {"description": "Not the author"},
                404: {"description": "Post not found"},
            },
        )
        async def delete_post(
            post_id: str,
            context: RequestContext = Depends(self.owner_guards),
        ) -> MessageResponse:
            await self.post_service.remove(post_id)
            return MessageResponse(statusCode=200, message="Post deleted successfully")

    def get_router(self) -> APIRouter:
        """Get the FastAPI router instance."""
        return self.router


post_service = get_post_service()
owner_guards = auth_guards.then(PostOwnershipGuard(post_service))

# Router instance
router = PostRouter(
    post_service=post_service,
    user_service=user_service,
    auth_guards=auth_guards,
    owner_guards=owner_guards,
).get_router()
