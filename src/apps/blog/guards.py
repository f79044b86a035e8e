"""Post ownership guard."""

import logging

from src.core import exceptions
from src.core.guards import RequestContext
from src.apps.blog.services.post_service import PostService

logger = logging.getLogger(__name__)


class PostOwnershipGuard:
    """Allow the request only when the principal authored the target post.

    Must run after ``JwtAuthGuard``.
    """

    def __init__(self, post_service: PostService, param: str = "post_id"):
        self.post_service = post_service
        self.param = param

    async def __call__(self, context: RequestContext) -> None:
        principal_id = context.require_principal()
        post_id = context.path_params.get(self.param)
        post = await self.post_service.find_one(post_id)
        if post is None:
            raise exceptions.NotFoundException(f"Post with ID {post_id} not found")
        if post.user_id != principal_id:
            logger.warning("User %s denied access to post %s", principal_id, post_id)
            raise exceptions.ForbiddenException("You do not own this post")
