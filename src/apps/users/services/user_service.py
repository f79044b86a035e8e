"""User service."""

import logging
from typing import Any, Dict, Optional

from src.core import exceptions, security
from src.core.bases.base_repository import RepositoryError
from src.core.bases.base_service import BaseService
from src.apps.users.models.user import User
from src.apps.users.repositories.user_repository import UserRepository
from src.apps.users.schemas.user import UserCredentials

logger = logging.getLogger(__name__)


class UserService(BaseService[User]):
    """Principal lookup, registration and password login."""

    def __init__(self, repository: UserRepository):
        super().__init__(repository)
        self.repository: UserRepository = repository

    async def find_by_username(self, username: str) -> Optional[User]:
        try:
            return await self.repository.get_by_username(username)
        except RepositoryError as e:
            self._raise_service_error(e, "get")

    async def exists(self, user_id: int) -> bool:
        return await self.get_by_id(user_id) is not None

    async def register(self, credentials: UserCredentials) -> User:
        return await self.create(
            {
                "username": credentials.username,
                "password_hash": security.hash_password(credentials.password),
            }
        )

    async def authenticate(self, credentials: UserCredentials) -> User:
        user = await self.find_by_username(credentials.username)
        if user is None or not security.verify_password(credentials.password, user.password_hash):
            logger.warning("Failed login for %r", credentials.username)
            raise exceptions.UnauthorizedException("Invalid username or password")
        return user

    def issue_token(self, user: User) -> str:
        return security.build_access_token(user_id=int(user.id), username=user.username)  # type: ignore[arg-type]

    async def _validate_create(self, create_data: Dict[str, Any]) -> None:
        """Usernames are unique regardless of case."""
        if await self.find_by_username(create_data["username"]) is not None:
            raise exceptions.ConflictException(
                f"Username {create_data['username']} is already taken"
            )
