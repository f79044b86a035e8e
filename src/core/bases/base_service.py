import logging
from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel
from sqlmodel import SQLModel

from src.core import exceptions
from src.core.bases.base_repository import BaseRepository, IntegrityViolation, RepositoryError

T = TypeVar("T", bound=SQLModel)

logger = logging.getLogger(__name__)


class BaseService(Generic[T]):
    """Base service: validation hooks around repository calls.

    Lookups return ``None`` for a missing row instead of raising; callers
    decide whether absence is an error. Repository failures surface as
    ``ServiceException`` (or ``ConflictException`` for constraint violations).
    """

    def __init__(self, repository: BaseRepository[T]):
        self.repository = repository

    @property
    def model_name(self) -> str:
        return self.repository.model.__name__

    def _raise_service_error(self, error: RepositoryError, operation: str) -> None:
        if isinstance(error, IntegrityViolation):
            raise exceptions.ConflictException(
                f"{self.model_name} {operation} conflicts with existing data"
            ) from error
        logger.error("%s %s failed: %s", self.model_name, operation, error)
        raise exceptions.ServiceException(
            f"Could not {operation} {self.model_name.lower()}"
        ) from error

    async def get_by_id(self, item_id: Any) -> Optional[T]:
        try:
            return await self.repository.get(item_id)
        except RepositoryError as e:
            self._raise_service_error(e, "get")

    async def create(self, create_data: Dict[str, Any]) -> T:  # type:ignore
        await self._validate_create(create_data)
        try:
            item = await self.repository.create(create_data)
        except RepositoryError as e:
            self._raise_service_error(e, "create")
        logger.info("Created %s %s", self.model_name, getattr(item, "id", None))
        return item

    async def update(self, item_id: Any, update_data: BaseModel) -> Optional[T]:
        data = update_data.model_dump(exclude_unset=True)
        await self._validate_update(item_id, data)
        try:
            item = await self.repository.update(item_id, data)
        except RepositoryError as e:
            self._raise_service_error(e, "update")
        if item is not None:
            logger.info("Updated %s %s", self.model_name, item_id)
        return item

    async def remove(self, item_id: Any) -> Optional[T]:
        try:
            item = await self.repository.delete(item_id)
        except RepositoryError as e:
            self._raise_service_error(e, "delete")
        if item is not None:
            logger.info("Deleted %s %s", self.model_name, item_id)
        return item

    async def _validate_create(self, create_data: Dict[str, Any]) -> None:
        """Validate data before creation."""
        pass

    async def _validate_update(self, item_id: Any, update_data: Dict[str, Any]) -> None:
        """Validate data before update."""
        pass
