"""Auth router."""

from fastapi import APIRouter, Depends, status

from src.core.database import get_session
from src.core.guards import GuardChain, JwtAuthGuard, RequestContext
from src.core import exceptions
from src.apps.users.repositories.user_repository import UserRepository
from src.apps.users.schemas.user import AuthResponse, UserCredentials, UserRead
from src.apps.users.services.user_service import UserService


def get_user_repository():
    """Get user repository instance."""
    return UserRepository(get_session)  # type:ignore


def get_user_service():
    """Get user service instance."""
    return UserService(get_user_repository())


class AuthRouter:
    """Registration, login and current-principal endpoints."""

    def __init__(self, user_service: UserService, auth_guards: GuardChain, prefix: str = "/auth"):
        self.user_service = user_service
        self.auth_guards = auth_guards
        self.router = APIRouter(prefix=prefix, tags=["Auth"])
        self._register_routes()

    def _auth_response(self, user) -> AuthResponse:
        return AuthResponse(
            user=UserRead.model_validate(user),
            access_token=self.user_service.issue_token(user),
        )

    def _register_routes(self) -> None:
        @self.router.post(
            "/register",
            status_code=status.HTTP_201_CREATED,
            response_model=AuthResponse,
            summary="Register a new user",
        )
        async def register(credentials: UserCredentials) -> AuthResponse:
            user = await self.user_service.register(credentials)
            return self._auth_response(user)

        @self.router.post("/login", response_model=AuthResponse, summary="Log in")
        async def login(credentials: UserCredentials) -> AuthResponse:
            user = await self.user_service.authenticate(credentials)
            return self._auth_response(user)

        @self.router.get("/me", response_model=UserRead, summary="Current user")
        async def me(context: RequestContext = Depends(self.auth_guards)) -> UserRead:
            user = await self.user_service.get_by_id(context.require_principal())
            if user is None:
                raise exceptions.UnauthorizedException("User not found")
            return UserRead.model_validate(user)

    def get_router(self) -> APIRouter:
        """Get the FastAPI router instance."""
        return self.router


user_service = get_user_service()
auth_guards = GuardChain(JwtAuthGuard(principal_exists=user_service.exists))

# Router instance
router = AuthRouter(user_service, auth_guards).get_router()
