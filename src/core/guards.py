"""
Request guards run as an explicit, ordered chain.

A guard is any async callable taking a ``RequestContext``. ``GuardChain``
awaits each guard in order; the first one that raises stops the chain and its
exception becomes the response. Routes depend on a chain instance, so the
handler only runs once every guard has passed.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Optional

from fastapi import Request

from src.core import exceptions, security

logger = logging.getLogger(__name__)

Guard = Callable[["RequestContext"], Awaitable[None]]


@dataclass
class RequestContext:
    request: Request
    path_params: Dict[str, Any] = field(default_factory=dict)
    principal_id: Optional[int] = None

    def require_principal(self) -> int:
        if self.principal_id is None:
            raise exceptions.UnauthorizedException("Authentication required")
        return self.principal_id


class GuardChain:
    """FastAPI dependency that runs guards in sequence."""

    def __init__(self, *guards: Guard):
        self.guards = list(guards)

    def then(self, *guards: Guard) -> "GuardChain":
        """Return a new chain with `guards` appended."""
        return GuardChain(*self.guards, *guards)

    async def run(self, context: RequestContext) -> RequestContext:
        for guard in self.guards:
            await guard(context)
        return context

    async def __call__(self, request: Request) -> RequestContext:
        context = RequestContext(request=request, path_params=dict(request.path_params))
        return await self.run(context)


def extract_bearer_token(authorization: Optional[str]) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise exceptions.UnauthorizedException("Missing Authorization header")

    parts = raw.split(" ", 1)
    if len(parts) != 2:
        raise exceptions.UnauthorizedException("Invalid Authorization header format")

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise exceptions.UnauthorizedException("Authorization must be: Bearer <token>")
    return token


class JwtAuthGuard:
    """Verify the bearer token and record the principal id on the context.

    ``principal_exists`` lets the guard reject tokens whose subject has since
    been removed.
    """

    def __init__(self, principal_exists: Optional[Callable[[int], Awaitable[bool]]] = None):
        self.principal_exists = principal_exists

    async def __call__(self, context: RequestContext) -> None:
        token = extract_bearer_token(context.request.headers.get("Authorization"))
        try:
            principal_id = security.principal_id_from_token(token)
        except security.AuthSecurityError as exc:
            logger.warning("Rejected access token: %s", exc)
            raise exceptions.UnauthorizedException(str(exc)) from exc

        if self.principal_exists is not None and not await self.principal_exists(principal_id):
            logger.warning("Rejected access token for unknown principal %s", principal_id)
            raise exceptions.UnauthorizedException("User not found")

        context.principal_id = principal_id
