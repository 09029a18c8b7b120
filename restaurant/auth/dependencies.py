"""
Authentication Dependencies - Bearer token validation & RBAC

Provides FastAPI dependencies for:
- Repository access from the application state
- Bearer token validation (tokens issued by /api/auth)
- Role-based access control (RBAC) for route minimum roles

Resource-level decisions (ownership, company scoping) are made by
restaurant.services.policy after the resource is loaded.
"""

import logging
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from restaurant.auth.security import decode_access_token
from restaurant.errors import AuthenticationRequired, PermissionDenied
from restaurant.models import Role, User
from restaurant.repositories import Repositories

logger = logging.getLogger(__name__)

# auto_error=False so a missing header is reported through our own 401
bearer_scheme = HTTPBearer(auto_error=False)


def get_repositories(request: Request) -> Repositories:
    """Get the repository bundle installed on the application state."""
    repositories = getattr(request.app.state, "repositories", None)
    if repositories is None:
        raise RuntimeError("Repositories not initialized. Is the application lifespan running?")
    return repositories


@dataclass(frozen=True)
class UserInfo:
    """The authenticated caller."""

    id: str
    name: str
    email: str
    role: Role
    company_id: str | None = None

    @classmethod
    def from_user(cls, user: User) -> "UserInfo":
        return cls(id=user.id, name=user.name, email=user.email, role=user.role, company_id=user.company_id)

    def has_role(self, role: Role) -> bool:
        return self.role == role

    def has_any_role(self, roles: list[Role]) -> bool:
        return self.role in roles


async def get_current_user(
    repos: Annotated[Repositories, Depends(get_repositories)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)] = None,
) -> UserInfo:
    """
    Validate the Bearer token and load the user it identifies.

    Missing token, bad signature, expiry and a deleted account all yield 401.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationRequired("No token, authorization denied")

    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        raise AuthenticationRequired("Token is not valid")

    user = await repos.users.get(user_id)
    if user is None:
        logger.info(f"Token refers to unknown user '{user_id}'")
        raise AuthenticationRequired("Token is not valid")

    return UserInfo.from_user(user)


class RoleChecker:
    """
    Dependency class for route-level role checks.

    Usage:
        @router.get("/admin-only")
        async def admin_endpoint(user: Annotated[UserInfo, Depends(RoleChecker([Role.ADMIN]))]):
            ...
    """

    def __init__(self, allowed_roles: list[Role]):
        self.allowed_roles = allowed_roles

    async def __call__(
        self,
        user: Annotated[UserInfo, Depends(get_current_user)],
    ) -> UserInfo:
        if not user.has_any_role(self.allowed_roles):
            logger.warning(f"Access denied for user '{user.email}' with role '{user.role.value}'. Required: {[r.value for r in self.allowed_roles]}")
            raise PermissionDenied(f"User role {user.role.value} is not authorized to access this resource")
        return user


# Pre-configured role checkers
AdminOnly = RoleChecker([Role.ADMIN])
StaffOrAdmin = RoleChecker([Role.STAFF, Role.ADMIN])
CompanyOrAdmin = RoleChecker([Role.COMPANY, Role.ADMIN])
AnyAuthenticated = RoleChecker(list(Role))
