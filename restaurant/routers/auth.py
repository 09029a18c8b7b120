"""
Auth Router - Registration, Login and Current User

Endpoints:
- POST /api/auth/register - Register a user (public)
- POST /api/auth/login - Exchange credentials for a bearer token (public)
- GET /api/auth/user - Get the authenticated user (any authenticated user)
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from restaurant.auth import UserInfo, get_current_user, get_repositories
from restaurant.models import UserPublic
from restaurant.models.schemas import AuthResponse, LoginRequest, RegisterRequest
from restaurant.repositories import Repositories
from restaurant.services import accounts

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/register",
    response_model=AuthResponse,
    summary="Register a user",
    description="Create an account and return a bearer token. Company accounts naming a new company create it.",
)
async def register(
    data: RegisterRequest,
    repos: Annotated[Repositories, Depends(get_repositories)],
) -> AuthResponse:
    logger.info(f"Registration requested (role={data.role.value})")
    return await accounts.register(repos, data)


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Authenticate user & get token",
)
async def login(
    data: LoginRequest,
    repos: Annotated[Repositories, Depends(get_repositories)],
) -> AuthResponse:
    return await accounts.login(repos, data)


@router.get(
    "/user",
    response_model=UserPublic,
    summary="Get authenticated user",
)
async def current_user(
    user: Annotated[UserInfo, Depends(get_current_user)],
    repos: Annotated[Repositories, Depends(get_repositories)],
) -> UserPublic:
    return await accounts.profile(repos, user.id)
