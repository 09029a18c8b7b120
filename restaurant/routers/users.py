"""
Users Router - Account Administration

Endpoints:
- GET /api/admin/users - List users (admin)
- DELETE /api/admin/users/{user_id} - Delete a user (admin)
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from restaurant.auth import AdminOnly, UserInfo, get_repositories
from restaurant.errors import NotFound
from restaurant.models import UserPublic
from restaurant.models.schemas import MessageResponse
from restaurant.repositories import Repositories
from restaurant.services import accounts

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=list[UserPublic],
    summary="List users",
    description="**Requires admin role.**",
)
async def list_users(
    user: Annotated[UserInfo, Depends(AdminOnly)],
    repos: Annotated[Repositories, Depends(get_repositories)],
) -> list[UserPublic]:
    return await accounts.public_users(repos, await repos.users.list_all())


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    summary="Delete a user",
    description="Hard delete. The user's orders are kept. **Requires admin role.**",
)
async def delete_user(
    user_id: str,
    user: Annotated[UserInfo, Depends(AdminOnly)],
    repos: Annotated[Repositories, Depends(get_repositories)],
) -> MessageResponse:
    if not await repos.users.delete(user_id):
        raise NotFound("User not found")

    logger.info(f"Admin '{user.id}' deleted user {user_id}")
    return MessageResponse(message="User removed")
