"""
Menu Router - Catalog Management with MongoDB Persistence

Endpoints:
- GET /api/menu - List active menu items (public)
- GET /api/menu/categories - List categories of active items (public)
- GET /api/menu/{item_id} - Get menu item details (public)
- POST /api/menu - Create menu item (admin only)
- PUT /api/menu/{item_id} - Update menu item (admin only)
- DELETE /api/menu/{item_id} - Delete menu item (admin only)

Placed orders keep a snapshot of name and price, so edits here never
change existing orders.
"""

import logging
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, status

from restaurant.auth import AdminOnly, UserInfo, get_repositories
from restaurant.database import new_id
from restaurant.errors import NotFound
from restaurant.models import MenuItem, MenuItemCreate, MenuItemUpdate
from restaurant.models.schemas import MessageResponse
from restaurant.repositories import Repositories

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=list[MenuItem],
    summary="List menu items",
    description="Get all active menu items sorted by category. Public.",
)
async def list_menu_items(
    repos: Annotated[Repositories, Depends(get_repositories)],
) -> list[MenuItem]:
    return await repos.menu.list_items(active_only=True)


@router.get(
    "/categories",
    response_model=list[str],
    summary="List menu categories",
)
async def list_categories(
    repos: Annotated[Repositories, Depends(get_repositories)],
) -> list[str]:
    return await repos.menu.list_categories()


@router.get(
    "/{item_id}",
    response_model=MenuItem,
    summary="Get menu item details",
)
async def get_menu_item(
    item_id: str,
    repos: Annotated[Repositories, Depends(get_repositories)],
) -> MenuItem:
    item = await repos.menu.get(item_id)
    if item is None:
        raise NotFound("Menu item not found")
    return item


@router.post(
    "",
    response_model=MenuItem,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new menu item",
    description="Create a new menu item. **Requires admin role.**",
)
async def create_menu_item(
    item_data: MenuItemCreate,
    user: Annotated[UserInfo, Depends(AdminOnly)],
    repos: Annotated[Repositories, Depends(get_repositories)],
) -> MenuItem:
    logger.info(f"Admin '{user.id}' creating menu item: {item_data.name}")

    now = datetime.now(UTC)
    item = MenuItem(
        id=new_id(),
        **item_data.model_dump(),
        created_at=now,
        updated_at=now,
    )

    await repos.menu.add(item)
    logger.info(f"Created menu item: {item.id}")

    return item


@router.put(
    "/{item_id}",
    response_model=MenuItem,
    summary="Update a menu item",
    description="Update an existing menu item. **Requires admin role.**",
)
async def update_menu_item(
    item_id: str,
    item_data: MenuItemUpdate,
    user: Annotated[UserInfo, Depends(AdminOnly)],
    repos: Annotated[Repositories, Depends(get_repositories)],
) -> MenuItem:
    logger.info(f"Admin '{user.id}' updating menu item: {item_id}")

    fields = item_data.model_dump(exclude_unset=True, exclude_none=True)
    fields["updated_at"] = datetime.now(UTC)

    updated = await repos.menu.update(item_id, fields)
    if updated is None:
        raise NotFound("Menu item not found")

    logger.info(f"Updated menu item: {item_id} ({sorted(k for k in fields if k != 'updated_at')})")
    return updated


@router.delete(
    "/{item_id}",
    response_model=MessageResponse,
    summary="Delete a menu item",
    description="Delete a menu item. **Requires admin role.**",
)
async def delete_menu_item(
    item_id: str,
    user: Annotated[UserInfo, Depends(AdminOnly)],
    repos: Annotated[Repositories, Depends(get_repositories)],
) -> MessageResponse:
    logger.info(f"Admin '{user.id}' deleting menu item: {item_id}")

    if not await repos.menu.delete(item_id):
        raise NotFound("Menu item not found")

    logger.info(f"Deleted menu item: {item_id}")
    return MessageResponse(message="Menu item removed")
