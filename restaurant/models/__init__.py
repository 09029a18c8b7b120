"""Data models and schemas."""

from restaurant.models.filters import OrderFilter
from restaurant.models.schemas import (
    Company,
    CompanyCreate,
    CompanyRef,
    CompanyUpdate,
    LineItem,
    Location,
    MenuItem,
    MenuItemCreate,
    MenuItemUpdate,
    Order,
    OrderCreate,
    OrderStatus,
    OrderView,
    Role,
    User,
    UserPublic,
    UserRef,
)

__all__ = [
    "Company",
    "CompanyCreate",
    "CompanyRef",
    "CompanyUpdate",
    "LineItem",
    "Location",
    "MenuItem",
    "MenuItemCreate",
    "MenuItemUpdate",
    "Order",
    "OrderCreate",
    "OrderFilter",
    "OrderStatus",
    "OrderView",
    "Role",
    "User",
    "UserPublic",
    "UserRef",
]
