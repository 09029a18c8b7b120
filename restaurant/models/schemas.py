"""
Pydantic schemas for the Restaurant Order System API.

Stored documents are the snake_case ``model_dump()`` of these models; the JSON
surface uses camelCase aliases (``totalPrice``, ``isCompanyOrder``, ...).
"""

from datetime import datetime
from enum import Enum
from typing import Annotated

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Role(str, Enum):
    """User roles."""

    CUSTOMER = "customer"
    STAFF = "staff"
    ADMIN = "admin"
    COMPANY = "company"


class OrderStatus(str, Enum):
    """Order status. Any value may be set by staff; there is no enforced progression."""

    PENDING = "pending"  # Order placed
    PREPARING = "preparing"  # Kitchen started
    READY = "ready"  # Waiting for pickup
    COMPLETED = "completed"  # Picked up
    CANCELLED = "cancelled"  # Terminal, does not cascade to child orders


class Location(str, Enum):
    """Pickup locations."""

    DOWNTOWN = "downtown"
    UPTOWN = "uptown"


class ApiModel(BaseModel):
    """Base model exposing camelCase field aliases on the JSON surface."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Company Schemas
# ============================================================================


class Contact(ApiModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None


class Address(ApiModel):
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None


class CompanyCreate(ApiModel):
    """Schema for creating a company."""

    name: Annotated[str, Field(min_length=1, max_length=200, description="Unique company name")]
    contact: Contact = Field(default_factory=Contact)
    address: Address = Field(default_factory=Address)


class CompanyUpdate(ApiModel):
    """Schema for updating a company (all fields optional)."""

    name: Annotated[str | None, Field(min_length=1, max_length=200)] = None
    contact: Contact | None = None
    address: Address | None = None


class Company(CompanyCreate):
    """Full company schema with ID."""

    id: str
    created_at: datetime


class CompanyRef(ApiModel):
    """Company projection embedded in orders."""

    id: str
    name: str


# ============================================================================
# User Schemas
# ============================================================================

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class User(ApiModel):
    """Stored user. Never returned as-is: see UserPublic."""

    id: str
    name: str
    email: str
    password_hash: str
    role: Role = Role.CUSTOMER
    company_id: str | None = None
    created_at: datetime


class UserPublic(ApiModel):
    """Sanitized user projection (no credential hash)."""

    id: str
    name: str
    email: str
    role: Role
    company: str | None = None  # Company name


class UserRef(ApiModel):
    """User projection embedded in orders."""

    id: str
    name: str
    email: str


class RegisterRequest(ApiModel):
    name: Annotated[str, Field(min_length=1, max_length=100, description="Display name")]
    email: Annotated[str, Field(pattern=EMAIL_PATTERN, max_length=254)]
    password: Annotated[str, Field(min_length=6, max_length=128)]
    role: Role = Role.CUSTOMER
    company_name: str = ""


class LoginRequest(ApiModel):
    email: Annotated[str, Field(pattern=EMAIL_PATTERN, max_length=254)]
    password: Annotated[str, Field(min_length=1)]


class AuthResponse(ApiModel):
    token: str
    user: UserPublic


# ============================================================================
# Menu Schemas
# ============================================================================


class MenuItemBase(ApiModel):
    """Base schema for menu items."""

    name: Annotated[str, Field(min_length=1, max_length=100, description="Item name")]
    description: Annotated[str, Field(min_length=1, max_length=500, description="Item description")]
    price: Annotated[float, Field(ge=0, description="Unit price")]
    category: Annotated[str, Field(min_length=1, max_length=50)]
    image: Annotated[str, Field(min_length=1, description="Image URL")]
    active: bool = True


class MenuItemCreate(MenuItemBase):
    """Schema for creating a new menu item."""

    pass


class MenuItemUpdate(ApiModel):
    """Schema for updating a menu item (all fields optional)."""

    name: Annotated[str | None, Field(min_length=1, max_length=100)] = None
    description: Annotated[str | None, Field(min_length=1, max_length=500)] = None
    price: Annotated[float | None, Field(ge=0)] = None
    category: Annotated[str | None, Field(min_length=1, max_length=50)] = None
    image: Annotated[str | None, Field(min_length=1)] = None
    active: bool | None = None


class MenuItem(MenuItemBase):
    """Full menu item schema with ID."""

    id: str
    created_at: datetime
    updated_at: datetime


# ============================================================================
# Order Schemas
# ============================================================================


class CartItem(ApiModel):
    """One requested line of a new order."""

    menu_item_id: Annotated[str, Field(min_length=1)]
    quantity: Annotated[int, Field(ge=1, description="Quantity ordered")]
    notes: str = ""


class OrderCreate(ApiModel):
    """Schema for placing a new order."""

    items: Annotated[list[CartItem], Field(min_length=1, description="Order items")]
    location: Location
    pickup_time: datetime | None = None
    company_order_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("companyOrderId", "parentOrder", "company_order_id"),
        description="Parent company order to attach this order to",
    )
    is_company_order: bool = False


class LineItem(ApiModel):
    """Priced line with a point-in-time snapshot of the menu item."""

    menu_item: str
    name: str
    price: float
    quantity: Annotated[int, Field(ge=1)]
    notes: str = ""


class Order(ApiModel):
    """Stored order."""

    id: str
    user_id: str
    items: list[LineItem]
    total_price: float
    location: Location
    status: OrderStatus = OrderStatus.PENDING
    pickup_time: datetime | None = None
    company_id: str | None = None
    is_company_order: bool = False
    parent_order: str | None = None
    child_orders: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class OrderView(ApiModel):
    """Order as returned by the API, with user, company and children resolved."""

    id: str
    user: UserRef | None = None
    items: list[LineItem]
    total_price: float
    location: Location
    status: OrderStatus
    pickup_time: datetime | None = None
    company: CompanyRef | None = None
    is_company_order: bool = False
    parent_order: str | None = None
    child_orders: list["OrderView"] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


OrderView.model_rebuild()


class OrderStatusUpdate(ApiModel):
    status: OrderStatus


# ============================================================================
# Generic Response Schemas
# ============================================================================


class MessageResponse(ApiModel):
    message: str
