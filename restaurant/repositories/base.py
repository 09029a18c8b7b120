"""Abstract repositories for the four persisted collections."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from restaurant.models import Company, MenuItem, Order, OrderFilter, OrderStatus, User


class MenuRepository(ABC):
    """Menu catalog storage."""

    @abstractmethod
    async def list_items(self, active_only: bool = True) -> list[MenuItem]:
        """List menu items sorted by category, then name."""
        pass

    @abstractmethod
    async def list_categories(self) -> list[str]:
        """Distinct categories of active items, sorted."""
        pass

    @abstractmethod
    async def get(self, item_id: str) -> MenuItem | None:
        pass

    @abstractmethod
    async def get_many(self, item_ids: Iterable[str]) -> list[MenuItem]:
        """Resolve a batch of ids in one lookup. Unknown ids are silently skipped."""
        pass

    @abstractmethod
    async def add(self, item: MenuItem) -> None:
        pass

    @abstractmethod
    async def update(self, item_id: str, fields: dict[str, Any]) -> MenuItem | None:
        """Apply a partial update and return the new state, or None if absent."""
        pass

    @abstractmethod
    async def delete(self, item_id: str) -> bool:
        pass


class OrderRepository(ABC):
    """Order storage."""

    @abstractmethod
    async def add(self, order: Order) -> None:
        pass

    @abstractmethod
    async def get(self, order_id: str) -> Order | None:
        pass

    @abstractmethod
    async def get_many(self, order_ids: Iterable[str]) -> list[Order]:
        pass

    @abstractmethod
    async def find(self, order_filter: OrderFilter) -> list[Order]:
        """Orders matching the filter, newest first."""
        pass

    @abstractmethod
    async def update_status(self, order_id: str, status: OrderStatus, updated_at: datetime) -> Order | None:
        pass

    @abstractmethod
    async def add_child(self, parent_id: str, child_id: str, updated_at: datetime) -> bool:
        """Add a child id to the parent's child_orders set. Returns False if the parent is gone."""
        pass

    @abstractmethod
    async def set_children(self, parent_id: str, child_ids: list[str], updated_at: datetime) -> Order | None:
        """Replace the parent's child_orders set."""
        pass


class UserRepository(ABC):
    """User account storage."""

    @abstractmethod
    async def add(self, user: User) -> None:
        """Insert a user. Raises Conflict if the email is taken."""
        pass

    @abstractmethod
    async def get(self, user_id: str) -> User | None:
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> User | None:
        pass

    @abstractmethod
    async def get_many(self, user_ids: Iterable[str]) -> list[User]:
        pass

    @abstractmethod
    async def list_all(self) -> list[User]:
        """All users sorted by name."""
        pass

    @abstractmethod
    async def list_by_company(self, company_id: str) -> list[User]:
        """Users linked to a company, sorted by name."""
        pass

    @abstractmethod
    async def delete(self, user_id: str) -> bool:
        pass


class CompanyRepository(ABC):
    """Company storage."""

    @abstractmethod
    async def add(self, company: Company) -> None:
        """Insert a company. Raises Conflict if the name is taken."""
        pass

    @abstractmethod
    async def get(self, company_id: str) -> Company | None:
        pass

    @abstractmethod
    async def get_by_name(self, name: str) -> Company | None:
        pass

    @abstractmethod
    async def get_many(self, company_ids: Iterable[str]) -> list[Company]:
        pass

    @abstractmethod
    async def list_all(self) -> list[Company]:
        """All companies sorted by name."""
        pass

    @abstractmethod
    async def update(self, company_id: str, fields: dict[str, Any]) -> Company | None:
        pass


@dataclass
class Repositories:
    """Bundle of repositories handed to routers and services."""

    menu: MenuRepository
    orders: OrderRepository
    users: UserRepository
    companies: CompanyRepository
