from tests.fixtures.factories import CompanyFactory, MenuItemFactory, OrderFactory, UserFactory, actor
from tests.fixtures.repositories import UnlinkableOrderRepository, create_in_memory_repositories

__all__ = [
    "CompanyFactory",
    "MenuItemFactory",
    "OrderFactory",
    "UserFactory",
    "actor",
    "UnlinkableOrderRepository",
    "create_in_memory_repositories",
]
