from restaurant.repositories.base import CompanyRepository, MenuRepository, OrderRepository, Repositories, UserRepository
from restaurant.repositories.motor import create_motor_repositories

__all__ = [
    "CompanyRepository",
    "MenuRepository",
    "OrderRepository",
    "Repositories",
    "UserRepository",
    "create_motor_repositories",
]
