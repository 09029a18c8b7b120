"""MongoDB repository implementations backed by Motor."""

import logging
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from restaurant.database import COMPANIES_COLLECTION, MENU_COLLECTION, ORDERS_COLLECTION, USERS_COLLECTION
from restaurant.errors import Conflict
from restaurant.models import Company, MenuItem, Order, OrderFilter, OrderStatus, User
from restaurant.repositories.base import CompanyRepository, MenuRepository, OrderRepository, Repositories, UserRepository

logger = logging.getLogger(__name__)


class MotorMenuRepository(MenuRepository):
    def __init__(self, collection: AsyncIOMotorCollection):
        self._col = collection

    async def list_items(self, active_only: bool = True) -> list[MenuItem]:
        query = {"active": True} if active_only else {}
        cursor = self._col.find(query).sort([("category", 1), ("name", 1)])
        return [MenuItem(**doc) async for doc in cursor]

    async def list_categories(self) -> list[str]:
        categories = await self._col.distinct("category", {"active": True})
        return sorted(categories)

    async def get(self, item_id: str) -> MenuItem | None:
        doc = await self._col.find_one({"id": item_id})
        return MenuItem(**doc) if doc else None

    async def get_many(self, item_ids: Iterable[str]) -> list[MenuItem]:
        cursor = self._col.find({"id": {"$in": list(item_ids)}})
        return [MenuItem(**doc) async for doc in cursor]

    async def add(self, item: MenuItem) -> None:
        await self._col.insert_one(item.model_dump())

    async def update(self, item_id: str, fields: dict[str, Any]) -> MenuItem | None:
        doc = await self._col.find_one_and_update({"id": item_id}, {"$set": fields}, return_document=ReturnDocument.AFTER)
        return MenuItem(**doc) if doc else None

    async def delete(self, item_id: str) -> bool:
        result = await self._col.delete_one({"id": item_id})
        return result.deleted_count > 0


class MotorOrderRepository(OrderRepository):
    def __init__(self, collection: AsyncIOMotorCollection):
        self._col = collection

    async def add(self, order: Order) -> None:
        await self._col.insert_one(order.model_dump())

    async def get(self, order_id: str) -> Order | None:
        doc = await self._col.find_one({"id": order_id})
        return Order(**doc) if doc else None

    async def get_many(self, order_ids: Iterable[str]) -> list[Order]:
        cursor = self._col.find({"id": {"$in": list(order_ids)}}).sort("created_at", -1)
        return [Order(**doc) async for doc in cursor]

    async def find(self, order_filter: OrderFilter) -> list[Order]:
        cursor = self._col.find(order_filter.to_query()).sort("created_at", -1)
        return [Order(**doc) async for doc in cursor]

    async def update_status(self, order_id: str, status: OrderStatus, updated_at: datetime) -> Order | None:
        doc = await self._col.find_one_and_update(
            {"id": order_id},
            {"$set": {"status": status.value, "updated_at": updated_at}},
            return_document=ReturnDocument.AFTER,
        )
        return Order(**doc) if doc else None

    async def add_child(self, parent_id: str, child_id: str, updated_at: datetime) -> bool:
        result = await self._col.update_one(
            {"id": parent_id},
            {"$addToSet": {"child_orders": child_id}, "$set": {"updated_at": updated_at}},
        )
        return result.matched_count > 0

    async def set_children(self, parent_id: str, child_ids: list[str], updated_at: datetime) -> Order | None:
        doc = await self._col.find_one_and_update(
            {"id": parent_id},
            {"$set": {"child_orders": child_ids, "updated_at": updated_at}},
            return_document=ReturnDocument.AFTER,
        )
        return Order(**doc) if doc else None


class MotorUserRepository(UserRepository):
    def __init__(self, collection: AsyncIOMotorCollection):
        self._col = collection

    async def add(self, user: User) -> None:
        try:
            await self._col.insert_one(user.model_dump())
        except DuplicateKeyError:
            raise Conflict("User already exists")

    async def get(self, user_id: str) -> User | None:
        doc = await self._col.find_one({"id": user_id})
        return User(**doc) if doc else None

    async def get_by_email(self, email: str) -> User | None:
        doc = await self._col.find_one({"email": email})
        return User(**doc) if doc else None

    async def get_many(self, user_ids: Iterable[str]) -> list[User]:
        cursor = self._col.find({"id": {"$in": list(user_ids)}})
        return [User(**doc) async for doc in cursor]

    async def list_all(self) -> list[User]:
        cursor = self._col.find({}).sort("name", 1)
        return [User(**doc) async for doc in cursor]

    async def list_by_company(self, company_id: str) -> list[User]:
        cursor = self._col.find({"company_id": company_id}).sort("name", 1)
        return [User(**doc) async for doc in cursor]

    async def delete(self, user_id: str) -> bool:
        result = await self._col.delete_one({"id": user_id})
        return result.deleted_count > 0


class MotorCompanyRepository(CompanyRepository):
    def __init__(self, collection: AsyncIOMotorCollection):
        self._col = collection

    async def add(self, company: Company) -> None:
        try:
            await self._col.insert_one(company.model_dump())
        except DuplicateKeyError:
            raise Conflict("Company already exists")

    async def get(self, company_id: str) -> Company | None:
        doc = await self._col.find_one({"id": company_id})
        return Company(**doc) if doc else None

    async def get_by_name(self, name: str) -> Company | None:
        doc = await self._col.find_one({"name": name})
        return Company(**doc) if doc else None

    async def get_many(self, company_ids: Iterable[str]) -> list[Company]:
        cursor = self._col.find({"id": {"$in": list(company_ids)}})
        return [Company(**doc) async for doc in cursor]

    async def list_all(self) -> list[Company]:
        cursor = self._col.find({}).sort("name", 1)
        return [Company(**doc) async for doc in cursor]

    async def update(self, company_id: str, fields: dict[str, Any]) -> Company | None:
        try:
            doc = await self._col.find_one_and_update({"id": company_id}, {"$set": fields}, return_document=ReturnDocument.AFTER)
        except DuplicateKeyError:
            raise Conflict("Company already exists")
        return Company(**doc) if doc else None


def create_motor_repositories(db: AsyncIOMotorDatabase) -> Repositories:
    """Build the repository bundle for a connected database."""
    return Repositories(
        menu=MotorMenuRepository(db[MENU_COLLECTION]),
        orders=MotorOrderRepository(db[ORDERS_COLLECTION]),
        users=MotorUserRepository(db[USERS_COLLECTION]),
        companies=MotorCompanyRepository(db[COMPANIES_COLLECTION]),
    )
