"""Order placement, retrieval and status management."""

import logging
from collections.abc import Iterable
from datetime import UTC, datetime

from restaurant.auth.dependencies import UserInfo
from restaurant.database import new_id
from restaurant.errors import NotFound
from restaurant.models import CompanyRef, Order, OrderCreate, OrderFilter, OrderStatus, OrderView, UserRef
from restaurant.repositories import Repositories
from restaurant.services import aggregation, policy, pricing
from restaurant.services.policy import Action, ResourceFacts

logger = logging.getLogger(__name__)


class OrderService:
    """Order use cases. Every method re-checks access after loading."""

    def __init__(self, repos: Repositories):
        self.repos = repos

    async def create_order(self, actor: UserInfo, order_data: OrderCreate) -> OrderView:
        """Price the cart, attach company attribution and persist the order."""
        logger.info(f"User '{actor.id}' placing order with {len(order_data.items)} line(s) at {order_data.location.value}")

        priced = await pricing.price_cart(order_data.items, self.repos.menu)
        link = await aggregation.resolve_company_link(actor, self.repos.orders, order_data.company_order_id, order_data.is_company_order)

        now = datetime.now(UTC)
        order = Order(
            id=new_id(),
            user_id=actor.id,
            items=priced.items,
            total_price=priced.total_price,
            location=order_data.location,
            status=OrderStatus.PENDING,
            pickup_time=order_data.pickup_time,
            company_id=link.company_id,
            is_company_order=link.is_company_order,
            parent_order=link.parent_order,
            created_at=now,
            updated_at=now,
        )

        await self.repos.orders.add(order)
        await aggregation.link_to_parent(self.repos.orders, order, now)
        logger.info(f"Created order: {order.id} (total: ${order.total_price:.2f}, company_order={order.is_company_order}, parent={order.parent_order})")

        return (await self.present([order]))[0]

    async def list_orders(self, actor: UserInfo) -> list[OrderView]:
        orders = await self.repos.orders.find(policy.order_list_filter(actor))
        return await self.present(orders)

    async def get_order(self, actor: UserInfo, order_id: str) -> OrderView:
        order = await self._load(order_id)
        policy.authorize(
            actor,
            Action.READ_ORDER,
            ResourceFacts(owner_id=order.user_id, company_id=order.company_id),
            message="Not authorized to view this order",
        )
        return (await self.present([order]))[0]

    async def update_status(self, actor: UserInfo, order_id: str, status: OrderStatus) -> OrderView:
        order = await self._load(order_id)
        policy.authorize(actor, Action.UPDATE_ORDER_STATUS, ResourceFacts(owner_id=order.user_id, company_id=order.company_id))

        updated = await self.repos.orders.update_status(order_id, status, datetime.now(UTC))
        if updated is None:
            raise NotFound("Order not found")

        logger.info(f"Order {order_id} status {order.status.value} -> {status.value} by '{actor.id}'")
        return (await self.present([updated]))[0]

    async def list_company_orders(self, actor: UserInfo, company_id: str) -> list[OrderView]:
        """Parent company orders of one company."""
        policy.authorize(actor, Action.LIST_COMPANY_ORDERS, ResourceFacts(company_id=company_id), message="Not authorized to view these orders")
        orders = await self.repos.orders.find(OrderFilter(company_id=company_id, company_orders_only=True))
        return await self.present(orders)

    async def reconcile(self, actor: UserInfo, order_id: str) -> OrderView:
        policy.authorize(actor, Action.RECONCILE_ORDER)
        order = await aggregation.reconcile_children(self.repos.orders, order_id, datetime.now(UTC))
        return (await self.present([order]))[0]

    async def _load(self, order_id: str) -> Order:
        order = await self.repos.orders.get(order_id)
        if order is None:
            raise NotFound("Order not found")
        return order

    async def present(self, orders: Iterable[Order]) -> list[OrderView]:
        """Resolve users, companies and one level of child orders in batch lookups."""
        orders = list(orders)

        child_ids = {child_id for order in orders for child_id in order.child_orders}
        children = {child.id: child for child in await self.repos.orders.get_many(child_ids)} if child_ids else {}

        everyone = [*orders, *children.values()]
        user_ids = {order.user_id for order in everyone}
        company_ids = {order.company_id for order in everyone if order.company_id}

        users = {user.id: UserRef(id=user.id, name=user.name, email=user.email) for user in await self.repos.users.get_many(user_ids)}
        companies = {company.id: CompanyRef(id=company.id, name=company.name) for company in await self.repos.companies.get_many(company_ids)} if company_ids else {}

        def view(order: Order, nested: list[OrderView]) -> OrderView:
            return OrderView(
                id=order.id,
                user=users.get(order.user_id),
                items=order.items,
                total_price=order.total_price,
                location=order.location,
                status=order.status,
                pickup_time=order.pickup_time,
                company=companies.get(order.company_id) if order.company_id else None,
                is_company_order=order.is_company_order,
                parent_order=order.parent_order,
                child_orders=nested,
                created_at=order.created_at,
                updated_at=order.updated_at,
            )

        return [view(order, [view(children[child_id], []) for child_id in order.child_orders if child_id in children]) for order in orders]
