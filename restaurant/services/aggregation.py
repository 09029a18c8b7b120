"""
Company order aggregation.

A company order is a parent order attributed to a company; individual orders
join it by naming it as their parent. The child carries the parent's company
and a pointer to the parent, and the parent keeps a set of child ids.

Linking is a two-step write (insert child, then add it to the parent). If the
second step fails the child still points at its parent and
``reconcile_children`` rebuilds the parent's set from those pointers.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from restaurant.auth.dependencies import UserInfo
from restaurant.errors import NotFound, ValidationFailed
from restaurant.models import Order, OrderFilter
from restaurant.repositories import OrderRepository
from restaurant.services.policy import Action, is_allowed

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompanyLink:
    """Company attribution for a new order."""

    company_id: str | None = None
    is_company_order: bool = False
    parent_order: str | None = None


STANDALONE = CompanyLink()


async def resolve_company_link(
    actor: UserInfo,
    orders: OrderRepository,
    parent_order_id: str | None,
    is_company_order: bool,
) -> CompanyLink:
    """
    Decide how a new order relates to company orders.

    - With a parent id: the order becomes a child of that parent and inherits
      its company (NotFound if the parent does not exist).
    - Else, a company-role actor asking for a company order originates a new
      parent tagged with the actor's company.
    - Otherwise the order is standalone.
    """
    if parent_order_id:
        parent = await orders.get(parent_order_id)
        if parent is None:
            raise NotFound("Parent company order not found")
        return CompanyLink(company_id=parent.company_id, is_company_order=False, parent_order=parent.id)

    if is_company_order and is_allowed(actor, Action.CREATE_COMPANY_ORDER):
        if actor.company_id is None:
            raise ValidationFailed("Company account is not linked to a company")
        return CompanyLink(company_id=actor.company_id, is_company_order=True)

    return STANDALONE


async def link_to_parent(orders: OrderRepository, child: Order, now: datetime) -> None:
    """Record a persisted child order on its parent."""
    if child.parent_order is None:
        return

    try:
        linked = await orders.add_child(child.parent_order, child.id, now)
    except Exception:
        logger.error(f"Failed to link child order {child.id} to parent {child.parent_order}; reconcile the parent to repair", exc_info=True)
        raise

    if not linked:
        # Parent vanished between lookup and link; the child keeps its pointer
        logger.warning(f"Parent order {child.parent_order} disappeared before child {child.id} could be linked")


async def reconcile_children(orders: OrderRepository, parent_id: str, now: datetime) -> Order:
    """Rebuild a parent's child set from the orders pointing at it."""
    parent = await orders.get(parent_id)
    if parent is None:
        raise NotFound("Order not found")

    children = await orders.find(OrderFilter(parent_order=parent_id))
    child_ids = [child.id for child in sorted(children, key=lambda o: o.created_at)]

    if child_ids == parent.child_orders:
        return parent

    logger.info(f"Reconciled order {parent_id}: child_orders {parent.child_orders} -> {child_ids}")
    updated = await orders.set_children(parent_id, child_ids, now)
    if updated is None:
        raise NotFound("Order not found")
    return updated
