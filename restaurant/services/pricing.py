"""
Order pricing.

Prices always come from the catalog, never from the client. Each line stores
a snapshot of the item's name and price so later catalog edits leave placed
orders untouched.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from restaurant.errors import NotFound, ValidationFailed
from restaurant.models import LineItem, MenuItem
from restaurant.models.schemas import CartItem
from restaurant.repositories import MenuRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PricedCart:
    items: list[LineItem]
    total_price: float


def distinct_item_ids(cart: Sequence[CartItem]) -> list[str]:
    """Requested menu item ids, first occurrence order, without repeats."""
    return list(dict.fromkeys(line.menu_item_id for line in cart))


def build_line_items(cart: Sequence[CartItem], catalog: Mapping[str, MenuItem]) -> list[LineItem]:
    return [
        LineItem(
            menu_item=line.menu_item_id,
            name=catalog[line.menu_item_id].name,
            price=catalog[line.menu_item_id].price,
            quantity=line.quantity,
            notes=line.notes,
        )
        for line in cart
    ]


def order_total(items: Sequence[LineItem]) -> float:
    # Rounded to cents to drop float noise from the sum
    return round(sum(item.price * item.quantity for item in items), 2)


async def price_cart(cart: Sequence[CartItem], menu: MenuRepository) -> PricedCart:
    """
    Resolve a cart against the catalog in one batch lookup.

    Raises:
        NotFound: any requested item does not exist; nothing is built.
        ValidationFailed: a requested item exists but is not on sale.
    """
    requested = distinct_item_ids(cart)
    found = await menu.get_many(requested)

    if len(found) != len(requested):
        missing = sorted(set(requested) - {item.id for item in found})
        logger.info(f"Rejected cart referencing unknown menu items: {missing}")
        raise NotFound("One or more menu items do not exist")

    catalog = {item.id: item for item in found}

    inactive = [catalog[item_id].name for item_id in requested if not catalog[item_id].active]
    if inactive:
        raise ValidationFailed(f"Menu item(s) currently unavailable: {', '.join(inactive)}")

    items = build_line_items(cart, catalog)
    return PricedCart(items=items, total_price=order_total(items))
