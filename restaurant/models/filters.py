"""Order query object shared by the repositories and the access policy."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from restaurant.models.schemas import Location, Order


@dataclass(frozen=True)
class OrderFilter:
    """Criteria for selecting orders.

    The company criteria (``company_id`` / ``company_orders_only``) and the
    owner criterion (``user_id``) are AND-ed, except that ``or_user_id`` admits
    the given user's own orders in addition to the company ones.
    """

    user_id: str | None = None
    company_id: str | None = None
    company_orders_only: bool = False
    or_user_id: str | None = None
    parent_order: str | None = None
    created_from: datetime | None = None
    created_to: datetime | None = None
    location: Location | None = None

    def to_query(self) -> dict[str, Any]:
        """Compile into a MongoDB query document."""
        query: dict[str, Any] = {}
        scope: dict[str, Any] = {}

        if self.company_id is not None:
            scope["company_id"] = self.company_id
        if self.company_orders_only:
            scope["is_company_order"] = True

        if self.or_user_id is not None:
            query["$or"] = [scope, {"user_id": self.or_user_id}]
        else:
            query.update(scope)

        if self.user_id is not None:
            query["user_id"] = self.user_id
        if self.parent_order is not None:
            query["parent_order"] = self.parent_order
        if self.location is not None:
            query["location"] = self.location.value

        created: dict[str, datetime] = {}
        if self.created_from is not None:
            created["$gte"] = self.created_from
        if self.created_to is not None:
            created["$lte"] = self.created_to
        if created:
            query["created_at"] = created

        return query

    def matches(self, order: Order) -> bool:
        """Evaluate the filter against a single order."""
        in_scope = (self.company_id is None or order.company_id == self.company_id) and (not self.company_orders_only or order.is_company_order)
        if self.or_user_id is not None:
            in_scope = in_scope or order.user_id == self.or_user_id
        if not in_scope:
            return False

        if self.user_id is not None and order.user_id != self.user_id:
            return False
        if self.parent_order is not None and order.parent_order != self.parent_order:
            return False
        if self.location is not None and order.location != self.location:
            return False
        if self.created_from is not None and order.created_at < self.created_from:
            return False
        if self.created_to is not None and order.created_at > self.created_to:
            return False
        return True
