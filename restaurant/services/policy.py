"""
Access control policy.

A single pure decision function, ``is_allowed(actor, action, resource)``, holds
every role and ownership rule. Handlers load the resource first, describe it
as ``ResourceFacts`` and call ``authorize`` which raises PermissionDenied on a
negative decision. Absent resources are reported as NotFound by the caller
before the policy is consulted.

Role summary:
- customer: own orders only
- company: own orders, plus its company's orders, roster and report
- staff: every order, may change order status
- admin: everything except originating a company order
"""

import logging
from dataclasses import dataclass
from enum import Enum

from restaurant.auth.dependencies import UserInfo
from restaurant.errors import PermissionDenied
from restaurant.models import OrderFilter, Role

logger = logging.getLogger(__name__)


class Action(str, Enum):
    READ_ORDER = "read_order"
    UPDATE_ORDER_STATUS = "update_order_status"
    RECONCILE_ORDER = "reconcile_order"
    LIST_COMPANY_ORDERS = "list_company_orders"
    CREATE_COMPANY_ORDER = "create_company_order"
    READ_COMPANY = "read_company"
    LIST_COMPANY_USERS = "list_company_users"
    READ_COMPANY_REPORT = "read_company_report"
    READ_SALES_REPORT = "read_sales_report"


@dataclass(frozen=True)
class ResourceFacts:
    """What the policy needs to know about the target resource."""

    owner_id: str | None = None
    company_id: str | None = None


_NO_FACTS = ResourceFacts()

_ADMIN_ONLY = {
    Action.RECONCILE_ORDER,
    Action.READ_SALES_REPORT,
}

_COMPANY_SCOPED = {
    Action.LIST_COMPANY_ORDERS,
    Action.READ_COMPANY,
    Action.LIST_COMPANY_USERS,
    Action.READ_COMPANY_REPORT,
}


def _same_company(actor: UserInfo, company_id: str | None) -> bool:
    return actor.company_id is not None and company_id is not None and actor.company_id == company_id


def is_allowed(actor: UserInfo, action: Action, resource: ResourceFacts = _NO_FACTS) -> bool:
    """Decide whether ``actor`` may perform ``action`` on ``resource``."""
    # Checked before the admin shortcut: admins place standalone orders
    if action == Action.CREATE_COMPANY_ORDER:
        return actor.has_role(Role.COMPANY)

    if actor.has_role(Role.ADMIN):
        return True

    if action in _ADMIN_ONLY:
        return False

    if action == Action.READ_ORDER:
        if actor.has_role(Role.STAFF):
            return True
        if resource.owner_id == actor.id:
            return True
        return actor.has_role(Role.COMPANY) and _same_company(actor, resource.company_id)

    if action == Action.UPDATE_ORDER_STATUS:
        return actor.has_role(Role.STAFF)

    if action in _COMPANY_SCOPED:
        return actor.has_role(Role.COMPANY) and _same_company(actor, resource.company_id)

    return False


def authorize(actor: UserInfo, action: Action, resource: ResourceFacts = _NO_FACTS, message: str | None = None) -> None:
    """Raise PermissionDenied unless the actor may perform the action."""
    if not is_allowed(actor, action, resource):
        logger.warning(f"Denied {action.value} for user '{actor.id}' ({actor.role.value}) on {resource}")
        raise PermissionDenied(message or "Not authorized to perform this action")


def order_list_filter(actor: UserInfo) -> OrderFilter:
    """Orders an actor sees when listing without an id."""
    if actor.role in (Role.ADMIN, Role.STAFF):
        return OrderFilter()
    if actor.role == Role.COMPANY and actor.company_id is not None:
        return OrderFilter(company_id=actor.company_id, company_orders_only=True, or_user_id=actor.id)
    return OrderFilter(user_id=actor.id)
