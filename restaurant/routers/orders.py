"""
Orders Router - Order Placement, Tracking and Company Orders

Endpoints:
- POST /api/orders - Place a new order (any authenticated user)
- GET /api/orders - List orders visible to the caller (role scoped)
- GET /api/orders/company/{company_id} - List a company's company orders (company, admin)
- GET /api/orders/{order_id} - Get order details (owner, company, staff, admin)
- PUT /api/orders/{order_id} - Update order status (staff, admin)
- POST /api/orders/{order_id}/reconcile - Rebuild a company order's child list (admin)
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from restaurant.auth import AdminOnly, AnyAuthenticated, CompanyOrAdmin, StaffOrAdmin, UserInfo, get_repositories
from restaurant.models import OrderCreate, OrderView
from restaurant.models.schemas import OrderStatusUpdate
from restaurant.repositories import Repositories
from restaurant.services.orders import OrderService

logger = logging.getLogger(__name__)

router = APIRouter()


def get_order_service(repos: Annotated[Repositories, Depends(get_repositories)]) -> OrderService:
    return OrderService(repos)


@router.post(
    "",
    response_model=OrderView,
    status_code=status.HTTP_201_CREATED,
    summary="Place a new order",
    description=(
        "Place an order. Prices come from the menu. Pass `companyOrderId` to join an existing company order, "
        "or `isCompanyOrder` (company accounts) to start one."
    ),
)
async def create_order(
    order_data: OrderCreate,
    user: Annotated[UserInfo, Depends(AnyAuthenticated)],
    service: Annotated[OrderService, Depends(get_order_service)],
) -> OrderView:
    return await service.create_order(user, order_data)


@router.get(
    "",
    response_model=list[OrderView],
    summary="List orders",
    description="Customers see their own orders, company accounts also see their company orders, staff and admins see all.",
)
async def list_orders(
    user: Annotated[UserInfo, Depends(AnyAuthenticated)],
    service: Annotated[OrderService, Depends(get_order_service)],
) -> list[OrderView]:
    logger.info(f"User '{user.id}' ({user.role.value}) listing orders")
    return await service.list_orders(user)


@router.get(
    "/company/{company_id}",
    response_model=list[OrderView],
    summary="List company orders",
    description="List the company orders of a company. **Requires company or admin role.**",
)
async def list_company_orders(
    company_id: str,
    user: Annotated[UserInfo, Depends(CompanyOrAdmin)],
    service: Annotated[OrderService, Depends(get_order_service)],
) -> list[OrderView]:
    logger.info(f"User '{user.id}' listing company orders of {company_id}")
    return await service.list_company_orders(user, company_id)


@router.get(
    "/{order_id}",
    response_model=OrderView,
    summary="Get order details",
)
async def get_order(
    order_id: str,
    user: Annotated[UserInfo, Depends(AnyAuthenticated)],
    service: Annotated[OrderService, Depends(get_order_service)],
) -> OrderView:
    logger.info(f"User '{user.id}' fetching order: {order_id}")
    return await service.get_order(user, order_id)


@router.put(
    "/{order_id}",
    response_model=OrderView,
    summary="Update order status",
    description="Set any order status. **Requires staff or admin role.**",
)
async def update_order_status(
    order_id: str,
    update: OrderStatusUpdate,
    user: Annotated[UserInfo, Depends(StaffOrAdmin)],
    service: Annotated[OrderService, Depends(get_order_service)],
) -> OrderView:
    return await service.update_status(user, order_id, update.status)


@router.post(
    "/{order_id}/reconcile",
    response_model=OrderView,
    summary="Reconcile a company order",
    description="Rebuild `childOrders` from the orders that name this order as their parent. **Requires admin role.**",
)
async def reconcile_order(
    order_id: str,
    user: Annotated[UserInfo, Depends(AdminOnly)],
    service: Annotated[OrderService, Depends(get_order_service)],
) -> OrderView:
    return await service.reconcile(user, order_id)
