"""
Reports Router - Sales and Company Spend

Endpoints:
- GET /api/reports/sales - Sales by location (admin)
- GET /api/reports/company/{company_id} - Company spend by month (admin, members of the company)

Query filters: startDate, endDate (ISO dates, inclusive), location; sales
also accepts company.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from restaurant.auth import AdminOnly, AnyAuthenticated, UserInfo, get_repositories
from restaurant.models import Location
from restaurant.models.reports import CompanyReport, SalesReport
from restaurant.repositories import Repositories
from restaurant.services.reports import ReportService

logger = logging.getLogger(__name__)

router = APIRouter()


def get_report_service(repos: Annotated[Repositories, Depends(get_repositories)]) -> ReportService:
    return ReportService(repos)


@router.get(
    "/sales",
    response_model=SalesReport,
    summary="Sales report",
    description="Order counts and sales grouped by location. **Requires admin role.**",
)
async def sales_report(
    user: Annotated[UserInfo, Depends(AdminOnly)],
    service: Annotated[ReportService, Depends(get_report_service)],
    start_date: Annotated[str | None, Query(alias="startDate")] = None,
    end_date: Annotated[str | None, Query(alias="endDate")] = None,
    location: Location | None = None,
    company: str | None = None,
) -> SalesReport:
    return await service.sales_report(user, start_date=start_date, end_date=end_date, location=location, company_id=company)


@router.get(
    "/company/{company_id}",
    response_model=CompanyReport,
    summary="Company report",
    description="Company spend grouped by UTC calendar month. Company accounts may only request their own company.",
)
async def company_report(
    company_id: str,
    user: Annotated[UserInfo, Depends(AnyAuthenticated)],
    service: Annotated[ReportService, Depends(get_report_service)],
    start_date: Annotated[str | None, Query(alias="startDate")] = None,
    end_date: Annotated[str | None, Query(alias="endDate")] = None,
    location: Location | None = None,
) -> CompanyReport:
    return await service.company_report(user, company_id, start_date=start_date, end_date=end_date, location=location)
