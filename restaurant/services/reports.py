"""Report use cases: authorize, filter, then fold."""

import logging

from restaurant.auth.dependencies import UserInfo
from restaurant.errors import NotFound
from restaurant.models import Location, OrderFilter
from restaurant.models.reports import CompanyReport, SalesReport
from restaurant.repositories import Repositories
from restaurant.services import policy
from restaurant.services.policy import Action, ResourceFacts
from restaurant.services.reporting import build_company_report, build_sales_report, parse_date_bound, report_period

logger = logging.getLogger(__name__)


class ReportService:
    def __init__(self, repos: Repositories):
        self.repos = repos

    async def sales_report(
        self,
        actor: UserInfo,
        start_date: str | None = None,
        end_date: str | None = None,
        location: Location | None = None,
        company_id: str | None = None,
    ) -> SalesReport:
        policy.authorize(actor, Action.READ_SALES_REPORT, message="Not authorized to access this report")

        order_filter = OrderFilter(
            company_id=company_id,
            location=location,
            created_from=parse_date_bound(start_date, "startDate"),
            created_to=parse_date_bound(end_date, "endDate", end_of_day=True),
        )
        orders = await self.repos.orders.find(order_filter)
        logger.info(f"Sales report for '{actor.id}': {len(orders)} order(s) (start={start_date}, end={end_date}, location={location}, company={company_id})")

        users = await self.repos.users.get_many({order.user_id for order in orders})
        company_ids = {order.company_id for order in orders if order.company_id}
        companies = await self.repos.companies.get_many(company_ids) if company_ids else []

        return build_sales_report(
            orders,
            report_period(start_date, end_date),
            user_names={user.id: user.name for user in users},
            company_names={company.id: company.name for company in companies},
        )

    async def company_report(
        self,
        actor: UserInfo,
        company_id: str,
        start_date: str | None = None,
        end_date: str | None = None,
        location: Location | None = None,
    ) -> CompanyReport:
        # Checked against the requested id so other companies' existence is not revealed
        policy.authorize(actor, Action.READ_COMPANY_REPORT, ResourceFacts(company_id=company_id), message="Not authorized to access this report")

        order_filter = OrderFilter(
            company_id=company_id,
            created_from=parse_date_bound(start_date, "startDate"),
            created_to=parse_date_bound(end_date, "endDate", end_of_day=True),
            location=location,
        )

        company = await self.repos.companies.get(company_id)
        if company is None:
            raise NotFound("Company not found")

        orders = await self.repos.orders.find(order_filter)
        child_ids = {child_id for order in orders for child_id in order.child_orders}
        children = await self.repos.orders.get_many(child_ids) if child_ids else []
        users = await self.repos.users.get_many({order.user_id for order in [*orders, *children]})
        logger.info(f"Company report for {company_id} requested by '{actor.id}': {len(orders)} order(s) (location={location})")

        return build_company_report(
            company,
            orders,
            report_period(start_date, end_date),
            children={child.id: child for child in children},
            user_names={user.id: user.name for user in users},
        )
