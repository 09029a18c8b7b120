"""
Reporting folds.

Both reports are pure functions over an order set the caller has already
filtered and authorized. Names are passed in as id -> name maps so the folds
never touch storage. Month keys are computed in UTC.
"""

from collections.abc import Iterable, Mapping
from datetime import UTC, date, datetime, time

from restaurant.errors import ValidationFailed
from restaurant.models import Company, Order
from restaurant.models.reports import (
    ChildOrderEntry,
    CompanyInfo,
    CompanyOrderEntry,
    CompanyReport,
    CompanySummary,
    LocationSummary,
    MonthSummary,
    ReportPeriod,
    SalesOrderEntry,
    SalesReport,
    SalesSummary,
)


def _cents(amount: float) -> float:
    return round(amount, 2)


def parse_date_bound(value: str | None, field: str, end_of_day: bool = False) -> datetime | None:
    """
    Parse a report date filter.

    Accepts ``YYYY-MM-DD`` or a full ISO-8601 timestamp. A bare date used as
    an upper bound covers the whole day. Naive values are taken as UTC.
    """
    if not value:
        return None

    try:
        if len(value) == 10:
            day = date.fromisoformat(value)
            return datetime.combine(day, time.max if end_of_day else time.min, tzinfo=UTC)
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise ValidationFailed(f"Invalid {field}: expected an ISO-8601 date")

    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def month_key(moment: datetime) -> str:
    """Calendar month label, ``YYYY-MM``, in UTC."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(UTC)
    return moment.strftime("%Y-%m")


def report_period(start_date: str | None, end_date: str | None) -> ReportPeriod:
    return ReportPeriod(start_date=start_date or "All time", end_date=end_date or "Present")


def build_sales_report(
    orders: Iterable[Order],
    period: ReportPeriod,
    user_names: Mapping[str, str],
    company_names: Mapping[str, str],
) -> SalesReport:
    """Group orders by pickup location with counts, sales and per-order listings."""
    breakdown: dict[str, LocationSummary] = {}
    total_orders = 0
    total_sales = 0.0

    for order in orders:
        group = breakdown.setdefault(order.location.value, LocationSummary())
        group.order_count += 1
        group.total_sales = _cents(group.total_sales + order.total_price)
        group.orders.append(
            SalesOrderEntry(
                id=order.id,
                user=user_names.get(order.user_id),
                company=company_names.get(order.company_id) if order.company_id else None,
                total_price=order.total_price,
                date=order.created_at,
            )
        )
        total_orders += 1
        total_sales += order.total_price

    return SalesReport(
        period=period,
        summary=SalesSummary(total_orders=total_orders, total_sales=_cents(total_sales)),
        location_breakdown=breakdown,
    )


def _company_order_entry(order: Order, children: Mapping[str, Order], user_names: Mapping[str, str]) -> CompanyOrderEntry:
    child_entries = [
        ChildOrderEntry(
            id=child.id,
            user=user_names.get(child.user_id),
            total_price=child.total_price,
            date=child.created_at,
        )
        for child in (children.get(child_id) for child_id in order.child_orders)
        if child is not None
    ]
    return CompanyOrderEntry(
        id=order.id,
        user=user_names.get(order.user_id),
        total_price=order.total_price,
        date=order.created_at,
        location=order.location,
        status=order.status,
        child_orders_count=len(order.child_orders),
        child_orders=child_entries,
    )


def build_company_report(
    company: Company,
    orders: Iterable[Order],
    period: ReportPeriod,
    children: Mapping[str, Order],
    user_names: Mapping[str, str],
) -> CompanyReport:
    """Group a company's orders by UTC calendar month, nesting child summaries under parents."""
    monthly: dict[str, MonthSummary] = {}
    entries: list[CompanyOrderEntry] = []
    total_spent = 0.0

    for order in orders:
        entry = _company_order_entry(order, children, user_names)
        entries.append(entry)

        group = monthly.setdefault(month_key(order.created_at), MonthSummary())
        group.order_count += 1
        group.total_spent = _cents(group.total_spent + order.total_price)
        group.orders.append(entry)
        total_spent += order.total_price

    return CompanyReport(
        company=CompanyInfo(id=company.id, name=company.name, contact=company.contact),
        period=period,
        summary=CompanySummary(total_orders=len(entries), total_spent=_cents(total_spent)),
        monthly_breakdown=monthly,
        orders=entries,
    )
