"""Report schemas for sales and company spend reports."""

from datetime import datetime

from pydantic import Field

from restaurant.models.schemas import ApiModel, Contact, Location, OrderStatus


class ReportPeriod(ApiModel):
    start_date: str = "All time"
    end_date: str = "Present"


# ============================================================================
# Sales Report
# ============================================================================


class SalesSummary(ApiModel):
    total_orders: int = 0
    total_sales: float = 0.0


class SalesOrderEntry(ApiModel):
    id: str
    user: str | None = None  # Customer name
    company: str | None = None  # Company name
    total_price: float
    date: datetime


class LocationSummary(ApiModel):
    order_count: int = 0
    total_sales: float = 0.0
    orders: list[SalesOrderEntry] = Field(default_factory=list)


class SalesReport(ApiModel):
    period: ReportPeriod
    summary: SalesSummary
    location_breakdown: dict[str, LocationSummary] = Field(default_factory=dict)


# ============================================================================
# Company Report
# ============================================================================


class CompanyInfo(ApiModel):
    id: str
    name: str
    contact: Contact


class CompanySummary(ApiModel):
    total_orders: int = 0
    total_spent: float = 0.0


class ChildOrderEntry(ApiModel):
    id: str
    user: str | None = None
    total_price: float
    date: datetime


class CompanyOrderEntry(ApiModel):
    id: str
    user: str | None = None
    total_price: float
    date: datetime
    location: Location
    status: OrderStatus
    child_orders_count: int = 0
    child_orders: list[ChildOrderEntry] = Field(default_factory=list)


class MonthSummary(ApiModel):
    order_count: int = 0
    total_spent: float = 0.0
    orders: list[CompanyOrderEntry] = Field(default_factory=list)


class CompanyReport(ApiModel):
    company: CompanyInfo
    period: ReportPeriod
    summary: CompanySummary
    monthly_breakdown: dict[str, MonthSummary] = Field(default_factory=dict)
    orders: list[CompanyOrderEntry] = Field(default_factory=list)
