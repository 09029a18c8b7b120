"""Tests for OrderFilter query compilation and in-memory matching."""

from datetime import UTC, datetime

import pytest

from restaurant.models import Location, OrderFilter
from tests.fixtures import OrderFactory


@pytest.mark.unit
class TestToQuery:
    def test_empty_filter_matches_everything(self):
        assert OrderFilter().to_query() == {}

    def test_company_scope_with_own_orders(self):
        query = OrderFilter(company_id="acme", company_orders_only=True, or_user_id="r1").to_query()

        assert query == {"$or": [{"company_id": "acme", "is_company_order": True}, {"user_id": "r1"}]}

    def test_date_range_and_location(self):
        start = datetime(2024, 1, 1, tzinfo=UTC)
        end = datetime(2024, 1, 31, 23, 59, tzinfo=UTC)

        query = OrderFilter(created_from=start, created_to=end, location=Location.UPTOWN).to_query()

        assert query == {"created_at": {"$gte": start, "$lte": end}, "location": "uptown"}

    def test_parent_and_owner(self):
        assert OrderFilter(user_id="u1", parent_order="p1").to_query() == {"user_id": "u1", "parent_order": "p1"}


@pytest.mark.unit
class TestMatches:
    def test_company_scope_admits_own_non_company_order(self):
        order_filter = OrderFilter(company_id="acme", company_orders_only=True, or_user_id="r1")

        assert order_filter.matches(OrderFactory.create(user_id="r1"))
        assert order_filter.matches(OrderFactory.create(user_id="x", company_id="acme", is_company_order=True))
        assert not order_filter.matches(OrderFactory.create(user_id="x", company_id="acme"))
        assert not order_filter.matches(OrderFactory.create(user_id="x", company_id="techstart", is_company_order=True))

    def test_date_bounds_are_inclusive(self):
        start = datetime(2024, 1, 1, tzinfo=UTC)
        end = datetime(2024, 1, 31, tzinfo=UTC)
        order_filter = OrderFilter(created_from=start, created_to=end)

        assert order_filter.matches(OrderFactory.create(created_at=start))
        assert order_filter.matches(OrderFactory.create(created_at=end))
        assert not order_filter.matches(OrderFactory.create(created_at=datetime(2024, 2, 1, tzinfo=UTC)))

    def test_location(self):
        order_filter = OrderFilter(location=Location.DOWNTOWN)

        assert order_filter.matches(OrderFactory.create(location=Location.DOWNTOWN))
        assert not order_filter.matches(OrderFactory.create(location=Location.UPTOWN))
