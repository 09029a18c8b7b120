"""HTTP tests for the sales and company reports."""

from datetime import UTC, datetime

import pytest

from restaurant.models import Location
from tests.fixtures import OrderFactory

pytestmark = pytest.mark.api

JAN_10 = datetime(2024, 1, 10, 12, 0, tzinfo=UTC)
JAN_31_LATE = datetime(2024, 1, 31, 22, 30, tzinfo=UTC)
FEB_15 = datetime(2024, 2, 15, 9, 0, tzinfo=UTC)


@pytest.fixture
def january_orders(repos, acme, customer, acme_rep):
    orders = [
        OrderFactory.create(user_id=customer.id, total_price=20.0, location=Location.DOWNTOWN, created_at=JAN_10),
        OrderFactory.create(user_id=acme_rep.id, total_price=30.0, location=Location.UPTOWN, company_id=acme.id, is_company_order=True, created_at=JAN_31_LATE),
        OrderFactory.create(user_id=customer.id, total_price=7.5, location=Location.DOWNTOWN, created_at=FEB_15),
    ]
    repos.orders.seed(*orders)
    return orders


class TestSalesReport:
    def test_all_time(self, client, auth_headers, admin, january_orders):
        body = client.get("/api/reports/sales", headers=auth_headers(admin)).json()

        assert body["period"] == {"startDate": "All time", "endDate": "Present"}
        assert body["summary"] == {"totalOrders": 3, "totalSales": 57.5}
        assert body["locationBreakdown"]["downtown"]["orderCount"] == 2
        assert body["locationBreakdown"]["uptown"]["orders"][0]["company"] == "Acme Corp"

    def test_date_only_end_includes_whole_day(self, client, auth_headers, admin, january_orders):
        params = {"startDate": "2024-01-01", "endDate": "2024-01-31"}

        body = client.get("/api/reports/sales", params=params, headers=auth_headers(admin)).json()

        assert body["summary"]["totalOrders"] == 2
        assert body["period"] == params

    def test_location_and_company_filters(self, client, auth_headers, admin, acme, january_orders):
        downtown = client.get("/api/reports/sales", params={"location": "downtown"}, headers=auth_headers(admin)).json()
        acme_only = client.get("/api/reports/sales", params={"company": acme.id}, headers=auth_headers(admin)).json()

        assert set(downtown["locationBreakdown"]) == {"downtown"}
        assert acme_only["summary"]["totalSales"] == 30.0

    def test_empty_range(self, client, auth_headers, admin, january_orders):
        params = {"startDate": "2030-01-01", "endDate": "2030-12-31"}

        body = client.get("/api/reports/sales", params=params, headers=auth_headers(admin)).json()

        assert body["summary"]["totalOrders"] == 0
        assert body["locationBreakdown"] == {}

    def test_invalid_date(self, client, auth_headers, admin):
        response = client.get("/api/reports/sales", params={"startDate": "yesterday"}, headers=auth_headers(admin))

        assert response.status_code == 400

    @pytest.mark.parametrize("role_fixture", ["customer", "staff", "acme_rep"])
    def test_admin_only(self, client, auth_headers, request, role_fixture):
        user = request.getfixturevalue(role_fixture)

        assert client.get("/api/reports/sales", headers=auth_headers(user)).status_code == 403


class TestCompanyReport:
    def test_company_user_reads_own_report(self, client, auth_headers, acme, acme_rep, january_orders):
        response = client.get(f"/api/reports/company/{acme.id}", headers=auth_headers(acme_rep))

        assert response.status_code == 200
        body = response.json()
        assert body["company"]["name"] == "Acme Corp"
        assert body["summary"] == {"totalOrders": 1, "totalSpent": 30.0}
        assert list(body["monthlyBreakdown"]) == ["2024-01"]
        assert body["orders"][0]["user"] == acme_rep.name

    def test_company_user_denied_other_company(self, client, auth_headers, acme, techstart_rep, january_orders):
        response = client.get(f"/api/reports/company/{acme.id}", headers=auth_headers(techstart_rep))

        assert response.status_code == 403
        assert response.json() == {"message": "Not authorized to access this report"}

    def test_customer_denied(self, client, auth_headers, acme, customer):
        assert client.get(f"/api/reports/company/{acme.id}", headers=auth_headers(customer)).status_code == 403

    def test_admin_unknown_company(self, client, auth_headers, admin):
        assert client.get("/api/reports/company/missing", headers=auth_headers(admin)).status_code == 404

    def test_location_filter(self, client, auth_headers, repos, acme, acme_rep, january_orders):
        repos.orders.seed(OrderFactory.create(user_id=acme_rep.id, total_price=5.0, location=Location.DOWNTOWN, company_id=acme.id, created_at=FEB_15))

        body = client.get(f"/api/reports/company/{acme.id}", params={"location": "downtown"}, headers=auth_headers(acme_rep)).json()

        assert body["summary"] == {"totalOrders": 1, "totalSpent": 5.0}
        assert list(body["monthlyBreakdown"]) == ["2024-02"]
        assert body["orders"][0]["location"] == "downtown"

    def test_date_range(self, client, auth_headers, admin, acme, january_orders):
        params = {"startDate": "2024-02-01"}

        body = client.get(f"/api/reports/company/{acme.id}", params=params, headers=auth_headers(admin)).json()

        assert body["summary"]["totalOrders"] == 0
        assert body["monthlyBreakdown"] == {}
        assert body["period"] == {"startDate": "2024-02-01", "endDate": "Present"}
