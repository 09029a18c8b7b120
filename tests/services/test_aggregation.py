"""Tests for company order aggregation (parent/child linking)."""

import logging
from datetime import UTC, datetime, timedelta

import pytest

from restaurant.errors import NotFound, ValidationFailed
from restaurant.models import Role
from restaurant.services.aggregation import STANDALONE, link_to_parent, reconcile_children, resolve_company_link
from tests.fixtures import OrderFactory, UnlinkableOrderRepository, actor


class TestResolveCompanyLink:
    @pytest.mark.asyncio
    async def test_child_inherits_parent_company(self, repos):
        parent = OrderFactory.create(company_id="acme", is_company_order=True)
        repos.orders.seed(parent)

        link = await resolve_company_link(actor(Role.CUSTOMER), repos.orders, parent.id, is_company_order=False)

        assert link.company_id == "acme"
        assert link.parent_order == parent.id
        assert link.is_company_order is False

    @pytest.mark.asyncio
    async def test_missing_parent_is_not_found(self, repos):
        with pytest.raises(NotFound):
            await resolve_company_link(actor(Role.CUSTOMER), repos.orders, "missing", is_company_order=False)

    @pytest.mark.asyncio
    async def test_company_role_originates_parent(self, repos):
        rep = actor(Role.COMPANY, company_id="acme")

        link = await resolve_company_link(rep, repos.orders, None, is_company_order=True)

        assert link.company_id == "acme"
        assert link.is_company_order is True
        assert link.parent_order is None

    @pytest.mark.asyncio
    async def test_company_flag_ignored_for_other_roles(self, repos):
        link = await resolve_company_link(actor(Role.CUSTOMER), repos.orders, None, is_company_order=True)

        assert link == STANDALONE

    @pytest.mark.asyncio
    async def test_admin_company_flag_gives_standalone_order(self, repos):
        link = await resolve_company_link(actor(Role.ADMIN), repos.orders, None, is_company_order=True)

        assert link == STANDALONE

    @pytest.mark.asyncio
    async def test_company_role_without_company_cannot_originate(self, repos):
        with pytest.raises(ValidationFailed):
            await resolve_company_link(actor(Role.COMPANY), repos.orders, None, is_company_order=True)

    @pytest.mark.asyncio
    async def test_plain_order_is_standalone(self, repos):
        link = await resolve_company_link(actor(Role.COMPANY, company_id="acme"), repos.orders, None, is_company_order=False)

        assert link == STANDALONE


class TestLinking:
    @pytest.mark.asyncio
    async def test_link_adds_child_once(self, repos):
        parent = OrderFactory.create(company_id="acme", is_company_order=True)
        child = OrderFactory.create(company_id="acme", parent_order=parent.id)
        repos.orders.seed(parent, child)
        now = datetime.now(UTC)

        await link_to_parent(repos.orders, child, now)
        await link_to_parent(repos.orders, child, now)

        stored = await repos.orders.get(parent.id)
        assert stored.child_orders == [child.id]
        assert stored.updated_at == now

    @pytest.mark.asyncio
    async def test_failed_link_is_logged_and_raised(self, caplog):
        orders = UnlinkableOrderRepository()
        parent = OrderFactory.create(company_id="acme", is_company_order=True)
        child = OrderFactory.create(company_id="acme", parent_order=parent.id)
        orders.seed(parent, child)

        with caplog.at_level(logging.ERROR, logger="restaurant.services.aggregation"):
            with pytest.raises(ConnectionError):
                await link_to_parent(orders, child, datetime.now(UTC))

        assert f"Failed to link child order {child.id} to parent {parent.id}" in caplog.text
        assert (await orders.get(child.id)).parent_order == parent.id
        assert (await orders.get(parent.id)).child_orders == []

    @pytest.mark.asyncio
    async def test_link_skips_standalone_orders(self, repos):
        order = OrderFactory.create()
        repos.orders.seed(order)

        await link_to_parent(repos.orders, order, datetime.now(UTC))

        assert (await repos.orders.get(order.id)).child_orders == []

    @pytest.mark.asyncio
    async def test_reconcile_restores_dangling_children(self, repos):
        start = datetime(2024, 3, 1, tzinfo=UTC)
        parent = OrderFactory.create(company_id="acme", is_company_order=True, created_at=start)
        first = OrderFactory.create(company_id="acme", parent_order=parent.id, created_at=start + timedelta(minutes=1))
        second = OrderFactory.create(company_id="acme", parent_order=parent.id, created_at=start + timedelta(minutes=2))
        unrelated = OrderFactory.create(company_id="acme", created_at=start)
        # Only the first link was recorded; the second crashed between the two writes
        parent.child_orders = [first.id]
        repos.orders.seed(parent, first, second, unrelated)

        repaired = await reconcile_children(repos.orders, parent.id, datetime.now(UTC))

        assert repaired.child_orders == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_reconcile_unknown_parent(self, repos):
        with pytest.raises(NotFound):
            await reconcile_children(repos.orders, "missing", datetime.now(UTC))
