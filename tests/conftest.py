"""Pytest configuration and shared fixtures for all tests.

This module provides:
- Test configuration and markers
- In-memory repositories and an application wired to them
- Stored users for each role, with bearer headers
"""

from collections.abc import Callable

import pytest
from _pytest.config import Config
from fastapi import FastAPI
from fastapi.testclient import TestClient

from restaurant.auth import create_access_token
from restaurant.main import create_app
from restaurant.models import Company, MenuItem, Role, User
from restaurant.repositories import Repositories
from restaurant.settings import app_settings
from tests.fixtures import CompanyFactory, MenuItemFactory, UserFactory, create_in_memory_repositories

# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================


def pytest_configure(config: Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, no external dependencies)")
    config.addinivalue_line("markers", "api: HTTP API tests against in-memory repositories")
    config.addinivalue_line("markers", "auth: Authentication/authorization tests")
    config.addinivalue_line("markers", "asyncio: Async tests")


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch: pytest.MonkeyPatch) -> None:
    """Use the minimum bcrypt cost so registration/login tests stay fast."""
    monkeypatch.setattr(app_settings, "bcrypt_rounds", 4)


# ============================================================================
# REPOSITORY FIXTURES
# ============================================================================


@pytest.fixture
def repos() -> Repositories:
    """Provide empty in-memory repositories."""
    return create_in_memory_repositories()


@pytest.fixture
def acme(repos: Repositories) -> Company:
    company = CompanyFactory.create(name="Acme Corp")
    repos.companies.seed(company)
    return company


@pytest.fixture
def techstart(repos: Repositories) -> Company:
    company = CompanyFactory.create(name="TechStart Inc")
    repos.companies.seed(company)
    return company


@pytest.fixture
def item_a(repos: Repositories) -> MenuItem:
    item = MenuItemFactory.create(name="Item A", price=10.0)
    repos.menu.seed(item)
    return item


@pytest.fixture
def item_b(repos: Repositories) -> MenuItem:
    item = MenuItemFactory.create(name="Item B", price=4.5, category="Starters")
    repos.menu.seed(item)
    return item


# ============================================================================
# USER FIXTURES
# ============================================================================


def _stored_user(repos: Repositories, **kwargs) -> User:
    user = UserFactory.create(**kwargs)
    repos.users.seed(user)
    return user


@pytest.fixture
def customer(repos: Repositories) -> User:
    return _stored_user(repos, name="Regular Customer", role=Role.CUSTOMER)


@pytest.fixture
def other_customer(repos: Repositories) -> User:
    return _stored_user(repos, name="Other Customer", role=Role.CUSTOMER)


@pytest.fixture
def staff(repos: Repositories) -> User:
    return _stored_user(repos, name="Staff User", role=Role.STAFF)


@pytest.fixture
def admin(repos: Repositories) -> User:
    return _stored_user(repos, name="Admin User", role=Role.ADMIN)


@pytest.fixture
def acme_rep(repos: Repositories, acme: Company) -> User:
    return _stored_user(repos, name="Acme Rep", role=Role.COMPANY, company_id=acme.id)


@pytest.fixture
def techstart_rep(repos: Repositories, techstart: Company) -> User:
    return _stored_user(repos, name="TechStart Rep", role=Role.COMPANY, company_id=techstart.id)


# ============================================================================
# APPLICATION FIXTURES
# ============================================================================


@pytest.fixture
def app(repos: Repositories) -> FastAPI:
    return create_app(repositories=repos)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def auth_headers() -> Callable[[User], dict[str, str]]:
    """Build an Authorization header for a stored user."""

    def _headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _headers
