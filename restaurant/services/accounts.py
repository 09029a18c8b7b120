"""Registration, login and sanitized user projections."""

import logging
from collections.abc import Iterable
from datetime import UTC, datetime

from restaurant.auth.security import create_access_token, hash_password, verify_password
from restaurant.database import new_id
from restaurant.errors import Conflict, NotFound, PermissionDenied, ValidationFailed
from restaurant.models import Company, Role, User, UserPublic
from restaurant.models.schemas import AuthResponse, Contact, LoginRequest, RegisterRequest
from restaurant.repositories import Repositories
from restaurant.settings import app_settings

logger = logging.getLogger(__name__)


async def public_users(repos: Repositories, users: Iterable[User]) -> list[UserPublic]:
    """Project users without their credential hash, with company names resolved."""
    users = list(users)
    company_ids = {user.company_id for user in users if user.company_id}
    companies = {company.id: company.name for company in await repos.companies.get_many(company_ids)} if company_ids else {}
    return [
        UserPublic(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            company=companies.get(user.company_id) if user.company_id else None,
        )
        for user in users
    ]


async def _find_or_create_company(repos: Repositories, data: RegisterRequest) -> Company:
    company = await repos.companies.get_by_name(data.company_name)
    if company is not None:
        return company

    company = Company(
        id=new_id(),
        name=data.company_name,
        contact=Contact(name=data.name, email=data.email),
        created_at=datetime.now(UTC),
    )
    try:
        await repos.companies.add(company)
    except Conflict:
        # Created concurrently under the same name
        existing = await repos.companies.get_by_name(data.company_name)
        if existing is None:
            raise
        return existing

    logger.info(f"Created company '{company.name}' ({company.id}) during registration")
    return company


async def register(repos: Repositories, data: RegisterRequest) -> AuthResponse:
    email = data.email.lower()

    if data.role.value not in app_settings.registration_roles:
        raise PermissionDenied(f"Registration as {data.role.value} is not allowed")

    if await repos.users.get_by_email(email) is not None:
        raise Conflict("User already exists")

    company = None
    if data.role == Role.COMPANY and data.company_name:
        company = await _find_or_create_company(repos, data)

    user = User(
        id=new_id(),
        name=data.name,
        email=email,
        password_hash=hash_password(data.password),
        role=data.role,
        company_id=company.id if company else None,
        created_at=datetime.now(UTC),
    )
    await repos.users.add(user)
    logger.info(f"Registered user {user.id} ({user.role.value})")

    return AuthResponse(token=create_access_token(user.id), user=(await public_users(repos, [user]))[0])


async def login(repos: Repositories, data: LoginRequest) -> AuthResponse:
    user = await repos.users.get_by_email(data.email.lower())
    if user is None or not verify_password(data.password, user.password_hash):
        raise ValidationFailed("Invalid credentials")

    logger.info(f"User {user.id} logged in")
    return AuthResponse(token=create_access_token(user.id), user=(await public_users(repos, [user]))[0])


async def profile(repos: Repositories, user_id: str) -> UserPublic:
    user = await repos.users.get(user_id)
    if user is None:
        raise NotFound("User not found")
    return (await public_users(repos, [user]))[0]
