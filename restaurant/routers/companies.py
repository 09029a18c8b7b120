"""
Companies Router - Corporate Accounts

Endpoints:
- GET /api/companies - List companies (admin)
- GET /api/companies/{company_id} - Get company (admin, members of the company)
- POST /api/companies - Create company (admin)
- PUT /api/companies/{company_id} - Update company (admin)
- GET /api/companies/{company_id}/users - List company members (admin, members of the company)
"""

import logging
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, status

from restaurant.auth import AdminOnly, AnyAuthenticated, UserInfo, get_repositories
from restaurant.database import new_id
from restaurant.errors import Conflict, NotFound
from restaurant.models import Company, CompanyCreate, CompanyUpdate, UserPublic
from restaurant.repositories import Repositories
from restaurant.services import accounts, policy
from restaurant.services.policy import Action, ResourceFacts

logger = logging.getLogger(__name__)

router = APIRouter()


async def _load_company(repos: Repositories, company_id: str) -> Company:
    company = await repos.companies.get(company_id)
    if company is None:
        raise NotFound("Company not found")
    return company


@router.get(
    "",
    response_model=list[Company],
    summary="List companies",
    description="**Requires admin role.**",
)
async def list_companies(
    user: Annotated[UserInfo, Depends(AdminOnly)],
    repos: Annotated[Repositories, Depends(get_repositories)],
) -> list[Company]:
    return await repos.companies.list_all()


@router.get(
    "/{company_id}",
    response_model=Company,
    summary="Get company",
)
async def get_company(
    company_id: str,
    user: Annotated[UserInfo, Depends(AnyAuthenticated)],
    repos: Annotated[Repositories, Depends(get_repositories)],
) -> Company:
    company = await _load_company(repos, company_id)
    policy.authorize(user, Action.READ_COMPANY, ResourceFacts(company_id=company.id), message="Not authorized to view this company")
    return company


@router.post(
    "",
    response_model=Company,
    status_code=status.HTTP_201_CREATED,
    summary="Create a company",
    description="**Requires admin role.**",
)
async def create_company(
    data: CompanyCreate,
    user: Annotated[UserInfo, Depends(AdminOnly)],
    repos: Annotated[Repositories, Depends(get_repositories)],
) -> Company:
    if await repos.companies.get_by_name(data.name) is not None:
        raise Conflict("Company already exists")

    company = Company(id=new_id(), **data.model_dump(), created_at=datetime.now(UTC))
    await repos.companies.add(company)
    logger.info(f"Admin '{user.id}' created company '{company.name}' ({company.id})")

    return company


@router.put(
    "/{company_id}",
    response_model=Company,
    summary="Update a company",
    description="**Requires admin role.**",
)
async def update_company(
    company_id: str,
    data: CompanyUpdate,
    user: Annotated[UserInfo, Depends(AdminOnly)],
    repos: Annotated[Repositories, Depends(get_repositories)],
) -> Company:
    existing = await _load_company(repos, company_id)

    fields = data.model_dump(exclude_unset=True, exclude_none=True)
    if "name" in fields and fields["name"] != existing.name:
        if await repos.companies.get_by_name(fields["name"]) is not None:
            raise Conflict("Company already exists")

    if not fields:
        return existing

    updated = await repos.companies.update(company_id, fields)
    if updated is None:
        raise NotFound("Company not found")

    logger.info(f"Admin '{user.id}' updated company {company_id} ({sorted(fields)})")
    return updated


@router.get(
    "/{company_id}/users",
    response_model=list[UserPublic],
    summary="List company users",
)
async def list_company_users(
    company_id: str,
    user: Annotated[UserInfo, Depends(AnyAuthenticated)],
    repos: Annotated[Repositories, Depends(get_repositories)],
) -> list[UserPublic]:
    company = await _load_company(repos, company_id)
    policy.authorize(user, Action.LIST_COMPANY_USERS, ResourceFacts(company_id=company.id), message="Not authorized to view this company")

    members = await repos.users.list_by_company(company.id)
    return await accounts.public_users(repos, members)
