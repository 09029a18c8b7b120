"""Authentication and authorization module.

Provides:
- bcrypt password hashing and PyJWT bearer tokens
- The current-user dependency
- Role checkers for route minimum roles
"""

from restaurant.auth.dependencies import (
    AdminOnly,
    AnyAuthenticated,
    CompanyOrAdmin,
    RoleChecker,
    StaffOrAdmin,
    UserInfo,
    get_current_user,
    get_repositories,
)
from restaurant.auth.security import create_access_token, decode_access_token, hash_password, verify_password

__all__ = [
    "AdminOnly",
    "AnyAuthenticated",
    "CompanyOrAdmin",
    "RoleChecker",
    "StaffOrAdmin",
    "UserInfo",
    "create_access_token",
    "decode_access_token",
    "get_current_user",
    "get_repositories",
    "hash_password",
    "verify_password",
]
