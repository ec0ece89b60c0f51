"""Security: JWT tokens and password hashing."""

from trackplan.infrastructure.security.jwt import (
    JwtTokenIssuer,
    create_access_token,
    verify_token,
)
from trackplan.infrastructure.security.password import (
    BcryptPasswordHasher,
    get_password_hash,
    verify_password,
)

__all__ = [
    "BcryptPasswordHasher",
    "JwtTokenIssuer",
    "create_access_token",
    "get_password_hash",
    "verify_password",
    "verify_token",
]
