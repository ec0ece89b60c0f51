"""JWT access tokens (python-jose, HS256 by default).

Claims: sub = user id, role = user role at issue time, exp.
"""

from datetime import timedelta
from typing import Any, cast

from jose import JWTError, jwt

from trackplan.core.config import Settings, get_settings
from trackplan.shared.utils.datetime import utc_now


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
    settings: Settings | None = None,
) -> str:
    """Create a JWT access token with the given claims.

    Args:
        data: Claims to encode (sub, role).
        expires_delta: Optional TTL; else uses settings.access_token_expire_minutes.
        settings: Optional settings; defaults to get_settings().

    Returns:
        Encoded JWT string.
    """
    settings = settings or get_settings()
    to_encode = data.copy()
    to_encode["exp"] = utc_now() + (
        expires_delta
        if expires_delta is not None
        else timedelta(minutes=settings.access_token_expire_minutes)
    )
    encoded = jwt.encode(
        to_encode,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str, settings: Settings | None = None) -> dict[str, Any]:
    """Verify and decode a JWT, requiring exp and sub.

    Raises:
        ValueError: If token is invalid, expired, or missing required claims.
    """
    settings = settings or get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if "sub" not in payload:
        raise ValueError("Token missing required claim: sub")
    return payload


class JwtTokenIssuer:
    """ITokenIssuer backed by create_access_token."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings

    def issue(self, user_id: str, role: str) -> str:
        return create_access_token({"sub": user_id, "role": role}, settings=self.settings)
