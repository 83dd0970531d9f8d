"""
Admin Authentication

Password hashing and signed admin tokens.

Tokens are HS256 JWTs carrying the admin id, email and role with an
expiry. Route handlers depend on require_admin(), which rejects missing,
malformed, tampered or expired tokens with 401 and non-admin roles with 403.

Author: Khalil Bannouri
Version: 1.0.0
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from werkzeug.security import check_password_hash, generate_password_hash

from restaurant_menu.core.config import Settings
from restaurant_menu.core.errors import AuthenticationError, AuthorizationError

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class AdminIdentity:
    """Claims extracted from a verified admin token."""
    admin_id: int
    email: str
    role: str
    expires_at: datetime


# =============================================================================
# PASSWORDS
# =============================================================================

def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    if not password_hash or not password:
        return False
    return check_password_hash(password_hash, password)


# =============================================================================
# TOKENS
# =============================================================================

def create_admin_token(
    settings: Settings,
    admin_id: int,
    email: str,
    role: str = ADMIN_ROLE,
    now: Optional[datetime] = None,
) -> str:
    """
    Issue a signed admin token.

    Args:
        settings: Application settings (secret, algorithm, lifetime)
        admin_id: Primary key of the authenticated admin
        email: Admin email, copied into the claims for display
        role: Role claim checked by require_admin()
        now: Issue time (defaults to current UTC time)

    Returns:
        Encoded JWT string
    """
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "sub": str(admin_id),
        "email": email,
        "role": role,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=settings.token_expire_minutes),
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.token_algorithm)


def decode_admin_token(settings: Settings, token: str) -> AdminIdentity:
    """
    Verify a token's signature and expiry and return its claims.

    Raises:
        AuthenticationError: Token is expired, tampered or malformed
        AuthorizationError: Token is valid but not an admin token
    """
    try:
        claims = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.token_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except jwt.InvalidTokenError as e:
        logger.warning(f"Rejected admin token: {e}")
        raise AuthenticationError("Invalid token")

    try:
        admin_id = int(claims["sub"])
    except (TypeError, ValueError):
        raise AuthenticationError("Invalid token subject")

    role = claims.get("role", "")
    if role != ADMIN_ROLE:
        raise AuthorizationError("Admin access required")

    return AdminIdentity(
        admin_id=admin_id,
        email=claims.get("email", ""),
        role=role,
        expires_at=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
    )


# =============================================================================
# FASTAPI DEPENDENCIES
# =============================================================================

def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


async def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
) -> AdminIdentity:
    """Dependency guarding every admin endpoint."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("Unauthorized")
    return decode_admin_token(settings, credentials.credentials)
