"""Request authentication.

Bearer tokens are HS256 JWTs issued by the account service, carrying the
user id in the ``userId`` claim along with ``iss``/``aud`` and an expiry.
This module only verifies them and resolves the user; ``sign_token`` mirrors
the issuer for operator tooling and tests.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

import jwt
from fastapi import Depends, Request

from ..config.auth import AuthConfig
from ..db import Database
from ..models import User
from .dependencies import get_database

logger = logging.getLogger(__name__)

class AuthFailureReason(str, Enum):
    NO_TOKEN = 'NoToken'
    INVALID_TOKEN = 'InvalidToken'
    INACTIVE_ACCOUNT = 'InactiveAccount'

_FAILURE_RESPONSES = {
    AuthFailureReason.NO_TOKEN: (401, "No authentication token provided"),
    AuthFailureReason.INVALID_TOKEN: (401, "Invalid or expired token"),
    AuthFailureReason.INACTIVE_ACCOUNT: (403, "User account is inactive"),
}

class AuthFailure(Exception):
    """Authentication failed for ``reason``."""

    def __init__(self, reason: AuthFailureReason):
        self.reason = reason
        self.status_code, self.message = _FAILURE_RESPONSES[reason]
        super().__init__(self.message)

@dataclass(frozen=True)
class Identity:
    """The authenticated caller."""
    id: str
    email: str
    name: Optional[str]
    role: str

def extract_bearer_token(auth_header: Optional[str]) -> Optional[str]:
    """Token from an ``Authorization: Bearer <token>`` header, or None."""
    if not auth_header:
        return None
    parts = auth_header.split(' ')
    if len(parts) != 2 or parts[0] != 'Bearer' or not parts[1]:
        return None
    return parts[1]

def sign_token(
    user_id: str,
    config: Optional[AuthConfig] = None,
    email: Optional[str] = None,
    role: str = 'user',
    expires_in: Optional[timedelta] = None
) -> str:
    """JWT for ``user_id`` in the account service's format."""
    config = config or AuthConfig()
    now = datetime.now(timezone.utc)
    payload = {
        'userId': user_id,
        'email': email,
        'role': role,
        'iat': now,
        'exp': now + (expires_in or timedelta(days=config.token_lifetime_days)),
        'iss': config.issuer,
        'aud': config.audience,
    }
    return jwt.encode(payload, config.token_secret, algorithm=config.algorithm)

def verify_token(token: str, config: Optional[AuthConfig] = None) -> Optional[str]:
    """User id carried by ``token`` if its signature, issuer, audience and expiry are valid."""
    config = config or AuthConfig()
    try:
        claims = jwt.decode(
            token,
            config.token_secret,
            algorithms=[config.algorithm],
            issuer=config.issuer,
            audience=config.audience,
            options={'require': ['exp']}
        )
    except jwt.PyJWTError as e:
        logger.debug(f"Token rejected: {e}")
        return None
    user_id = claims.get('userId')
    return str(user_id) if user_id else None

def authenticate(request: Request, database: Database, config: Optional[AuthConfig] = None) -> Identity:
    """
    Resolve the caller of ``request``.

    Raises:
        AuthFailure: NoToken, InvalidToken (bad signature, expired or unknown user)
            or InactiveAccount
    """
    config = config or AuthConfig()
    config.validate()

    token = extract_bearer_token(request.headers.get('Authorization'))
    if not token:
        raise AuthFailure(AuthFailureReason.NO_TOKEN)

    user_id = verify_token(token, config)
    if user_id is None:
        raise AuthFailure(AuthFailureReason.INVALID_TOKEN)

    with database.session() as session:
        user = session.get(User, user_id)
        if user is None:
            raise AuthFailure(AuthFailureReason.INVALID_TOKEN)
        if not user.is_active:
            raise AuthFailure(AuthFailureReason.INACTIVE_ACCOUNT)
        return Identity(id=user.id, email=user.email, name=user.name, role=user.role)

def require_identity(
    request: Request,
    database: Database = Depends(get_database)
) -> Identity:
    """Dependency for endpoints that need an authenticated caller.

    AuthFailure propagates to the application's exception handler.
    """
    try:
        return authenticate(request, database)
    except AuthFailure as e:
        logger.info(f"Authentication failed on {request.url.path}: {e.reason.value}")
        raise
