"""Bearer token verification settings."""

import os
from dataclasses import dataclass

from .environment import IS_PRODUCTION_ENVIRONMENT

DEVELOPMENT_TOKEN_SECRET = 'evhenter-development-secret-change-in-production'


@dataclass
class AuthConfig:
    """Authentication configuration settings.

    Tokens are issued by the account service as HS256 JWTs; these values must
    match the ones it signs with.
    """

    token_secret: str = ""
    algorithm: str = 'HS256'
    issuer: str = 'evhenter.ai'
    audience: str = 'evhenter.ai'
    token_lifetime_days: int = 7

    def __post_init__(self):
        """Load the token secret from environment if not provided."""
        if not self.token_secret:
            self.token_secret = os.environ.get('JWT_SECRET', '')
        if not self.token_secret and not IS_PRODUCTION_ENVIRONMENT:
            self.token_secret = DEVELOPMENT_TOKEN_SECRET

    def validate(self) -> bool:
        """Validate the configuration."""
        if not self.token_secret:
            raise ValueError("JWT_SECRET environment variable is required")
        return True
