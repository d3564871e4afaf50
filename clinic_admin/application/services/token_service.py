from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
import logging

import jwt

from ...exceptions import InvalidTokenError, TokenExpiredError

logger = logging.getLogger(__name__)

PLACEHOLDER_SECRETS = {"", "secret", "change-me-in-prod"}


@dataclass
class TokenIdentity:
    subject: str
    expires_at: datetime


@dataclass
class TokenService:
    secret_key: str
    algorithm: str = "HS256"
    expire_minutes: int = 60

    def __post_init__(self):
        # Refuse to sign with a missing or well-known secret
        if self.secret_key in PLACEHOLDER_SECRETS:
            raise ValueError("JWT_SECRET_KEY not properly configured")

    def issue(self, subject: str, expires_delta: Optional[timedelta] = None) -> str:
        """Create a signed access token for ``subject``."""
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta if expires_delta is not None else timedelta(minutes=self.expire_minutes))
        payload = {
            "sub": subject,
            "iat": now,
            "exp": expire,
            "type": "access",
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenIdentity:
        """Decode ``token`` and return the identity it carries.

        Raises TokenExpiredError once ``exp`` has passed and InvalidTokenError
        for any other defect (bad signature, malformed, wrong type).
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            logger.warning("Rejected expired token")
            raise TokenExpiredError()
        except jwt.InvalidTokenError as e:
            logger.warning(f"Rejected invalid token: {e}")
            raise InvalidTokenError()

        if payload.get("type") != "access":
            logger.warning("Rejected token with unexpected type")
            raise InvalidTokenError()

        return TokenIdentity(
            subject=str(payload["sub"]),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
