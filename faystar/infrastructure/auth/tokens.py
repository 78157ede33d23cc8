"""
Bearer token issuing and verification (HS256 JWT).
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt

from faystar.core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class TokenService:
    """
    Issues and verifies JWTs carrying ``userId`` and ``email`` claims.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expire_minutes: int = 7 * 24 * 60):
        self.secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, user_id: str, email: str) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "userId": user_id,
            "email": email,
            "iat": now,
            "exp": now + timedelta(minutes=self.expire_minutes),
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Dict[str, Any]:
        """
        Decode and validate a token.

        Raises:
            AuthenticationError: If the token is expired, malformed or badly signed
        """
        try:
            claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token expired")
        except jwt.InvalidTokenError as e:
            logger.info(f"Rejected bearer token: {type(e).__name__}")
            raise AuthenticationError("Invalid token")

        if "userId" not in claims:
            raise AuthenticationError("Invalid token")
        return claims
