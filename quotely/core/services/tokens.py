"""
Bearer token issuing and verification.

Tokens are HS256 JWTs carrying the user id as ``sub`` plus the email. A
token alone never authorizes anything; callers re-check the user store.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from quotely.core.errors import InvalidToken
from quotely.core.models.domain.models import VerifiedIdentity

DEFAULT_ALGORITHM = "HS256"
DEFAULT_LIFETIME = timedelta(days=7)


class TokenIssuer:
    """Signs and decodes bearer tokens with one secret."""

    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = DEFAULT_ALGORITHM,
        lifetime: timedelta = DEFAULT_LIFETIME,
    ) -> None:
        self.secret = secret
        self.algorithm = algorithm
        self.lifetime = lifetime

    def issue(self, user_id: int, email: str, *, now: Optional[datetime] = None) -> str:
        """
        Issue a signed token.

        Args:
            user_id: Subject of the token
            email: Email embedded next to the subject
            now: Issue time, defaults to the current UTC time

        Returns:
            Encoded JWT string
        """
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": str(user_id),
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> VerifiedIdentity:
        """
        Check signature and expiry and extract the identity.

        Raises:
            InvalidToken: If the token is forged, expired or malformed
        """
        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise InvalidToken("Token has expired") from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidToken("Invalid token") from exc

        try:
            user_id = int(claims["sub"])
        except (TypeError, ValueError) as exc:
            raise InvalidToken("Invalid token subject") from exc
        return VerifiedIdentity(user_id=user_id, email=str(claims.get("email", "")))
