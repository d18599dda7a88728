"""
Bearer token issuing and verification (HS256 JWT)
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt

from ..core.constants import DEFAULT_TOKEN_TTL_HOURS
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from .model import TokenClaims, User

ISSUER = "time-clock"


class TokenService:
    def __init__(self, secret: str, *, ttl_hours: int = DEFAULT_TOKEN_TTL_HOURS, algorithm: str = "HS256"):
        self._secret = secret
        self._ttl = timedelta(hours=int(ttl_hours))
        self._algorithm = algorithm

    @property
    def ttl_seconds(self) -> int:
        return int(self._ttl.total_seconds())

    def issue(self, user: User, *, now: datetime | None = None) -> str:
        now = now or datetime.now(timezone.utc)
        payload = {
            "iss": ISSUER,
            "sub": str(user.user_id),
            "username": user.username,
            "role": user.role.value,
            "iat": int(now.timestamp()),
            "exp": int((now + self._ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Decode a bearer token.

        Raises:
            AuthenticationError: If the token is missing, expired or tampered with
        """
        if not token:
            raise AuthenticationError("Token de acesso ausente")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                issuer=ISSUER,
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token expirado")
        except jwt.InvalidTokenError:
            raise AuthenticationError("Token inválido")

        try:
            return TokenClaims(
                user_id=int(payload["sub"]),
                username=str(payload.get("username", "")),
                role=Role(payload.get("role")),
            )
        except (TypeError, ValueError):
            raise AuthenticationError("Token inválido")


def extract_bearer_token(header_value: str | None) -> str:
    if not header_value:
        raise AuthenticationError("Token de acesso ausente")
    scheme, _, token = header_value.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Cabeçalho Authorization inválido")
    return token.strip()
