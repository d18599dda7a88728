from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an account allowed to operate the time clock.

    Plain data object, no database access here.
    """

    user_id: int
    full_name: str
    username: str
    password_hash: str
    role: Role
    is_active: bool = True

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "fullName": self.full_name,
            "username": self.username,
            "role": self.role.value,
            "isActive": self.is_active,
        }


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a verified bearer token."""

    user_id: int
    username: str
    role: Role


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: User
    expires_in: Optional[int] = None
