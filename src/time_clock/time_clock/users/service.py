from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from .model import LoginResult, TokenClaims, User
from .repository import UserRepository
from .tokens import TokenService


class AuthService:
    """Use case: authenticate accounts and manage their credentials."""

    def __init__(self, users: UserRepository, tokens: TokenService):
        self._users = users
        self._tokens = tokens

    @staticmethod
    def _password_matches(user: User, password: str) -> bool:
        try:
            return check_password_hash(user.password_hash, password)
        except (TypeError, ValueError):
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            return False

    def login(self, username: str, password: str) -> LoginResult:
        if not username or not password:
            raise ValidationError("Usuário e senha são obrigatórios")

        user = self._users.get_by_username(username.strip())
        if not user or not user.is_active:
            raise AuthenticationError("Credenciais inválidas ou conta inativa")
        if not self._password_matches(user, password):
            raise AuthenticationError("Credenciais inválidas")

        return LoginResult(token=self._tokens.issue(user), user=user, expires_in=self._tokens.ttl_seconds)

    def resolve(self, token: str) -> TokenClaims:
        """Verify a bearer token and make sure the account still exists and is active."""
        claims = self._tokens.verify(token)
        user = self._users.get_by_id(claims.user_id)
        if not user or not user.is_active:
            raise AuthenticationError("Conta inativa ou inexistente")
        return TokenClaims(user_id=user.user_id, username=user.username, role=user.role)

    def profile(self, user_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user or not user.is_active:
            raise NotFoundError("Usuário não encontrado")
        return user

    def change_password(self, user_id: int, *, current_password: str, new_password: str) -> None:
        require_non_empty(current_password, "Senha atual")
        require_non_empty(new_password, "Nova senha")
        require_min_length(new_password, "Nova senha", MIN_PASSWORD_LENGTH)

        user = self.profile(user_id)
        if not self._password_matches(user, current_password):
            raise ValidationError("Senha atual incorreta")

        if not self._users.update_password(user.user_id, password_hash=generate_password_hash(new_password)):
            raise NotFoundError("Usuário não encontrado")
