from __future__ import annotations

from functools import wraps
from typing import Callable

from flask import g, request

from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..users.service import AuthService
from ..users.tokens import extract_bearer_token


def auth_guards(auth_service: AuthService) -> tuple[Callable, Callable]:
    """Build the bearer-token decorators used by every controller.

    ``login_required`` stores the verified claims in ``g.current_user``;
    ``roles_required(*roles)`` additionally checks the account role.
    """

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            token = extract_bearer_token(request.headers.get("Authorization"))
            g.current_user = auth_service.resolve(token)
            return view(*args, **kwargs)

        return wrapper

    def roles_required(*roles: Role):
        allowed = set(roles)

        def decorator(view):
            @wraps(view)
            @login_required
            def wrapper(*args, **kwargs):
                if g.current_user.role not in allowed:
                    raise AuthorizationError("Permissão insuficiente")
                return view(*args, **kwargs)

            return wrapper

        return decorator

    return login_required, roles_required
