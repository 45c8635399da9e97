from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import g, request

from ..core.enums import Permission
from .model import Principal
from .policy import require
from .service import AuthService


def current_principal() -> Principal:
    return g.principal


def login_required(auth_service: AuthService, permission: Optional[Permission] = None):
    """Authenticate the bearer token and optionally check one permission.

    Failures raise domain errors; the app-level error handlers turn them into
    401/403 JSON responses.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            principal = auth_service.authenticate(request.headers.get("Authorization"))
            if permission is not None:
                require(principal, permission)
            g.principal = principal
            return view(*args, **kwargs)

        return wrapper

    return decorator
