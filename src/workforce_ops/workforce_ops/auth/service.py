from __future__ import annotations

import logging
from typing import Optional

from ..core.exceptions import AuthenticationError
from ..users.repository import UserRepository
from .model import Principal
from .token_verifier import TokenVerifier

logger = logging.getLogger(__name__)


def bearer_token(authorization_header: Optional[str]) -> str:
    header = (authorization_header or "").strip()
    if not header.startswith("Bearer "):
        raise AuthenticationError("Authorization header required")
    token = header[len("Bearer "):].strip().strip('"').strip("'")
    if not token:
        raise AuthenticationError("Authorization header required")
    return token


class AuthService:
    """Use case: resolve the caller from a bearer token.

    The role comes from the stored user profile. Headers such as
    ``X-User-Role`` are never consulted.
    """

    def __init__(self, verifier: TokenVerifier, users: UserRepository):
        self._verifier = verifier
        self._users = users

    def authenticate(self, authorization_header: Optional[str]) -> Principal:
        uid = self._verifier.verify(bearer_token(authorization_header))

        profile = self._users.get_by_id(uid)
        if not profile or not profile.is_active:
            logger.info("[auth] rejected token for unknown or inactive user %s", uid)
            raise AuthenticationError("User not found")

        return Principal(user_id=profile.user_id, role=profile.role, name=profile.name, team_id=profile.team_id)
