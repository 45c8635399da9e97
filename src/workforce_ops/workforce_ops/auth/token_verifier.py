from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol, Sequence

import jwt

from ..core.exceptions import AuthenticationError


class TokenVerifier(Protocol):
    def verify(self, token: str) -> str:
        """Return the identity-provider uid for a valid token."""

        raise NotImplementedError


@dataclass(frozen=True)
class JwtTokenVerifier(TokenVerifier):
    """Verifies ID tokens issued by the external identity provider."""

    key: str
    algorithms: Sequence[str] = field(default_factory=lambda: ("HS256",))
    audience: Optional[str] = None

    def verify(self, token: str) -> str:
        options = {"verify_aud": self.audience is not None}
        try:
            claims = jwt.decode(
                token,
                self.key,
                algorithms=list(self.algorithms),
                audience=self.audience,
                options=options,
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token has expired")
        except jwt.InvalidTokenError:
            raise AuthenticationError("Invalid token")

        uid = claims.get("uid") or claims.get("sub")
        if not uid:
            raise AuthenticationError("Invalid token")
        return str(uid)
