"""
CaseDesk Backend: Token Service
===============================

What:  Issues and verifies the signed bearer tokens used for write access.
How:   PyJWT with an HMAC algorithm (HS256 by default). A token carries the
       caller's claims plus ``iat`` and ``exp``; nothing is stored server-side.
Who:   The login route issues tokens; the auth guard verifies them.
When:  Built once by ``create_app()`` from ``Settings``.

Verification outcome:
    ``verify`` either returns the claims or raises ``TokenVerificationError``.
    Malformed, badly signed and expired tokens are reported identically; the
    reason goes to the debug log only.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt

from casedesk.config import Settings
from casedesk.exceptions import TokenVerificationError

logger = logging.getLogger(__name__)


class TokenService:
    """
    Stateless issuer/verifier for bearer tokens.

    Attributes:
        ttl:        Token lifetime, measured from issuance
        algorithm:  JWS algorithm used for signing and accepted on verify
    """

    def __init__(
        self,
        secret: str,
        ttl: timedelta = timedelta(hours=24),
        algorithm: str = "HS256",
    ):
        self._secret = secret
        self.ttl = ttl
        self.algorithm = algorithm

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.jwt_secret,
            ttl=timedelta(hours=settings.token_ttl_hours),
            algorithm=settings.jwt_algorithm,
        )

    def issue(self, claims: Dict[str, Any]) -> str:
        """
        Sign ``claims`` into a token that expires ``ttl`` from now.

        The claims dict is copied; ``iat`` and ``exp`` are added to the copy.
        """
        now = datetime.now(timezone.utc)
        payload = dict(claims)
        payload["iat"] = now
        payload["exp"] = now + self.ttl
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Dict[str, Any]:
        """
        Check signature and expiry and return the embedded claims.

        Raises:
            TokenVerificationError: for any malformed, tampered or expired token
        """
        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp"]},
            )
        except jwt.InvalidTokenError as e:
            logger.debug("Token rejected: %s", type(e).__name__)
            raise TokenVerificationError(context={"reason": type(e).__name__}) from e
