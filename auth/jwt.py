"""
JWT-style token creation and verification.

Tokens are base64url-encoded JSON payloads signed with HMAC-SHA256:
``<payload>.<hex signature>``. The payload carries ``userId``, ``email``,
``iat`` and ``exp`` (seconds since the epoch).
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import time
from base64 import b64decode, urlsafe_b64encode
from typing import Any, Callable, Dict, NamedTuple, Optional

DEFAULT_EXPIRY_SECONDS = 7 * 24 * 3600


class TokenError(Exception):
    """Base class for tokens that must not be accepted."""


class MalformedToken(TokenError):
    pass


class InvalidToken(TokenError):
    pass


class ExpiredToken(TokenError):
    pass


class TokenConfigError(Exception):
    """No signing secret is configured, so no token can be issued."""


class TokenClaims(NamedTuple):
    user_id: int
    email: str


class TokenService:
    """Issues and verifies signed, time-limited bearer tokens."""

    def __init__(
        self,
        secret: Optional[str],
        expiry_seconds: int = DEFAULT_EXPIRY_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._secret = secret
        self._expiry_seconds = expiry_seconds
        self._clock = clock

    @property
    def configured(self) -> bool:
        return bool(self._secret)

    def _sign(self, raw: bytes) -> str:
        return hmac.new(self._secret.encode(), raw, hashlib.sha256).hexdigest()

    def issue(self, user_id: int, email: str) -> str:
        """Create a signed token for ``user_id``/``email`` valid for the expiry window."""
        if not self.configured:
            raise TokenConfigError("JWT secret is not configured")
        now = int(self._clock())
        payload = {
            "userId": user_id,
            "email": email,
            "iat": now,
            "exp": now + self._expiry_seconds,
        }
        raw = json.dumps(payload, separators=(",", ":")).encode()
        return urlsafe_b64encode(raw).decode() + "." + self._sign(raw)

    def verify(self, token: str) -> TokenClaims:
        """
        Verify ``token`` and return its claims.

        Raises ``MalformedToken`` when the token cannot be parsed,
        ``InvalidToken`` when the signature does not match (or no secret is
        configured) and ``ExpiredToken`` once ``exp`` has passed.
        """
        parts = token.split(".")
        if len(parts) != 2 or not parts[0] or not parts[1]:
            raise MalformedToken("bad format")
        try:
            raw = b64decode(parts[0], altchars=b"-_", validate=True)
        except (binascii.Error, ValueError) as exc:
            raise MalformedToken("bad encoding") from exc

        if not self.configured:
            raise InvalidToken("no secret to verify against")
        if not hmac.compare_digest(parts[1].encode(), self._sign(raw).encode()):
            raise InvalidToken("bad signature")

        try:
            payload: Dict[str, Any] = json.loads(raw)
            user_id = int(payload["userId"])
            email = str(payload["email"])
            exp = float(payload["exp"])
        except (ValueError, TypeError, KeyError) as exc:
            raise MalformedToken("bad payload") from exc

        if exp <= self._clock():
            raise ExpiredToken("token expired")
        return TokenClaims(user_id=user_id, email=email)
