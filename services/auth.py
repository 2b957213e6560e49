"""
services/auth.py
────────────────────────────────────────────────────────────────────────
Session tokens: compact HS256 JWTs carrying the username in `sub`.

* `TokenService` signs / verifies with a base64 secret from settings
* decode failures raise `TokenError` subclasses; `is_valid` answers
  False only for expired or foreign tokens
"""
from __future__ import annotations

import base64
import binascii
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Callable, Mapping, TypeVar

import jwt

from config import settings
from core.log import get_logger

_ALGO = "HS256"
_MIN_KEY_BYTES = 32                    # HS256 wants a key >= hash size
_REQUIRED = ["sub", "iat", "exp"]

T = TypeVar("T")
Claims = dict[str, Any]

log = get_logger("auth.tokens")


# ───────── errors ────────────────────────────────────────────────────
class TokenError(Exception):
    """Base class for everything the token layer raises."""


class InvalidKey(TokenError):
    pass


class MalformedToken(TokenError):
    pass


class InvalidSignature(TokenError):
    pass


class ExpiredToken(TokenError):
    pass


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def decode_secret(secret_b64: str) -> bytes:
    """Base64 secret from config ➜ raw HMAC key bytes."""
    try:
        key = base64.b64decode(secret_b64, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidKey("JWT secret is not valid base64") from exc
    if len(key) < _MIN_KEY_BYTES:
        raise InvalidKey(
            f"JWT secret is {len(key) * 8} bits; HS256 needs at least {_MIN_KEY_BYTES * 8}"
        )
    return key


# ───────── service ───────────────────────────────────────────────────
class TokenService:
    """Stateless issuer / verifier; safe to share across requests."""

    def __init__(
        self,
        secret_key: str,
        expiration: timedelta,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if expiration <= timedelta(0):
            raise ValueError("token lifetime must be positive")
        self._key = decode_secret(secret_key)
        self._expiration = expiration
        self._clock = clock

    def _now(self) -> datetime:
        # naive clock values are UTC, the same reading jwt.encode gives them
        now = self._clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return now.astimezone(timezone.utc)

    # ─── issuing ────────────────────────────────────────────────────
    def issue(self, principal_identifier: str, claims: Mapping[str, Any] | None = None) -> str:
        # NumericDate has second precision; truncate so exp - iat == lifetime
        issued_at = self._now().replace(microsecond=0)
        payload: Claims = dict(claims or {})
        payload.update(
            sub=principal_identifier,
            iat=issued_at,
            exp=issued_at + self._expiration,
        )
        try:
            token = jwt.encode(payload, self._key, algorithm=_ALGO)
        except jwt.PyJWTError as exc:
            raise InvalidKey(f"could not sign token: {exc}") from exc

        log.debug("token issued", sub=principal_identifier, extra_claims=sorted(claims or {}))
        return token

    # ─── reading ────────────────────────────────────────────────────
    def _decode(self, token: str) -> Claims:
        """Verify signature + structure only; time is checked against our clock."""
        try:
            return jwt.decode(
                token,
                self._key,
                algorithms=[_ALGO],
                options={"verify_exp": False, "verify_iat": False, "require": _REQUIRED},
            )
        except jwt.InvalidSignatureError as exc:
            log.info("token rejected", reason="bad signature")
            raise InvalidSignature("token signature does not match") from exc
        except jwt.PyJWTError as exc:
            log.info("token rejected", reason="malformed", error=str(exc))
            raise MalformedToken(str(exc)) from exc

    def _is_expired(self, claims: Claims) -> bool:
        try:
            exp = float(claims["exp"])
        except (TypeError, ValueError) as exc:
            raise MalformedToken("exp claim is not a NumericDate") from exc
        return self._now().timestamp() >= exp

    def get_claim(self, token: str, selector: Callable[[Claims], T]) -> T:
        claims = self._decode(token)
        if self._is_expired(claims):
            raise ExpiredToken("token has expired")
        return selector(claims)

    def get_subject(self, token: str) -> str:
        return self.get_claim(token, lambda c: c["sub"])

    def get_expiration(self, token: str) -> datetime:
        return self.get_claim(token, lambda c: datetime.fromtimestamp(c["exp"], tz=timezone.utc))

    def is_valid(self, token: str, expected_principal_identifier: str) -> bool:
        """
        True iff the token is ours, names `expected_principal_identifier`
        and has not expired. Malformed or forged tokens raise instead of
        returning False so callers can tell "bad token" from "stale token".
        """
        claims = self._decode(token)
        if claims["sub"] != expected_principal_identifier:
            return False
        return not self._is_expired(claims)

    # ─── config passthrough ─────────────────────────────────────────
    def get_expiration_duration(self) -> timedelta:
        return self._expiration

    @property
    def expires_in(self) -> int:
        """Lifetime in milliseconds, as configured."""
        return int(self._expiration / timedelta(milliseconds=1))


@lru_cache
def token_service() -> TokenService:
    return TokenService(
        settings.jwt_secret_key,
        timedelta(milliseconds=settings.jwt_expiration_time),
    )
