"""Verification of HS256 access tokens and the claims they carry."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

import jwt

SECRET_ENV_VAR = "PODS_JWT_SECRET"
_LEEWAY_SECONDS = 60

_log = logging.getLogger(__name__)


class TokenError(Exception):
    """Raised when a token cannot be decoded or its claims are malformed."""


_CLAIM_TYPES: dict[str, type] = {
    "token_type": str,
    "exp": int,
    "iat": int,
    "jti": str,
    "user_id": int,
    "email": str,
    "full_name": str,
    "user_type": str,
    "is_email_verified": bool,
}

_UNSIGNED = {"exp", "iat"}


def _valid_claim(name: str, kind: type, value: Any) -> bool:
    if kind is bool:
        return isinstance(value, bool)
    if kind is int:
        if not isinstance(value, int) or isinstance(value, bool):
            return False
        return value >= 0 if name in _UNSIGNED else True
    return isinstance(value, kind)


@dataclass(frozen=True)
class JwtClaims:
    """The claims an access token carries."""

    token_type: str
    exp: int
    iat: int
    jti: str
    user_id: int
    email: str
    full_name: str
    user_type: str
    is_email_verified: bool

    @classmethod
    def from_dict(cls, data: Any) -> "JwtClaims":
        """Build claims from a decoded payload, checking every claim's type."""
        if not isinstance(data, Mapping):
            raise TokenError("token payload is not an object")
        values = {}
        for name, kind in _CLAIM_TYPES.items():
            if name not in data:
                raise TokenError(f"missing claim {name!r}")
            value = data[name]
            if not _valid_claim(name, kind, value):
                raise TokenError(f"invalid claim {name!r}")
            values[name] = value
        return cls(**values)


def verify_token(token: str, secret: Optional[Union[str, bytes]] = None) -> JwtClaims:
    """Decode an HS256 token and return its claims.

    Without an explicit secret, it is read from the PODS_JWT_SECRET variable.
    """
    if secret is None:
        secret = os.environ.get(SECRET_ENV_VAR)
        if secret is None:
            raise RuntimeError(f"{SECRET_ENV_VAR} must be set")
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=["HS256"],
            leeway=_LEEWAY_SECONDS,
            options={
                "require": ["exp"],
                "verify_aud": False,
                "verify_iat": False,
                "verify_nbf": False,
                "verify_iss": False,
            },
        )
    except jwt.PyJWTError as exc:
        raise TokenError(str(exc)) from exc
    claims = JwtClaims.from_dict(payload)
    _log.debug("token decoded for user %s", claims.user_id)
    return claims