"""Bearer Token Verification — turns an Authorization header into a verified principal.

Invariants:
    - Only signature-verified tokens yield a principal
    - The principal is the `sub` claim, returned as-is (normalization is the
      identity resolver's job)
    - Every failure mode surfaces as UnauthenticatedError, never a raw jwt exception

Design Decisions:
    - PyJWT with a shared secret (HS256 by default): the issuing service signs,
      this service only verifies
    - HTTPBearer(auto_error=False): missing header becomes our own 401 envelope
      instead of FastAPI's default 403
"""

import logging

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from social_graph.config import Settings, get_settings
from social_graph.core.errors import UnauthenticatedError

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


def verify_token(token: str, secret: str, algorithm: str = "HS256") -> str:
    """Verify signature and expiry, return the `sub` claim."""
    try:
        claims = jwt.decode(
            token, secret, algorithms=[algorithm],
            options={"require": ["sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise UnauthenticatedError("Token expired")
    except jwt.InvalidTokenError as e:
        logger.info(f"Rejected bearer token: {e}")
        raise UnauthenticatedError()
    sub = claims.get("sub")
    if not isinstance(sub, str) or not sub.strip():
        raise UnauthenticatedError()
    return sub


def issue_token(sub: str, secret: str, algorithm: str = "HS256", **claims) -> str:
    """Sign a token for `sub`. Used by provisioning scripts and tests."""
    return jwt.encode({"sub": sub, **claims}, secret, algorithm=algorithm)


async def get_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(get_settings),
) -> str:
    """FastAPI dependency: verified identity string from the bearer token."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise UnauthenticatedError()
    return verify_token(
        credentials.credentials, settings.jwt_secret, settings.jwt_algorithm,
    )
