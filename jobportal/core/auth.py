"""
Authentication Utility - session tokens and the access guard.

Provides:
- JWT token creation (session issuer)
- JWT token verification
- FastAPI dependency for protected routes (access guard)

Tokens are stateless: nothing is stored server-side, so expiry is the
only way a token stops working.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from jobportal.core.config import get_settings
from jobportal.core.errors import InvalidToken, Unauthenticated

# Bearer token extractor; missing headers are reported by get_current_client
bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(
    data: dict,
    expires_delta: Optional[timedelta] = None,
    issued_at: Optional[datetime] = None,
) -> str:
    """Create JWT access token."""
    settings = get_settings()
    to_encode = data.copy()
    now = issued_at or datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode.update({"iat": now, "exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict:
    """Decode and verify JWT token. Raises InvalidToken on bad signature or expiry."""
    settings = get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise InvalidToken() from exc


def issue_session_token(client: dict) -> str:
    """Mint a session token for a client record."""
    client_id = str(client["_id"])
    return create_access_token(data={
        "sub": client_id,
        "id": client_id,
        "email": client.get("company_email"),
        "name": client.get("name"),
    })


async def get_current_client(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> dict:
    """
    FastAPI dependency - Get the claims of the authenticated client.

    Usage:
        @router.get("/protected")
        def route(client: dict = Depends(get_current_client)):
            return client["id"]
    """
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()

    payload = decode_token(credentials.credentials)

    if not payload.get("id"):
        raise InvalidToken()

    return payload
