"""
Auth utilities for the tutor API.

Verifies ID tokens issued by the identity provider and extracts user_id from
request context. Falls back to X-User-Id header for development and tests.
"""
from datetime import datetime, timedelta, timezone
from fastapi import Header, HTTPException, Request
from typing import Optional
from aitutor.core.config import settings
import jwt
import logging

logger = logging.getLogger(__name__)


def verification_configured() -> bool:
    return bool(settings.AUTH_JWT_SECRET)


def verify_id_token(token: str) -> Optional[str]:
    """
    Verify an ID token and extract user_id.

    Args:
        token: JWT from Authorization header (Bearer {token})

    Returns:
        user_id from the token's 'sub' claim, or None when verification
        is not configured.

    Raises:
        HTTPException 401: Invalid or expired token
    """
    if not settings.AUTH_JWT_SECRET:
        logger.debug("No AUTH_JWT_SECRET configured, skipping ID token validation")
        return None

    options = {"verify_signature": True, "verify_exp": True, "verify_aud": bool(settings.AUTH_JWT_AUDIENCE)}
    try:
        payload = jwt.decode(
            token,
            settings.AUTH_JWT_SECRET,
            algorithms=["HS256"],
            audience=settings.AUTH_JWT_AUDIENCE,
            issuer=settings.AUTH_JWT_ISSUER,
            options=options,
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.InvalidTokenError as e:
        logger.debug(f"Invalid token: {e}")
        raise HTTPException(status_code=401, detail="Invalid token")

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(status_code=401, detail="Token has no subject")
    return user_id


def create_id_token(user_id: str, *, expires_in: timedelta = timedelta(hours=1), secret: Optional[str] = None) -> str:
    """Mint an HS256 ID token (tests and local tooling)."""
    now = datetime.now(timezone.utc)
    claims = {"sub": user_id, "iat": now, "exp": now + expires_in}
    if settings.AUTH_JWT_ISSUER:
        claims["iss"] = settings.AUTH_JWT_ISSUER
    if settings.AUTH_JWT_AUDIENCE:
        claims["aud"] = settings.AUTH_JWT_AUDIENCE
    return jwt.encode(claims, secret or settings.AUTH_JWT_SECRET, algorithm="HS256")


def bearer_token(request: Request) -> Optional[str]:
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header[7:].strip() or None
    return None


async def get_current_user_id(
    request: Request,
    x_user_id: Optional[str] = Header(None, description="Development/test user ID")
) -> str:
    """
    Extract current user ID from request context.

    Priority:
    1. ID token from Authorization header
    2. X-User-Id header
    3. Raise 401 Unauthorized
    """
    token = bearer_token(request)
    if token:
        user_id = verify_id_token(token)
        if user_id:
            return user_id

    if x_user_id:
        return x_user_id

    raise HTTPException(
        status_code=401,
        detail="Missing Authorization (Bearer ID token) or X-User-Id header",
    )


async def get_optional_user_id(
    request: Request,
    x_user_id: Optional[str] = Header(None, description="Development/test user ID")
) -> Optional[str]:
    """Like get_current_user_id, but unauthenticated requests yield None (demo mode)."""
    try:
        return await get_current_user_id(request, x_user_id)
    except HTTPException as exc:
        logger.info(f"Unauthenticated request downgraded to demo mode: {exc.detail}")
        return None
