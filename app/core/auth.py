# app/core/auth.py

import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from app.core.config import settings
from app.models.db import User
from tortoise.exceptions import DoesNotExist
import httpx

logger = logging.getLogger(__name__)

bearer_auth = HTTPBearer(auto_error=False)

# Cache JWKS to avoid fetching on every request
_jwks_cache = None
async def get_jwks_data():
    global _jwks_cache
    if _jwks_cache is None:
        async with httpx.AsyncClient() as client:
            response = await client.get(settings.CLERK_JWKS_URL)
            response.raise_for_status()
            _jwks_cache = response.json()
    return _jwks_cache


def find_signing_key(jwks_data: dict, token_header: dict) -> dict:
    """Pick the JWKS entry matching the token's key id; JWTError when there is none."""
    kid = token_header.get("kid")
    if not kid:
        raise JWTError("Token header has no key id")
    for key in jwks_data.get("keys", []):
        if key.get("kid") == kid:
            return key
    raise JWTError("Public key not found")


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_auth)
) -> User:
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing Authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = credentials.credentials

    try:
        jwks_data = await get_jwks_data()
        rsa_key = find_signing_key(jwks_data, jwt.get_unverified_header(token))

        payload = jwt.decode(
            token,
            rsa_key,
            algorithms=["RS256"],
            options={"verify_aud": False},
        )

        clerk_user_id: str = payload.get("sub")
        if not clerk_user_id:
            raise JWTError("Missing sub in token")

    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired Clerk token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except httpx.HTTPError as e:
        logger.error(f"Could not fetch JWKS: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication failed",
        )

    # Get or create local user
    try:
        user = await User.get(clerk_id=clerk_user_id)
    except DoesNotExist:
        user = await User.create(clerk_id=clerk_user_id, email=payload.get("email"))
        logger.info(f"New local user created for Clerk ID: {clerk_user_id}")

    return user
