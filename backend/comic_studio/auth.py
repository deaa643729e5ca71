"""
Authentication utilities and dependencies

Tokens are issued by the studio's identity provider; the API only verifies
them. Every failure mode (missing header, bad signature, expired token,
missing subject) produces the same 401 so clients can treat it uniformly.
"""
import jwt
from datetime import datetime, timedelta, timezone
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel
from typing import Optional
from .config import settings
from .exceptions import UnauthorizedError
from .logger import logger

security = HTTPBearer(auto_error=False)


class CurrentUser(BaseModel):
    uid: str
    email: Optional[str] = None


def create_access_token(uid: str, email: Optional[str] = None, expires_minutes: Optional[int] = None) -> str:
    """Create a signed access token (used by tooling and tests)"""
    now = datetime.now(timezone.utc)
    minutes = settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES if expires_minutes is None else expires_minutes
    to_encode = {
        "sub": uid,
        "exp": now + timedelta(minutes=minutes),
        "iat": now,
    }
    if email:
        to_encode["email"] = email
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[CurrentUser]:
    """Decode an access token; None when it is invalid or expired"""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None
    uid = payload.get("sub")
    if not uid:
        return None
    return CurrentUser(uid=uid, email=payload.get("email"))


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CurrentUser:
    """
    Dependency to get current authenticated user from the bearer token
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError()

    user = decode_access_token(credentials.credentials)
    if user is None:
        logger.warning("Rejected bearer token")
        raise UnauthorizedError()

    return user
