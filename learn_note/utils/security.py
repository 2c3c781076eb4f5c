"""
Credential helpers: bcrypt password hashing and signed bearer tokens.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext

from learn_note.schemas.user import CurrentUser
from learn_note.utils.errors import AuthenticationError

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
bearer_scheme = HTTPBearer(auto_error=False)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def create_auth_token(user, settings, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT whose subject is the user's email and which carries the
    identity the API trusts on later requests."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(days=settings.JWT_EXPIRY_DAYS))

    to_encode = {
        "sub": user.email,
        "user": {"id": user.id, "email": user.email, "name": user.name},
        "exp": expire,
        "iat": now,
    }
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_auth_token(token: str, settings) -> CurrentUser:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
        return CurrentUser(**payload["user"])
    except (JWTError, KeyError, TypeError, ValueError):
        raise AuthenticationError("Invalid JWT")


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> CurrentUser:
    """Dependency guarding every authenticated route."""
    if credentials is None:
        if not request.headers.get("Authorization"):
            raise AuthenticationError("Authorization header is missing")
        raise AuthenticationError("Token is missing")

    return decode_auth_token(credentials.credentials, request.app.state.settings)
