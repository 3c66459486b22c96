"""Password hashing and the JWT session cookie."""
from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import Response
from jose import JWTError, jwt
from passlib.context import CryptContext

import config
import models

COOKIE_NAME = "access_token"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str):
    """Hash a plain text password using the configured password hashing context"""
    return pwd_context.hash(password)


def verify_password(plain_password, hashed_password):
    """Verify if a plain text password matches its hashed version"""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: timedelta | None = None):
    """Create a new JWT access token"""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    """Return the claims of a valid token, or None if it is invalid or expired"""
    try:
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
    except JWTError:
        return None
    if payload.get("sub") is None or payload.get("id") is None:
        return None
    return payload


def needs_refresh(payload: dict) -> bool:
    """True when the token expires within ACCESS_TOKEN_REFRESH_MINUTES"""
    expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
    remaining = expires_at - datetime.now(timezone.utc)
    return remaining < timedelta(minutes=config.ACCESS_TOKEN_REFRESH_MINUTES)


def set_jwt_cookie(response: Response, user: models.User):
    """Generate a JWT for a user and store it in an HTTP-only cookie"""
    jwt_token = create_access_token({"sub": user.username, "id": user.id})
    response.set_cookie(
        key=COOKIE_NAME,
        value=jwt_token,
        httponly=True,
        secure=config.COOKIE_SECURE,
        samesite="strict",
        max_age=config.ACCESS_TOKEN_EXPIRE_MINUTES * 60
    )
    return jwt_token


def clear_jwt_cookie(response: Response):
    response.delete_cookie(COOKIE_NAME, httponly=True, secure=config.COOKIE_SECURE, samesite="strict")
