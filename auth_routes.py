"""Authentication endpoints mounted at /api/auth."""
from typing import Annotated
from fastapi import APIRouter, Depends, Response, status

from dependencies import RequestContext, context_dependency, db_dependency, require_authenticated
from errors import Unauthenticated
from logging_config import get_logger
from schemas import LoginBody, RegisterBody, UserOut
from security import clear_jwt_cookie, set_jwt_cookie
import user_repository

logger = get_logger("auth")

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserOut, status_code=status.HTTP_200_OK)
def register(body: RegisterBody, response: Response, db: db_dependency):
    """Create an account and log it in straight away"""
    user = user_repository.create_user(db, body.username, body.password)
    set_jwt_cookie(response, user)
    return user


@router.post("/login", response_model=UserOut, status_code=status.HTTP_200_OK)
def login(body: LoginBody, response: Response, db: db_dependency):
    """Authenticate a user using username and password"""
    user = user_repository.authenticate(db, body.username, body.password)
    if user is None:
        logger.info("Failed login for %s", body.username)
        raise Unauthenticated("Invalid username or password")

    set_jwt_cookie(response, user)
    logger.info("User %s logged in", user.username)
    return user


@router.get("/check", response_model=UserOut, status_code=status.HTTP_200_OK)
def check(ctx: Annotated[RequestContext, Depends(require_authenticated)]):
    """Return the user the session cookie belongs to"""
    return ctx.user


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(ctx: context_dependency):
    """Log out by deleting the access token cookie.

    The token itself stays valid until it expires; only the cookie is removed.
    """
    if ctx.user is not None:
        logger.info("User %s logged out", ctx.user.username)
    else:
        logger.info("Logout without an active session")
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    clear_jwt_cookie(response)
    return response
