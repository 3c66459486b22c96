"""Per-request dependencies: database session, request context and access gates.

Handlers never read ambient state. The identity resolved from the session
cookie and the post loaded from the path travel in a ``RequestContext``
that FastAPI builds once per request and hands to every gate that asks
for it.
"""
from dataclasses import dataclass
from typing import Annotated, Optional
from fastapi import Depends, Request, Response
from sqlalchemy.orm import Session

import models
from database import SessionLocal
from errors import Forbidden, NotFound, Unauthenticated
from logging_config import get_logger
from post_repository import get_post_by_id, parse_post_id
from security import COOKIE_NAME, decode_access_token, needs_refresh, set_jwt_cookie
from user_repository import get_user_by_id

logger = get_logger("auth")


def get_db():
    """Dependency function that provides a database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


db_dependency = Annotated[Session, Depends(get_db)]


@dataclass
class RequestContext:
    user: Optional[models.User] = None
    post: Optional[models.Post] = None


def get_request_context(request: Request, response: Response, db: db_dependency) -> RequestContext:
    """Resolve the session cookie into the acting user, if any.

    A missing, invalid or expired token, or one naming a user that no
    longer exists, leaves the request anonymous. A token close to expiry
    is re-issued on the response.
    """
    ctx = RequestContext()
    token = request.cookies.get(COOKIE_NAME)
    if not token:
        return ctx

    payload = decode_access_token(token)
    if payload is None:
        return ctx

    user = get_user_by_id(db, payload["id"])
    if user is None or user.username != payload["sub"]:
        return ctx

    ctx.user = user
    if needs_refresh(payload):
        set_jwt_cookie(response, user)
    return ctx


context_dependency = Annotated[RequestContext, Depends(get_request_context)]


def require_authenticated(ctx: context_dependency) -> RequestContext:
    """Gate: stop the request with 401 unless a user is attached"""
    if ctx.user is None:
        raise Unauthenticated()
    return ctx


def load_post(post_id: str, ctx: context_dependency, db: db_dependency) -> RequestContext:
    """Gate: validate the path id, load the post and attach it to the context"""
    post = get_post_by_id(db, parse_post_id(post_id))
    if post is None:
        raise NotFound("Post not found")
    ctx.post = post
    return ctx


def check_own_post(ctx: Annotated[RequestContext, Depends(load_post)],
                   _: Annotated[RequestContext, Depends(require_authenticated)]) -> RequestContext:
    """Gate: only the author of the loaded post may go further"""
    if ctx.post.user_id != ctx.user.id:
        logger.warning("User %s denied access to post %s", ctx.user.username, ctx.post.id)
        raise Forbidden()
    return ctx
