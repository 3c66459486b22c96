"""Queries and writes for posts."""
import math
import re
from sqlalchemy.orm import Session

import models
from database import commit
from errors import InvalidArgument
from logging_config import get_logger

logger = get_logger("posts")

PAGE_SIZE = 10
# largest page whose offset still fits a signed 64-bit integer
MAX_PAGE = (2 ** 63 - 1) // PAGE_SIZE

_ID_PATTERN = re.compile(r"[1-9][0-9]{0,17}")


def parse_post_id(raw: str) -> int:
    """Turn a path id into an int, or raise InvalidArgument if it is malformed"""
    if not _ID_PATTERN.fullmatch(raw):
        raise InvalidArgument("Malformed post id")
    return int(raw)


def get_post_by_id(db: Session, post_id: int):
    """Retrieve a post from the database by its ID"""
    return db.query(models.Post).filter(models.Post.id == post_id).first()


def create_post(db: Session, user: models.User, title: str, body: str, tags: list[str]):
    """Create a post authored by ``user``"""
    post = models.Post(title=title,
                       body=body,
                       tags=tags,
                       user_id=user.id,
                       username=user.username)
    db.add(post)
    commit(db)
    db.refresh(post)
    logger.info("Post %s created by %s", post.id, user.username)
    return post


def _filtered_query(db: Session, username: str | None = None, tag: str | None = None):
    query = db.query(models.Post)
    if username:
        query = query.filter(models.Post.username == username)
    if tag:
        query = query.filter(models.Post.tag_links.any(models.PostTag.name == tag))
    return query


def list_posts(db: Session, page: int = 1, username: str | None = None, tag: str | None = None):
    """Return one page of matching posts, newest first"""
    if page < 1:
        raise InvalidArgument("Page must be 1 or greater")
    if page > MAX_PAGE:
        raise InvalidArgument(f"Page must be {MAX_PAGE} or less")
    return (_filtered_query(db, username, tag)
            .order_by(models.Post.id.desc())
            .offset((page - 1) * PAGE_SIZE)
            .limit(PAGE_SIZE)
            .all())


def count_posts(db: Session, username: str | None = None, tag: str | None = None) -> int:
    return _filtered_query(db, username, tag).count()


def last_page(count: int) -> int:
    return math.ceil(count / PAGE_SIZE)


def update_post(db: Session, post: models.Post, title=None, body=None, tags=None):
    """Apply the given fields to ``post`` and return it as stored"""
    if title is not None:
        post.title = title
    if body is not None:
        post.body = body
    if tags is not None:
        post.tags = tags

    commit(db)
    db.refresh(post)
    logger.info("Post %s updated", post.id)
    return post


def delete_post(db: Session, post: models.Post):
    post_id = post.id
    db.delete(post)
    commit(db)
    logger.info("Post %s deleted", post_id)
