"""Queries and writes for the users table."""
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

import models
from database import commit
from errors import Conflict
from logging_config import get_logger
from security import hash_password, verify_password

logger = get_logger("users")


def get_user_by_username(db: Session, username: str):
    """Retrieve a user from the database by their username"""
    return db.query(models.User).filter(models.User.username == username).first()


def get_user_by_id(db: Session, user_id: int):
    """Retrieve a user from the database by their ID"""
    return db.query(models.User).filter(models.User.id == user_id).first()


def create_user(db: Session, username: str, password: str):
    """Create and store a new user, refusing a username that is already taken.

    The lookup only gives a quick, friendly answer; the unique index on
    ``users.username`` decides when two registrations race.
    """
    if get_user_by_username(db, username):
        raise Conflict("Username already exists")

    user = models.User(username=username, password_hash=hash_password(password))
    db.add(user)
    try:
        commit(db)
    except IntegrityError as exc:
        logger.info("Duplicate username rejected by the store: %s", username)
        raise Conflict("Username already exists") from exc
    db.refresh(user)
    logger.info("Registered user %s (id=%s)", user.username, user.id)
    return user


def authenticate(db: Session, username: str, password: str) -> Optional[models.User]:
    """Return the user when the password matches, None otherwise"""
    user = get_user_by_username(db, username)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user
