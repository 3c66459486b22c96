from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

import config
from errors import PersistenceError
from logging_config import get_logger

logger = get_logger("database")

URL_DATABASE = config.DATABASE_URL

engine_options = {"echo": config.DATABASE_ECHO}
if URL_DATABASE.startswith("sqlite"):
    engine_options["connect_args"] = {"check_same_thread": False}
    if URL_DATABASE in ("sqlite://", "sqlite:///:memory:"):
        engine_options["poolclass"] = StaticPool

engine = create_engine(URL_DATABASE, **engine_options)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def commit(db: Session):
    """Commit the session, turning store failures into a PersistenceError.

    IntegrityError is re-raised untouched so callers can map constraint
    violations (e.g. a duplicate username) to a better status.
    """
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Commit failed")
        raise PersistenceError() from exc
