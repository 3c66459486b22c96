"""Initialize the database by creating all tables defined in the models"""
import config
from database import Base, engine
from logging_config import setup_logging
import models  # noqa: F401  registers the tables on Base.metadata

logger = setup_logging(config.LOG_LEVEL, config.LOG_FILE)

if __name__ == "__main__":
    logger.info("Creating tables on the database...")
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created successfully!")
