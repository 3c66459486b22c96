"""Application settings read from the environment (and a local .env file)."""
import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


DATABASE_URL = os.getenv("DATABASE_URL")
DATABASE_ECHO = _flag("DATABASE_ECHO", "false")

SECRET_KEY = os.getenv("SECRET_KEY")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))
ACCESS_TOKEN_REFRESH_MINUTES = int(os.getenv("ACCESS_TOKEN_REFRESH_MINUTES", "15"))
COOKIE_SECURE = _flag("COOKIE_SECURE", "true")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "app.log")

if not DATABASE_URL:
    raise ValueError("DATABASE_URL environment variable not set!")

if not SECRET_KEY:
    raise ValueError("SECRET_KEY environment variable not set!")
