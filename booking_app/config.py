import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env (no-op when the file is absent)
load_dotenv()

# ---- Paths ----
BASE_DIR = Path(__file__).resolve().parents[1]
DEFAULT_DATABASE_URL = f"sqlite:///{BASE_DIR / 'data.db'}"


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-me")
    DATABASE_URL = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)
    SQL_ECHO = os.getenv("SQL_ECHO", "0") == "1"
    # Timezone for ISO inputs that carry no offset
    APP_TIMEZONE = os.getenv("APP_TIMEZONE", "UTC")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class TestConfig(Config):
    TESTING = True
    DATABASE_URL = "sqlite://"
    APP_TIMEZONE = "UTC"
    LOG_LEVEL = "WARNING"
