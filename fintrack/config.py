import os  # environment variables
from functools import lru_cache  # one Settings object per process

from dotenv import load_dotenv  # loads variables from a local .env file
from pydantic import BaseModel  # typed, validated settings class

load_dotenv()  # put .env key=value pairs into the environment


class Settings(BaseModel):
    # signs the session cookie; change it outside local dev
    secret_key: str = os.getenv("SECRET_KEY", "dev-secret-change")

    # SQLite file by default; any SQLAlchemy URL works (e.g. Postgres)
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./fintrack.db")

    # cookie holding the signed session; renaming it logs everyone out
    session_cookie: str = os.getenv("SESSION_COOKIE_NAME", "ft_session")

    # seconds until the session cookie expires
    session_max_age: int = int(os.getenv("SESSION_MAX_AGE", "1800"))

    # how many entries the dashboard's "recent transactions" block shows
    recent_transactions_limit: int = int(os.getenv("RECENT_TRANSACTIONS_LIMIT", "5"))

    log_level: str = os.getenv("LOG_LEVEL", "INFO")


@lru_cache
def get_settings() -> Settings:
    return Settings()
