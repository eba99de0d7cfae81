import os

from dotenv import load_dotenv


load_dotenv()


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}

APP_ENV = os.getenv("APP_ENV", "development")

DEFAULT_DATABASE_URL = "sqlite:///./appointments.db"
DATABASE_URL = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)
SQL_ECHO = _get_bool(os.getenv("SQL_ECHO"), default=False)

FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "5000"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def validate_runtime_config() -> None:
    if APP_ENV.lower() != "production":
        return
    if not os.getenv("DATABASE_URL"):
        raise RuntimeError("DATABASE_URL must be set in production.")
    if DATABASE_URL.startswith("sqlite"):
        raise RuntimeError("SQLite is not supported in production.")
