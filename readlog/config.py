import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_DB_PATH = str(Path.cwd() / "readlog.db")


def _flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    jwt_secret: str
    database_url: str = f"sqlite+aiosqlite:///{DEFAULT_DB_PATH}"
    db_echo: bool = False
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60 * 24
    bcrypt_rounds: int = 12
    log_level: str = "INFO"
    log_dir: str | None = None
    create_tables: bool = True
    host: str = "127.0.0.1"
    port: int = 3000


def load_settings(env_file: str | None = ".env") -> Settings:
    if env_file:
        load_dotenv(env_file)

    secret = os.environ.get("READLOG_JWT_SECRET")
    if not secret:
        raise RuntimeError("READLOG_JWT_SECRET is not set")

    return Settings(
        jwt_secret=secret,
        database_url=os.environ.get("READLOG_DATABASE_URL", Settings.database_url),
        db_echo=_flag(os.environ.get("READLOG_DB_ECHO", "false")),
        jwt_expire_minutes=int(os.environ.get("READLOG_JWT_EXPIRE_MINUTES", "1440")),
        bcrypt_rounds=int(os.environ.get("READLOG_BCRYPT_ROUNDS", "12")),
        log_level=os.environ.get("READLOG_LOG_LEVEL", "INFO").upper(),
        log_dir=os.environ.get("READLOG_LOG_DIR") or None,
        create_tables=_flag(os.environ.get("READLOG_CREATE_TABLES", "true")),
        host=os.environ.get("READLOG_HOST", "127.0.0.1"),
        port=int(os.environ.get("READLOG_PORT", "3000")),
    )
