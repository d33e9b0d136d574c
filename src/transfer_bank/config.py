"""
Runtime configuration for the transfer-bank service.

Values come from the process environment; a local .env file is loaded first
(without overriding variables that are already set).
"""

import os
from dataclasses import dataclass, field
from typing import List

from dotenv import find_dotenv, load_dotenv


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    database_url: str
    db_echo: bool = False
    create_tables: bool = True
    log_level: str = "INFO"
    log_dir: str = "logs"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    host: str = "0.0.0.0"
    port: int = 3000

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv(find_dotenv(usecwd=True), override=False)

        database_url = os.getenv("DATABASE_URL")
        if not database_url:
            raise RuntimeError("DATABASE_URL not set in .env")

        origins = os.getenv("CORS_ORIGINS", "*")
        return cls(
            database_url=database_url,
            db_echo=_env_bool("DB_ECHO", False),
            create_tables=_env_bool("CREATE_TABLES", True),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_dir=os.getenv("LOG_DIR", "logs"),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
        )
