# persistence/engine.py
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def load_env(env_path: Optional[Path] = None) -> None:
    """Read KEY=VALUE lines from .env without overriding the real environment."""
    env_path = env_path or PROJECT_ROOT / ".env"
    if not env_path.exists():
        return
    for line in env_path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        k, v = line.split("=", 1)
        os.environ.setdefault(k.strip(), v.strip().strip('"').strip("'"))


load_env()


@dataclass(frozen=True)
class DBConfig:
    database_url: str
    echo: bool = False


_engine: Optional[Engine] = None


def get_db_config() -> DBConfig:
    url = os.getenv("DATABASE_URL")
    if not url:
        raise RuntimeError("DATABASE_URL is not set. Put it in .env or export it.")
    echo = os.getenv("SQL_ECHO", "").strip().lower() in ("1", "true", "yes")
    return DBConfig(database_url=url, echo=echo)


def get_engine() -> Engine:
    global _engine
    if _engine is not None:
        return _engine

    cfg = get_db_config()
    _engine = create_engine(cfg.database_url, pool_pre_ping=True, echo=cfg.echo, future=True)
    return _engine


def ping_db(engine: Optional[Engine] = None) -> bool:
    try:
        eng = engine or get_engine()
        with eng.begin() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        logger.warning("Profile database is not reachable", exc_info=True)
        return False
