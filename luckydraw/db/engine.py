import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from .utils import resolve_sqlite_url

load_dotenv()
# Repository root; relative sqlite paths in DB_URL are resolved against it
ROOT_DIR = Path(__file__).resolve().parents[2]
DEFAULT_SQLITE_URL = resolve_sqlite_url(
    os.getenv("DB_URL", "sqlite:///./dev.db"), ROOT_DIR
)


def make_engine(database_url: Optional[str] = None, echo: bool = False) -> Engine:
    """Create an engine for the local participant/winner database."""
    url = database_url or DEFAULT_SQLITE_URL
    return create_engine(url, echo=echo, future=True)


def get_sessionmaker(engine: Engine) -> sessionmaker:
    return sessionmaker(
        bind=engine,
        expire_on_commit=False,  # Rows stay readable after commit when mapped to records
        future=True,
    )


def reset_schema(engine: Engine) -> None:
    """Drop and recreate the participant and winner tables.

    Intended for development databases and tests; production schemas are
    managed by Alembic.
    """
    from ..models import Base

    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
