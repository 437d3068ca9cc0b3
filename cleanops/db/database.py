from typing import Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from cleanops.core.config import settings


class Base(DeclarativeBase):
    pass


connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def init_db(bind: Optional[Engine] = None) -> None:
    """Create any tables that do not exist yet. Existing tables and rows are left alone."""
    import cleanops.db.models  # noqa: F401  registers the tables on Base.metadata

    Base.metadata.create_all(bind=bind or engine)
