"""Generate database session"""

from typing import Generator

from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import get_settings
from src.db.schema import Base

DATABASE_URL = get_settings().database_url
# in-memory SQLite needs one shared connection, otherwise every session sees an empty database
engine = (
    create_engine(
        DATABASE_URL, connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    if DATABASE_URL.startswith("sqlite")
    else create_engine(DATABASE_URL)
)
SessionLocal = sessionmaker(bind=engine)

# Ensure all tables are created
Base.metadata.create_all(bind=engine)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
