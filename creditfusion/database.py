"""
Database schema and connection management.

Uses SQLite with SQLAlchemy to keep consensus baselines between runs.
"""

from datetime import datetime
from pathlib import Path
from sqlalchemy import create_engine, Column, String, DateTime, Integer, Float, JSON
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


class Baseline(Base):
    """Consensus baseline for one source document."""

    __tablename__ = "baselines"

    document = Column(String, primary_key=True)  # source file name, e.g. jane_doe.pdf
    consensus = Column(JSON, nullable=False)
    confidence = Column(JSON, nullable=False)  # {"overall": float, "fields": {path: float}}
    providers = Column(JSON, nullable=False, default=list)
    provider_count = Column(Integer, nullable=False, default=0)
    overall = Column(Float, nullable=False, default=0.0)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    engine = create_engine(f"sqlite:///{db_path}")
    Session = sessionmaker(bind=engine)
    return Session()
