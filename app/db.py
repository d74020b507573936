"""
Database connection and setup
SQLite database with SQLAlchemy
"""
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from app.models import Base
from config.settings import settings


def make_engine(database_url: Optional[str] = None) -> Engine:
    """
    Create an engine for the preference database.
    Defaults to the configured DATABASE_URL.
    """
    url = database_url or settings.database_url
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(
        url,
        connect_args=connect_args,  # Needed for SQLite
        echo=False  # Set to True to see SQL queries
    )


def make_session_factory(engine: Engine) -> sessionmaker:
    """Session factory bound to the given engine"""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine):
    """
    Initialize database - create all tables
    Safe to call multiple times (won't recreate existing tables)
    """
    Base.metadata.create_all(bind=engine)
