import os

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./electricity.db")

# SQLite connections are used from FastAPI's threadpool, not the creating thread
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

# Base class all ORM models inherit from
Base = declarative_base()


def get_db():
    """FastAPI dependency yielding one session per request."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def init_db(bind=None):
    # import models so they register on Base.metadata
    from app.models import dailyelectricity  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
