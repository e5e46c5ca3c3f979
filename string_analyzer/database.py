from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from typing import Optional
import logging

from string_analyzer.config import get_database_url

logger = logging.getLogger(__name__)

Base = declarative_base()

# Bound to an engine by init_db() on startup
SessionLocal = sessionmaker(autocommit=False, autoflush=False)


# ------------------------------------------------------------------------------
# DATABASE ENGINE
# ------------------------------------------------------------------------------
def create_db_engine(database_url: str):
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False

    return create_engine(
        database_url,
        connect_args=connect_args,
        pool_pre_ping=True,   # prevents "MySQL server has gone away" issues
        pool_recycle=280,     # helps with idle connection timeouts
    )


# ------------------------------------------------------------------------------
# DB DEPENDENCY
# ------------------------------------------------------------------------------
def get_db():
    """Dependency to provide a DB session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ------------------------------------------------------------------------------
# INITIALIZATION
# ------------------------------------------------------------------------------
def init_db(database_url: Optional[str] = None):
    """Create the engine, bind sessions to it and create tables (runs once on startup)."""
    from string_analyzer.models import string_record  # noqa: F401 ensure models are imported

    engine = create_db_engine(database_url or get_database_url())
    SessionLocal.configure(bind=engine)
    Base.metadata.create_all(bind=engine)
    logger.info(f"✅ Record store ready: {engine.url.render_as_string(hide_password=True)}")
    return engine
