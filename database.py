import logging
from contextlib import contextmanager
from sqlalchemy import create_engine, inspect
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.exc import SQLAlchemyError

from config import Config

logger = logging.getLogger(__name__)

DATABASE_URL = Config.DATABASE_URL

# create_engine is lazy, nothing connects until the first query
engine = create_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def configure_engine(url, **engine_kwargs):
    """Point the session factory at a different database.

    Used by the app factory when a config overrides DATABASE_URL, and by tests
    to swap in an in-memory SQLite database.
    """
    global engine
    if url != engine.url.render_as_string(hide_password=False) or engine_kwargs:
        logger.info("Configuring database engine for %s", url.split('@')[-1])
        engine = create_engine(url, **engine_kwargs)
        SessionLocal.configure(bind=engine)
    return engine


def get_engine():
    return engine


def has_verses_table():
    """True once the schema has been created (migration or import script)."""
    return inspect(engine).has_table('verses')


@contextmanager
def get_db_session():
    """Provide a scope around a series of read queries.

    Verse data is read-only at request time, so the session is never committed.
    """
    db = SessionLocal()
    try:
        yield db
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"SQLAlchemy Session Error: {e}")
        raise
    finally:
        db.close()
