"""
Read-only SQLite engines for the databases of a SeqRepo instance.

Every engine is bound to a single database file which is opened with ``mode=ro`` so that
nothing in this package can modify the repository.
"""

import logging
import os

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

logger = logging.getLogger(__name__)


def readonly_url(db_path: str) -> str:
    return f"sqlite:///file:{os.path.abspath(db_path)}?mode=ro&uri=true"


def readonly_engine(db_path: str) -> Engine:
    """
    Create an engine for the SQLite database at *db_path* and check that it can be opened.

    SQLAlchemy connects lazily, so a trivial statement is executed here to surface a missing or
    unreadable file at construction time rather than on the first query.

    Raises:
        sqlalchemy.exc.SQLAlchemyError: If the database cannot be opened.
    """
    engine = create_engine(
        readonly_url(db_path),
        # Connections are handed to whichever thread checks them out of the pool.
        connect_args={"check_same_thread": False},
    )

    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except SQLAlchemyError:
        engine.dispose()
        raise

    logger.debug(msg=f"Opened read-only database {db_path}")
    return engine


def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autoflush=False, bind=engine)
