"""
Database connection management for hanzidict.

The compiled dictionary is a single SQLite file read once at startup;
engines are cached per path.
"""

import threading
from pathlib import Path
from typing import Dict, Optional, Union

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from hanzidict.db.models import Base
from hanzidict.settings import DB_PATH

_engines: Dict[str, Engine] = {}
_engines_lock = threading.Lock()


def get_db_path() -> Optional[str]:
    """Return the configured dictionary path if the file exists, else None."""
    if DB_PATH.exists():
        return str(DB_PATH)
    return None


def _set_sqlite_pragmas(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.execute("PRAGMA cache_size = -64000")  # 64MB cache
    cursor.close()


def get_engine(db_path: Union[str, Path, None] = None) -> Engine:
    """
    Get (or create) the engine for a dictionary file.

    Args:
        db_path: Path to the SQLite file. Defaults to settings.DB_PATH.
    """
    path = str(Path(db_path) if db_path is not None else DB_PATH)

    with _engines_lock:
        engine = _engines.get(path)
        if engine is None:
            engine = create_engine(f"sqlite:///{path}")
            event.listen(engine, "connect", _set_sqlite_pragmas)
            _engines[path] = engine
        return engine


def get_session(db_path: Union[str, Path, None] = None) -> Session:
    """Open a new ORM session on the dictionary file."""
    factory = sessionmaker(bind=get_engine(db_path))
    return factory()


def create_schema(engine: Engine):
    """Create all dictionary tables."""
    Base.metadata.create_all(engine)


def dispose_engine(db_path: Union[str, Path, None] = None):
    """Close pooled connections for a dictionary file."""
    path = str(Path(db_path) if db_path is not None else DB_PATH)
    with _engines_lock:
        engine = _engines.pop(path, None)
    if engine is not None:
        engine.dispose()
