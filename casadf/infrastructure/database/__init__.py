from .connection import (
    build_engine,
    build_session_factory,
    dispose_engine,
    drop_db,
    get_db,
    get_engine,
    get_session_factory,
    init_db,
    normalize_database_url,
)

__all__ = [
    "build_engine",
    "build_session_factory",
    "dispose_engine",
    "drop_db",
    "get_db",
    "get_engine",
    "get_session_factory",
    "init_db",
    "normalize_database_url",
]
