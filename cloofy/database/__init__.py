from cloofy.database.base import Base
from cloofy.database.engine import build_engine, is_sqlite_memory_url
from cloofy.database.session import build_sessionmaker

__all__ = ["Base", "build_engine", "build_sessionmaker", "is_sqlite_memory_url"]
