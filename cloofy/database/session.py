from sqlalchemy import Engine
from sqlalchemy.orm import sessionmaker


def build_sessionmaker(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


__all__ = ["build_sessionmaker"]
