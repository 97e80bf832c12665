from contextlib import contextmanager
from typing import Generator

from sqlalchemy import event
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine, SQLModel, Session

from app.config import get_settings

DATABASE_URL = get_settings().database_url


def _build_engine(url: str):
    if url.startswith("sqlite"):
        # SQLite (testes/dev): conexão compartilhada entre threads do TestClient
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        sqlite_engine = create_engine(url, echo=False, **kwargs)

        # ON DELETE CASCADE só funciona no SQLite com foreign_keys ligado
        @event.listens_for(sqlite_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return sqlite_engine

    if url.startswith("postgresql"):
        try:
            import psycopg  # noqa: F401
        except ImportError:
            raise ImportError("psycopg não está instalado. Execute: pip install psycopg[binary]")

    return create_engine(url, echo=False, pool_pre_ping=True)


# Engine singleton
engine = _build_engine(DATABASE_URL)


def get_session() -> Generator[Session, None, None]:
    """Dependency do FastAPI para obter sessão do banco."""
    with Session(engine) as session:
        yield session


@contextmanager
def get_session_context() -> Generator[Session, None, None]:
    """Context manager para obter sessão do banco (uso fora de FastAPI Depends)."""
    with Session(engine) as session:
        yield session


def create_tables():
    """Cria todas as tabelas (útil para testes)."""
    import app.model  # noqa: F401  registra os modelos no metadata

    SQLModel.metadata.create_all(engine)


def drop_tables():
    """Remove todas as tabelas (útil para testes)."""
    import app.model  # noqa: F401

    SQLModel.metadata.drop_all(engine)
