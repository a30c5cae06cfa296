import functools

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from calculadora.core.config import get_settings

Base = declarative_base()


def _on_sqlite_connect(dbapi_connection, connection_record):
    # Let SQLAlchemy emit BEGIN itself so SAVEPOINT nests inside it
    dbapi_connection.isolation_level = None
    # SQLite ignores ON DELETE CASCADE / SET NULL unless this is on
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _on_sqlite_begin(conn):
    conn.exec_driver_sql("BEGIN")


def create_db_engine(database_url: str, **kwargs) -> Engine:
    """
    Create a SQLAlchemy engine for the given URL.

    SQLite connections get foreign key enforcement; PostgreSQL connections get
    a server-side statement timeout and a bounded pool checkout.
    """
    settings = get_settings()

    if database_url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        engine = create_engine(database_url, echo=False, **kwargs)
        event.listen(engine, "connect", _on_sqlite_connect)
        event.listen(engine, "begin", _on_sqlite_begin)
        return engine

    if database_url.startswith("postgresql"):
        kwargs.setdefault(
            "connect_args",
            {"options": f"-c statement_timeout={settings.DB_STATEMENT_TIMEOUT_MS}"},
        )
    kwargs.setdefault("pool_timeout", settings.DB_POOL_TIMEOUT)
    return create_engine(database_url, pool_pre_ping=True, echo=False, **kwargs)


@functools.lru_cache()
def get_engine() -> Engine:
    """
    Get SQLAlchemy engine (cached).

    This function lazily initializes the engine to avoid import-time side effects.
    The engine is created using DATABASE_URL from settings.
    """
    settings = get_settings()
    return create_db_engine(settings.DATABASE_URL)


@functools.lru_cache()
def get_sessionmaker():
    """
    Get SQLAlchemy sessionmaker (cached).

    This function lazily initializes the sessionmaker to avoid import-time side effects.
    """
    engine = get_engine()
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """
    Dependency generator for FastAPI to get database session.

    Yields a database session and ensures it's closed after use.
    """
    SessionLocal = get_sessionmaker()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(engine: Engine | None = None) -> None:
    """Create all tables (development and tests; production uses alembic)."""
    import calculadora.models  # noqa: F401  registers models on Base

    Base.metadata.create_all(bind=engine or get_engine())
