"""Database engine and session factory construction."""

from typing import Optional

from sqlalchemy import create_engine, event, Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from miubank.config.settings import Settings, get_settings

Base = declarative_base()

_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")

# Seconds a SQLite writer waits for the database lock before failing
SQLITE_BUSY_TIMEOUT = 30


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _disable_pysqlite_begin(dbapi_connection, connection_record) -> None:
    # pysqlite would otherwise defer BEGIN until the first write
    dbapi_connection.isolation_level = None


def _begin_immediate(conn) -> None:
    conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create an engine for the given URL.

    In-memory SQLite shares a single connection so every session sees the
    same database.

    SQLite ignores SELECT ... FOR UPDATE, so file databases open every
    transaction with BEGIN IMMEDIATE instead: the write lock is taken up
    front and concurrent ledger operations run one after another.
    """
    kwargs = {}
    in_memory = database_url in _MEMORY_URLS
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
        if in_memory:
            kwargs["poolclass"] = StaticPool
        else:
            connect_args["timeout"] = SQLITE_BUSY_TIMEOUT
        kwargs["connect_args"] = connect_args

    engine = create_engine(database_url, echo=echo, **kwargs)

    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        if not in_memory:
            event.listen(engine, "connect", _disable_pysqlite_begin)
            event.listen(engine, "begin", _begin_immediate)
    return engine


def create_engine_from_settings(settings: Optional[Settings] = None) -> Engine:
    """Create the engine configured by settings (database_url or the data dir file)."""
    settings = settings or get_settings()
    return create_db_engine(settings.get_database_url(), echo=settings.database_echo)


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create a session factory bound to the engine."""
    return sessionmaker(
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


def init_db(engine: Engine) -> None:
    """Initialize database tables."""
    from miubank.repositories.sqlalchemy import orm_models  # noqa: F401

    Base.metadata.create_all(bind=engine)
