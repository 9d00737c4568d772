import re
from decimal import Decimal
from typing import Any, Iterable, Sequence

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, Result
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

# Create Base class for models
Base = declarative_base()

_PLACEHOLDER = re.compile(r"\$(\d+)")


def create_db_engine(database_url: str) -> Engine:
    """
    Build the SQLAlchemy engine for the configured store.

    PostgreSQL gets a sized connection pool. SQLite (used in tests and local
    runs) gets foreign key enforcement switched on so referential rules match
    PostgreSQL, and in-memory URLs share one connection across threads.
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(database_url, **kwargs)

        @event.listens_for(engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_engine(
        database_url,
        pool_pre_ping=True,  # Verify connections before using them
        pool_size=10,
        max_overflow=20
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request):
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def init_db(engine: Engine) -> None:
    """
    Create any missing tables.

    Alembic owns the schema in deployed environments; this only fills in
    tables that do not exist yet, which is what local SQLite runs need.
    """
    from jobly.models import company, job, user  # noqa: F401  # register models
    Base.metadata.create_all(bind=engine)


def _bindable(value: Any, dialect_name: str) -> Any:
    # sqlite3 cannot bind Decimal; SQLAlchemy's own Numeric handling uses float there too
    if isinstance(value, Decimal) and dialect_name == "sqlite":
        return float(value)
    return value


def execute_positional(
    db: Session,
    sql: str,
    values: Sequence[Any],
    columns: Iterable = (),
) -> Result:
    """
    Execute a statement written with $1, $2, ... placeholders.

    Placeholders are rewritten to named binds (:p1, :p2, ...) so the same SQL
    runs on every SQLAlchemy dialect. When ``columns`` is given the result rows
    are typed from those table columns, so RETURNING clauses go through the
    same type processing as ORM reads.
    """
    stmt = text(_PLACEHOLDER.sub(r":p\1", sql))
    columns = list(columns)
    if columns:
        stmt = stmt.columns(*columns)
    dialect_name = db.get_bind().dialect.name
    params = {f"p{idx}": _bindable(value, dialect_name) for idx, value in enumerate(values, start=1)}
    return db.execute(stmt, params)
