import re
from typing import Any, Sequence

from sqlalchemy import create_engine, text
from sqlalchemy.sql.elements import TextClause
from sqlalchemy.engine import Result
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import Session, sessionmaker
from app.core.config import settings

_engine_kwargs = {"pool_pre_ping": True}
if settings.DATABASE_URL.startswith("sqlite"):
    _engine_kwargs["connect_args"] = {"check_same_thread": False}
else:
    _engine_kwargs.update(pool_size=10, max_overflow=20)

# Create SQLAlchemy engine
engine = create_engine(settings.DATABASE_URL, **_engine_kwargs)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()

_PLACEHOLDER = re.compile(r"\$(\d+)")
_ILIKE = re.compile(r"\bILIKE\b", re.IGNORECASE)


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """
    Initialize database.

    Schema is owned by Alembic ("alembic upgrade head"); this only makes sure
    the models are imported and registered on Base.metadata.
    """
    from app.models import company, job, user  # noqa: F401


def to_named_binds(sql: str, values: Sequence[Any]) -> tuple:
    """
    Rewrite $1, $2, ... placeholders into SQLAlchemy binds :p1, :p2, ...

    Returns:
        (sql, params) ready for session.execute(text(sql), params)

    Raises:
        ValueError: If a placeholder has no matching value
    """
    def _replace(match):
        position = int(match.group(1))
        if position < 1 or position > len(values):
            raise ValueError(f"No value bound for placeholder ${position}")
        return f":p{position}"

    named_sql = _PLACEHOLDER.sub(_replace, sql)
    params = {f"p{idx}": value for idx, value in enumerate(values, start=1)}
    return named_sql, params


def positional_text(db: Session, sql: str, values: Sequence[Any] = ()) -> TextClause:
    """
    Turn SQL written with positional placeholders into a bound text() clause.

    SQLite has no ILIKE; its LIKE is already case-insensitive for ASCII,
    so ILIKE is rewritten there.
    """
    named_sql, params = to_named_binds(sql, values)
    if db.get_bind().dialect.name == "sqlite":
        named_sql = _ILIKE.sub("LIKE", named_sql)
    return text(named_sql).bindparams(**params)


def execute_positional(db: Session, sql: str, values: Sequence[Any] = ()) -> Result:
    """Execute SQL written with positional placeholders ($1, $2, ...)."""
    return db.execute(positional_text(db, sql, values))
