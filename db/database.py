# db/database.py
import logging

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.orm import sessionmaker, scoped_session
from sqlalchemy.pool import StaticPool

from models.tables import Base

logger = logging.getLogger(__name__)


def make_engine(database_url: str, echo: bool = False):
    engine_args = {}
    if database_url.startswith("sqlite"):
        engine_args["connect_args"] = {"check_same_thread": False}
        # in-memory SQLite lives inside a single connection
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            engine_args["poolclass"] = StaticPool
    return create_engine(database_url, echo=echo, **engine_args)


def make_session_factory(engine):
    return scoped_session(
        sessionmaker(autoflush=False, bind=engine, expire_on_commit=False)
    )


def init_db(engine):
    """Create all tables if not exist (basic version)."""
    Base.metadata.create_all(bind=engine)


# -------------------------------------------------------------
#           SAFE AUTO-MIGRATION (CREATE / PATCH)
# -------------------------------------------------------------
def auto_migrate(engine):
    """
    Auto-creates missing tables AND auto-adds missing columns.
    Does NOT delete data. Added columns are nullable, whatever the model says.
    """
    # 1) Ensure every table exists
    Base.metadata.create_all(bind=engine)

    inspector = inspect(engine)
    quote = engine.dialect.identifier_preparer.quote

    # 2) Add missing columns inside a transaction (engine.begin ensures commit)
    with engine.begin() as conn:
        for table in Base.metadata.sorted_tables:
            existing_cols = {col["name"] for col in inspector.get_columns(table.name)}
            for column in table.columns:
                if column.name in existing_cols:
                    continue
                col_type = column.type.compile(dialect=engine.dialect)
                logger.info("[AUTO-MIGRATE] Adding missing column: %s.%s", table.name, column.name)
                conn.execute(text(
                    f"ALTER TABLE {quote(table.name)} ADD COLUMN {quote(column.name)} {col_type}"
                ))

    logger.info("[AUTO-MIGRATE] Schema verified/updated.")
