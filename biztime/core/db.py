import logging
import os
import sqlite3

from sqlalchemy import create_engine, event, inspect, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker

from biztime.core.config import settings

logger = logging.getLogger(__name__)

# ----------------------------------------------------
# 1. DATABASE URL
# ----------------------------------------------------
DATABASE_URL = settings.database_url


def ensure_sqlite_dir(url) -> None:
    """Creates the parent directory of a file-backed SQLite database."""
    url = make_url(url)
    if not url.drivername.startswith("sqlite"):
        return
    if url.database and url.database != ":memory:":
        os.makedirs(os.path.dirname(os.path.abspath(url.database)), exist_ok=True)


# ----------------------------------------------------
# 2. CREATE ENGINE
# ----------------------------------------------------
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=connect_args, pool_pre_ping=True)


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores REFERENCES / ON DELETE CASCADE unless asked
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# ----------------------------------------------------
# 3. SESSION FACTORY
# ----------------------------------------------------
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# ----------------------------------------------------
# 4. BASE CLASS FOR ALL MODELS
# ----------------------------------------------------
Base = declarative_base()


# ----------------------------------------------------
# 5. DEPENDENCY FOR FASTAPI
# ----------------------------------------------------
def get_db():
    """
    FastAPI dependency — yields a DB session for one request.

    Anything raised while the request holds the session rolls it back
    before the error reaches the error handlers.
    """
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def ping(bind=None) -> bool:
    try:
        with (bind or engine).connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error("Database ping failed: %s", e)
        return False


# ----------------------------------------------------
# 6. STARTUP SCHEMA SYNC
# ----------------------------------------------------
def init_db(bind=None):
    """
    Brings the schema up to date with the models:
    - Missing tables are created.
    - Missing columns are added with ALTER TABLE ... ADD COLUMN.

    Column drops / type changes are left to alembic.
    """
    bind = bind or engine
    ensure_sqlite_dir(bind.url)

    # Registers every model on Base.metadata
    from biztime.models import company_model, industry_model, invoice_model  # noqa: F401

    Base.metadata.create_all(bind=bind)

    inspector = inspect(bind)
    for table in Base.metadata.sorted_tables:
        existing_cols = {col["name"] for col in inspector.get_columns(table.name)}

        for col_name, col_obj in table.columns.items():
            if col_name in existing_cols:
                continue
            col_type = col_obj.type.compile(bind.dialect)
            alter = f"ALTER TABLE {table.name} ADD COLUMN {col_name} {col_type}"
            logger.info("[DB][MIGRATION] %s", alter)
            with bind.begin() as conn:
                conn.execute(text(alter))

    logger.info("[DB] Schema ready (%s)", bind.url.render_as_string(hide_password=True))
