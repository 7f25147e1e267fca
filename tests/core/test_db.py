"""Tests for the startup schema sync and SQLite foreign keys."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.orm import configure_mappers
from sqlalchemy.pool import StaticPool

from biztime.core import db as db_module
from biztime.core.db import ensure_sqlite_dir, init_db, ping


def _memory_engine():
    return create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)


def test_init_db_creates_all_tables():
    engine = _memory_engine()
    init_db(engine)
    tables = set(inspect(engine).get_table_names())
    assert {"companies", "invoices", "industries", "companies_industries"} <= tables


def test_init_db_adds_missing_columns():
    engine = _memory_engine()
    with engine.begin() as conn:
        conn.execute(text("CREATE TABLE companies (code VARCHAR PRIMARY KEY, name VARCHAR NOT NULL)"))

    init_db(engine)

    columns = {col["name"] for col in inspect(engine).get_columns("companies")}
    assert "description" in columns


def test_sqlite_foreign_keys_are_enforced():
    engine = _memory_engine()
    with engine.connect() as conn:
        assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1


def test_ping():
    assert ping(_memory_engine()) is True


def test_get_db_rolls_back_and_closes_when_handler_raises(monkeypatch):
    session = MagicMock()
    monkeypatch.setattr(db_module, "SessionLocal", lambda: session)

    gen = db_module.get_db()
    assert next(gen) is session

    with pytest.raises(RuntimeError):
        gen.throw(RuntimeError("handler failed"))

    session.rollback.assert_called_once()
    session.close.assert_called_once()


def test_get_db_closes_without_rollback_on_success(monkeypatch):
    session = MagicMock()
    monkeypatch.setattr(db_module, "SessionLocal", lambda: session)

    gen = db_module.get_db()
    next(gen)
    with pytest.raises(StopIteration):
        next(gen)

    session.rollback.assert_not_called()
    session.close.assert_called_once()


def test_init_db_creates_sqlite_parent_directory(tmp_path):
    db_file = tmp_path / "nested" / "biztime.db"
    engine = create_engine(f"sqlite:///{db_file}")

    init_db(engine)

    assert db_file.parent.is_dir()
    assert "companies" in inspect(engine).get_table_names()
    engine.dispose()


def test_ensure_sqlite_dir_ignores_memory_and_other_backends(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    ensure_sqlite_dir("sqlite://")
    ensure_sqlite_dir("sqlite:///:memory:")
    ensure_sqlite_dir("postgresql://u:p@localhost/biztime")
    assert list(tmp_path.iterdir()) == []


def test_app_import_registers_every_mapper():
    import biztime.main  # noqa: F401

    configure_mappers()
    assert {"companies", "invoices", "industries", "companies_industries"} <= set(
        db_module.Base.metadata.tables
    )
