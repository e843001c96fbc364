"""Tests for accounts/db/engine.py - engine construction and sessions."""

import contextlib
from types import SimpleNamespace

from sqlalchemy import inspect
from sqlmodel import Session

from accounts.core.settings import get_settings
from accounts.db.engine import create_db_engine, get_session, init_db


def test_create_db_engine_sqlite():
    settings = get_settings().model_copy(update={"database_url": "sqlite://"})

    engine = create_db_engine(settings)

    assert engine.dialect.name == "sqlite"
    engine.dispose()


def test_init_db_creates_tables():
    settings = get_settings().model_copy(update={"database_url": "sqlite://"})
    engine = create_db_engine(settings)

    init_db(engine)

    tables = set(inspect(engine).get_table_names())
    assert {"users", "user_profiles"} <= tables
    engine.dispose()


def test_get_session_uses_app_engine():
    """Test get_session() yields a session bound to app.state.engine."""
    engine = create_db_engine(get_settings())
    request = SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace(engine=engine)))

    gen = get_session(request)  # type: ignore[arg-type]
    session = next(gen)

    assert isinstance(session, Session)
    assert session.get_bind() is engine

    with contextlib.suppress(StopIteration):
        next(gen)
    engine.dispose()
