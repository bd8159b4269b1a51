import pytest
from sqlalchemy import inspect

from backend.app import db as db_module
from backend.app.settings import settings


@pytest.fixture
def fresh_engine_state(monkeypatch):
    monkeypatch.setattr(db_module, "_engine", None)
    monkeypatch.setattr(db_module, "_session_factory", None)


def test_missing_database_url_fails_at_construction(fresh_engine_state, monkeypatch):
    monkeypatch.setattr(settings, "database_url", None)
    with pytest.raises(db_module.DatastoreConfigError):
        db_module.get_engine()
    with pytest.raises(db_module.DatastoreConfigError):
        next(db_module.get_db())


def test_engine_is_created_once_and_schema_initialised(fresh_engine_state, monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "database_url", f"sqlite:///{tmp_path / 'app.db'}")
    engine = db_module.get_engine()
    assert db_module.get_engine() is engine

    db_module.init_schema()
    tables = set(inspect(engine).get_table_names())
    assert {"math_problem_sessions", "math_problem_submissions"} <= tables

    gen = db_module.get_db()
    session = next(gen)
    assert session.bind is engine
    gen.close()
    engine.dispose()
