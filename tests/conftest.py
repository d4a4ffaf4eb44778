"""Shared fixtures: an in-memory SQLite connection with foreign keys on."""

import pytest
from sqlalchemy import create_engine, event


@pytest.fixture
def sqlite_conn():
    engine = create_engine("sqlite://")

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_conn, _record):
        dbapi_conn.execute("PRAGMA foreign_keys = ON")

    with engine.connect() as conn:
        yield conn
    engine.dispose()
