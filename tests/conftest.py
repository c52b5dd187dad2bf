import json
import logging
import os
import sqlite3

import pytest

ENV_KEYS = (
    "DB_USERNAME", "DB_PASSWORD", "DB_HOST", "DB_PORT", "DB_NAME",
    "MIGRATION_TABLE", "MIGRATION_FILE", "CLOUDWATCH_LOG_GROUP",
)

SAMPLE_RECORDS = [
    {"id": 1, "nama_agama": "Islam"},
    {"id": 2, "nama_agama": "Kristen"},
]


class FakeCursor:
    def __init__(self, conn):
        self.conn = conn
        self.rowcount = -1
        self.closed = False

    def execute(self, sql, params=None):
        if self.conn.fail_with is not None:
            raise self.conn.fail_with
        self.conn.executed.append((sql, list(params or [])))
        self.rowcount = self.conn.rowcount

    def close(self):
        self.closed = True


class FakeConnection:
    """Records every statement instead of talking to a database."""

    def __init__(self, rowcount=-1, fail_with=None, rollback_error=None):
        self.rowcount = rowcount
        self.fail_with = fail_with
        self.rollback_error = rollback_error
        self.executed = []
        self.commits = 0
        self.rollbacks = 0
        self.closed = False

    def cursor(self):
        return FakeCursor(self)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1
        if self.rollback_error is not None:
            raise self.rollback_error

    def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def clean_env():
    """Keep DB_* settings from the host or a loaded .env out of other tests."""
    saved = os.environ.copy()
    for key in ENV_KEYS:
        os.environ.pop(key, None)
    yield
    os.environ.clear()
    os.environ.update(saved)


@pytest.fixture(autouse=True)
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture()
def db_env(monkeypatch):
    monkeypatch.setenv("DB_USERNAME", "loader")
    monkeypatch.setenv("DB_PASSWORD", "s3cr@t")
    monkeypatch.setenv("DB_HOST", "db.internal")
    monkeypatch.setenv("DB_PORT", "5432")
    monkeypatch.setenv("DB_NAME", "reporting")


@pytest.fixture()
def fake_conn():
    return FakeConnection()


@pytest.fixture()
def sample_file(tmp_path):
    path = tmp_path / "agama.json"
    path.write_text(json.dumps(SAMPLE_RECORDS), encoding="utf-8")
    return path


@pytest.fixture()
def sqlite_conn():
    conn = sqlite3.connect(":memory:")
    conn.execute("CREATE TABLE tb_agama (id INTEGER, name TEXT)")
    conn.commit()
    yield conn
    conn.close()


@pytest.fixture()
def conn_factory():
    return FakeConnection
