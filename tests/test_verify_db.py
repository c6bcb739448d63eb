"""Tests for the database verification script."""

import pytest
from sqlalchemy.exc import OperationalError

from catalog_api.db import session as db_session
import verify_db


def test_reports_row_counts(engine, tenant, add_products, monkeypatch, capsys):
    monkeypatch.setattr(db_session, "engine", engine)
    add_products(2)

    verify_db.verify_database()

    out = capsys.readouterr().out
    assert "clients: 1 rows" in out
    assert "products: 2 rows" in out
    assert "users: 0 rows" in out
    assert "SUCCESS" in out


def test_store_failure_exits(engine, monkeypatch, capsys):
    def broken_init_db(bind=None):
        raise OperationalError("CREATE TABLE", {}, Exception("unable to open database file"))

    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "init_db", broken_init_db)

    with pytest.raises(SystemExit) as info:
        verify_db.verify_database()

    assert info.value.code == 1
    out = capsys.readouterr().out
    assert "FAILED" in out
    assert "unable to open database file" in out
