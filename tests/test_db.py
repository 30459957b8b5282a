"""
Tests del helper de base de datos
"""
from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy import inspect

from shelter.db import DATABASE_VERSION, PetDbHelper
from shelter.exceptions import DatabaseVersionError


def _user_version(helper):
    with helper.engine.connect() as conn:
        return conn.exec_driver_sql("PRAGMA user_version").scalar()


def test_creates_schema(db_helper):
    columns = {c["name"]: c for c in inspect(db_helper.engine).get_columns("pets")}
    assert list(columns) == ["_id", "name", "breed", "gender", "weight"]
    assert columns["_id"]["primary_key"]
    assert not columns["name"]["nullable"]
    assert columns["breed"]["nullable"]
    assert not columns["gender"]["nullable"]
    assert not columns["weight"]["nullable"]
    assert _user_version(db_helper) == DATABASE_VERSION


def test_weight_defaults_to_zero(db_helper):
    with db_helper.engine.begin() as conn:
        conn.exec_driver_sql("INSERT INTO pets (name, gender) VALUES ('Rex', 1)")
    with db_helper.engine.connect() as conn:
        assert conn.exec_driver_sql("SELECT weight FROM pets").scalar() == 0


def test_reopen_keeps_data(tmp_path):
    path = str(tmp_path / "shelter.db")
    first = PetDbHelper(path)
    with first.engine.begin() as conn:
        conn.exec_driver_sql("INSERT INTO pets (name, gender) VALUES ('Rex', 1)")
    first.close()

    second = PetDbHelper(path)
    with second.engine.connect() as conn:
        assert conn.exec_driver_sql("SELECT count(*) FROM pets").scalar() == 1
    second.close()


def test_upgrade_is_called_for_older_version(tmp_path):
    path = str(tmp_path / "shelter.db")
    first = PetDbHelper(path)
    first.engine
    first.close()

    calls = []

    class UpgradingHelper(PetDbHelper):
        def on_upgrade(self, conn, old_version, new_version):
            calls.append((old_version, new_version))

    helper = UpgradingHelper(path, version=DATABASE_VERSION + 1)
    assert _user_version(helper) == DATABASE_VERSION + 1
    assert calls == [(DATABASE_VERSION, DATABASE_VERSION + 1)]
    helper.close()


def test_newer_database_is_refused(tmp_path):
    path = str(tmp_path / "shelter.db")
    newer = PetDbHelper(path, version=DATABASE_VERSION + 1)
    newer.engine
    newer.close()

    with pytest.raises(DatabaseVersionError):
        PetDbHelper(path).engine


def test_concurrent_first_use_opens_once(tmp_path):
    created = []

    class CountingHelper(PetDbHelper):
        def on_create(self, conn):
            created.append(conn)
            super().on_create(conn)

    helper = CountingHelper(str(tmp_path / "shelter.db"))
    with ThreadPoolExecutor(max_workers=8) as pool:
        engines = list(pool.map(lambda _: helper.engine, range(16)))

    assert all(e is engines[0] for e in engines)
    assert len(created) == 1
    assert _user_version(helper) == DATABASE_VERSION
    helper.close()
