"""Relational store behaviour beyond the shared contract."""

from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy import inspect, text
from sqlalchemy.exc import IntegrityError

from db import create_db_engine
from domain.errors import StorageUnavailableError
from repositories.common import shares_one_connection
from repositories.sql import SqlPlayerStore

from conftest import make_sql_store


def test_schema_has_expected_columns(sql_store: SqlPlayerStore) -> None:
    inspector = inspect(sql_store.engine)
    columns = {column["name"]: column for column in inspector.get_columns("players")}

    assert set(columns) == {"name", "rating", "number_of_games"}
    assert all(not column["nullable"] for column in columns.values())
    assert inspector.get_pk_constraint("players")["constrained_columns"] == ["name"]


def test_ensure_schema_is_idempotent(sql_store: SqlPlayerStore) -> None:
    sql_store.add_player("ada")
    sql_store.ensure_schema()

    assert sql_store.get("ada").rating == 1000


def test_database_rejects_duplicate_names(sql_store: SqlPlayerStore) -> None:
    sql_store.add_player("ada")

    with pytest.raises(IntegrityError):
        with sql_store.engine.begin() as connection:
            connection.execute(
                text("INSERT INTO players (name, rating, number_of_games) VALUES ('ada', 900, 0)")
            )


def test_database_rejects_negative_game_count(sql_store: SqlPlayerStore) -> None:
    with pytest.raises(IntegrityError):
        with sql_store.engine.begin() as connection:
            connection.execute(
                text("INSERT INTO players (name, rating, number_of_games) VALUES ('ada', 1000, -1)")
            )


def test_players_persist_across_store_instances(tmp_path: Path) -> None:
    db_url = f"sqlite:///{tmp_path / 'ladder.db'}"
    first = make_sql_store(db_url)
    first.add_player("ada")
    first.close()

    second = make_sql_store(db_url)
    try:
        assert second.get("ada").rating == 1000
    finally:
        second.close()


def test_exhausted_pool_fails_fast_with_storage_unavailable(tmp_path: Path) -> None:
    store = make_sql_store(
        f"sqlite:///{tmp_path / 'ladder.db'}",
        pool_size=1,
        max_overflow=0,
        pool_timeout=0.1,
    )
    try:
        with store.engine.connect():
            with pytest.raises(StorageUnavailableError, match="during get"):
                store.get("ada")
    finally:
        store.close()


def test_unreachable_database_is_storage_unavailable(tmp_path: Path) -> None:
    store = SqlPlayerStore(create_db_engine(f"sqlite:///{tmp_path / 'missing' / 'ladder.db'}"))

    with pytest.raises(StorageUnavailableError) as excinfo:
        store.list_players()

    assert excinfo.value.operation == "list_players"
    assert excinfo.value.__cause__ is not None


def test_only_in_memory_databases_share_one_connection(tmp_path: Path) -> None:
    assert shares_one_connection(create_db_engine("sqlite://"))
    assert not shares_one_connection(create_db_engine(f"sqlite:///{tmp_path / 'ladder.db'}"))
