import sqlite3

import pytest

from app.domain.exceptions import RepositoryError
from infrastructure.database.sqlite_handler import SQLiteDatabaseHandler


def test_create_tables_is_repeatable(db_handler):
    db_handler.create_tables()
    tables = {
        row[0] for row in db_handler.get_db().execute("SELECT name FROM sqlite_master WHERE type = 'table'")
    }
    assert {"plants", "locations", "care_events"} <= tables


def test_foreign_keys_are_enforced(db_handler):
    with pytest.raises(RepositoryError):
        db_handler.insert_care_event(404, "watered", "2026-01-01T00:00:00Z")


def test_connection_rolls_back_on_error(db_handler, seed, plant_repo):
    seed.create_plant("Fern")

    with pytest.raises(sqlite3.IntegrityError):
        with db_handler.connection() as conn:
            conn.execute("DELETE FROM plants")
            conn.execute("INSERT INTO locations (name) VALUES (NULL)")

    assert plant_repo.count_plants() == 1


def test_file_database_creates_parent_directory(tmp_path):
    path = tmp_path / "nested" / "dir" / "flowl.db"
    handler = SQLiteDatabaseHandler(str(path))
    handler.init_app()

    try:
        assert path.exists()
        mode = handler.get_db().execute("PRAGMA journal_mode").fetchone()[0]
        assert mode.lower() == "wal"
    finally:
        handler.close()


def test_plant_ids_and_sync_rows(seed, plant_repo):
    first = seed.create_plant("Fern", watering_interval_days=4)
    second = seed.create_plant("Ivy")
    seed.water(first, "2026-01-01T00:00:00Z")

    assert plant_repo.list_plant_ids() == {first, second}
    rows = plant_repo.list_plants_for_sync()
    assert rows[0] == {
        "id": first,
        "name": "Fern",
        "watering_interval_days": 4,
        "last_watered": "2026-01-01T00:00:00Z",
    }
    assert rows[1]["last_watered"] is None
