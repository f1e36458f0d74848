"""
Shared test fixtures for the Flowl test suite.

Provides:
- In-memory SQLite database with all tables created
- Repository instances wired to the test database
- A fake MQTT wrapper that records publishes
- A Flask app/client with MQTT disabled and a throwaway database file
- Helper utilities for seeding test data

Usage:
    def test_example(plant_repo, seed):
        plant_id = seed.create_plant("Monstera")
        assert plant_repo.get_plant(plant_id) is not None
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any

import pytest

from app import create_app
from app.hardware.mqtt.connection_state import ConnectionState
from app.services.application.mqtt_publisher import PlantStatePublisher
from app.utils.time import iso_z, utc_now
from infrastructure.database.repositories.care_events import CareEventRepository
from infrastructure.database.repositories.locations import LocationRepository
from infrastructure.database.repositories.plants import PlantRepository
from infrastructure.database.sqlite_handler import SQLiteDatabaseHandler

# ---------------------------------------------------------------------------
# Logging: keep test output clean
# ---------------------------------------------------------------------------
logging.getLogger("infrastructure").setLevel(logging.WARNING)
logging.getLogger("app").setLevel(logging.WARNING)


# ========================== Database Fixtures ==============================


@pytest.fixture()
def db_handler():
    """In-memory SQLite database with all tables created.

    Each test gets a fresh database, no cross-test contamination.
    """
    handler = SQLiteDatabaseHandler(":memory:")
    handler.create_tables()
    yield handler
    handler.close()


# ========================== Repository Fixtures ============================


@pytest.fixture()
def plant_repo(db_handler):
    return PlantRepository(db_handler)


@pytest.fixture()
def location_repo(db_handler):
    return LocationRepository(db_handler)


@pytest.fixture()
def care_repo(db_handler):
    return CareEventRepository(db_handler)


# ========================== MQTT Fakes =====================================


class FakeWrapper:
    """Stands in for MQTTClientWrapper; records every publish."""

    def __init__(self, connected: bool = True, accept: bool = True):
        self.connection_state = ConnectionState(connected)
        self.accept = accept
        self.published: list[tuple[str, str, bool]] = []

    @property
    def connected(self) -> bool:
        return self.connection_state.is_connected()

    def publish(self, topic, payload, retain=True, qos=1) -> bool:
        self.published.append((topic, payload, retain))
        return self.accept

    def topics(self) -> list[str]:
        return [topic for topic, _, _ in self.published]

    def payloads_for(self, topic: str) -> list[str]:
        return [payload for t, payload, _ in self.published if t == topic]

    def reset(self) -> None:
        self.published.clear()


@pytest.fixture()
def fake_wrapper():
    return FakeWrapper()


@pytest.fixture()
def publisher(fake_wrapper):
    return PlantStatePublisher(fake_wrapper, "flowl")


# ========================== Flask App Fixtures =============================


@pytest.fixture()
def app(tmp_path):
    app = create_app(
        {
            "database_path": str(tmp_path / "flowl-test.db"),
            "static_dir": str(tmp_path / "static"),
            "mqtt_disabled": True,
            "log_dir": None,
        }
    )
    app.config["TESTING"] = True
    yield app
    app.config["CONTAINER"].shutdown()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def container(app):
    return app.config["CONTAINER"]


# ========================== Seed Data Helpers ==============================


def days_ago(days: int) -> str:
    """``Z``-suffixed timestamp *days* before now."""
    return iso_z(utc_now() - timedelta(days=days))


class SeedData:
    """Helper to create commonly needed test data.

    Usage in tests::

        def test_something(seed):
            location_id = seed.create_location("Kitchen")
            plant_id = seed.create_plant("Basil", location_id=location_id)
            seed.water(plant_id, days_ago(3))
    """

    def __init__(self, db_handler: SQLiteDatabaseHandler):
        self._db = db_handler

    def create_location(self, name: str = "Living Room") -> int:
        return self._db.insert_location(name)

    def create_plant(
        self,
        name: str = "Monstera",
        *,
        watering_interval_days: int = 7,
        location_id: int | None = None,
        **extra: Any,
    ) -> int:
        return self._db.insert_plant(
            name=name,
            icon="\U0001fab4",
            light_needs="indirect",
            watering_interval_days=watering_interval_days,
            location_id=location_id,
            **extra,
        )

    def add_event(self, plant_id: int, event_type: str, occurred_at: str, notes: str | None = None) -> int:
        return self._db.insert_care_event(plant_id, event_type, occurred_at, notes)

    def water(self, plant_id: int, occurred_at: str | None = None) -> int:
        return self.add_event(plant_id, "watered", occurred_at or iso_z())


@pytest.fixture()
def seed(db_handler):
    """SeedData helper for quickly populating the test database."""
    return SeedData(db_handler)
