import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from flask import Flask

from infrastructure.database.ops.care_events import CareEventOperations
from infrastructure.database.ops.locations import LocationOperations
from infrastructure.database.ops.plants import PlantOperations

logger = logging.getLogger(__name__)

MEMORY_DATABASE = ":memory:"


class SQLiteDatabaseHandler(
    PlantOperations,
    LocationOperations,
    CareEventOperations,
):
    """Thread-safe SQLite handler decoupled from Flask globals."""

    def __init__(self, database_path: str) -> None:
        self._database_path = database_path
        self._local = threading.local()

        # Ensure the directory for the database file exists
        if database_path != MEMORY_DATABASE:
            db_path = Path(database_path)
            if not db_path.parent.exists():
                db_path.parent.mkdir(parents=True, exist_ok=True)
                logger.info(f"Created database directory: {db_path.parent}")

    @property
    def database_path(self) -> str:
        return self._database_path

    # --- Lifecycle ------------------------------------------------------------
    def init_app(self, app: Flask | None = None) -> None:
        if app is not None:
            app.teardown_appcontext(self.close_db)
        self.create_tables()

    def get_db(self) -> sqlite3.Connection:
        connection: Optional[sqlite3.Connection] = getattr(self._local, "connection", None)
        if connection is None:
            connection = self._open_connection()
            self._local.connection = connection
        return connection

    def _open_connection(self) -> sqlite3.Connection:
        connection = sqlite3.connect(self._database_path, check_same_thread=False)
        try:
            connection.row_factory = sqlite3.Row
            self._configure_connection(connection)
            return connection
        except Exception:
            connection.close()
            raise

    def _configure_connection(self, connection: sqlite3.Connection) -> None:
        """Configure SQLite connection.

        - foreign keys: cascade care events and null out deleted locations
        - WAL mode: readers (reconciler, API) do not block the writer
        - NORMAL synchronous: safe with WAL
        """
        connection.execute("PRAGMA foreign_keys=ON")
        if self._database_path != MEMORY_DATABASE:
            connection.execute("PRAGMA journal_mode=WAL")
        connection.execute("PRAGMA synchronous=NORMAL")
        connection.execute("PRAGMA temp_store=MEMORY")
        connection.commit()

    def close_db(self, _e: Optional[BaseException] = None) -> None:
        # In-memory databases live only as long as their connection.
        if self._database_path == MEMORY_DATABASE:
            return
        connection: Optional[sqlite3.Connection] = getattr(self._local, "connection", None)
        if connection is not None:
            connection.close()
            delattr(self._local, "connection")

    def close(self) -> None:
        connection: Optional[sqlite3.Connection] = getattr(self._local, "connection", None)
        if connection is not None:
            connection.close()
            delattr(self._local, "connection")

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        conn = self.get_db()
        try:
            yield conn
        except Exception:
            conn.rollback()
            raise
        else:
            conn.commit()

    # --- Schema ----------------------------------------------------------------
    def create_tables(self) -> None:
        """Creates the necessary tables in the database if they do not already exist."""
        try:
            with self.connection() as db:
                # Locations Table
                db.execute(
                    """
                    CREATE TABLE IF NOT EXISTS locations (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        name TEXT NOT NULL UNIQUE,
                        created_at TEXT NOT NULL DEFAULT (datetime('now'))
                    )
                    """
                )
                # Plants Table
                db.execute(
                    """
                    CREATE TABLE IF NOT EXISTS plants (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        name TEXT NOT NULL,
                        species TEXT,
                        icon TEXT NOT NULL DEFAULT '🪴',
                        location_id INTEGER,
                        watering_interval_days INTEGER NOT NULL DEFAULT 7,
                        light_needs TEXT NOT NULL DEFAULT 'indirect',
                        difficulty TEXT,
                        pet_safety TEXT,
                        growth_speed TEXT,
                        soil_type TEXT,
                        soil_moisture TEXT,
                        notes TEXT,
                        created_at TEXT NOT NULL DEFAULT (datetime('now')),
                        updated_at TEXT NOT NULL DEFAULT (datetime('now')),
                        FOREIGN KEY (location_id) REFERENCES locations(id) ON DELETE SET NULL
                    )
                    """
                )
                db.execute("CREATE INDEX IF NOT EXISTS idx_plants_location ON plants(location_id)")
                # Care Events Table
                db.execute(
                    """
                    CREATE TABLE IF NOT EXISTS care_events (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        plant_id INTEGER NOT NULL,
                        event_type TEXT NOT NULL,
                        notes TEXT,
                        occurred_at TEXT NOT NULL,
                        created_at TEXT NOT NULL DEFAULT (datetime('now')),
                        FOREIGN KEY (plant_id) REFERENCES plants(id) ON DELETE CASCADE
                    )
                    """
                )
                db.execute(
                    "CREATE INDEX IF NOT EXISTS idx_care_events_plant ON care_events(plant_id, event_type, occurred_at)"
                )
                db.execute("CREATE INDEX IF NOT EXISTS idx_care_events_occurred ON care_events(occurred_at)")
            logger.info("Database tables ready at %s", self._database_path)
        except sqlite3.Error as e:
            logger.error(f"Failed to create tables: {e}")
            raise
