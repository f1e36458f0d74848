from __future__ import annotations

import logging
import sqlite3
from typing import Any

from app.domain.exceptions import RepositoryError

PLANT_SELECT = """
    SELECT p.id, p.name, p.species, p.icon, p.location_id, l.name AS location_name,
           p.watering_interval_days,
           (SELECT MAX(occurred_at) FROM care_events
             WHERE plant_id = p.id AND event_type = 'watered') AS last_watered,
           p.light_needs, p.difficulty, p.pet_safety, p.growth_speed,
           p.soil_type, p.soil_moisture, p.notes, p.created_at, p.updated_at
    FROM plants p LEFT JOIN locations l ON p.location_id = l.id
"""

PLANT_COLUMNS = (
    "name",
    "species",
    "icon",
    "location_id",
    "watering_interval_days",
    "light_needs",
    "difficulty",
    "pet_safety",
    "growth_speed",
    "soil_type",
    "soil_moisture",
    "notes",
)


class PlantOperations:
    """Plant table helpers shared across database handlers."""

    def insert_plant(self, **fields: Any) -> int:
        columns = [key for key in PLANT_COLUMNS if key in fields]
        placeholders = ", ".join("?" for _ in columns)
        query = f"INSERT INTO plants ({', '.join(columns)}) VALUES ({placeholders})"  # nosec B608: PLANT_COLUMNS allowlist
        try:
            with self.connection() as db:
                cursor = db.execute(query, [fields[key] for key in columns])
                return int(cursor.lastrowid)
        except sqlite3.Error as exc:
            logging.error("Error inserting plant: %s", exc)
            raise RepositoryError("Failed to insert plant", detail={"error": str(exc)}) from exc

    def get_plant(self, plant_id: int) -> dict[str, Any] | None:
        try:
            row = self.get_db().execute(f"{PLANT_SELECT} WHERE p.id = ?", (plant_id,)).fetchone()
            return dict(row) if row else None
        except sqlite3.Error as exc:
            logging.error("Error fetching plant %s: %s", plant_id, exc)
            raise RepositoryError("Failed to fetch plant", detail={"error": str(exc)}) from exc

    def get_all_plants(self) -> list[dict[str, Any]]:
        try:
            rows = self.get_db().execute(f"{PLANT_SELECT} ORDER BY p.name").fetchall()
            return [dict(row) for row in rows]
        except sqlite3.Error as exc:
            logging.error("Error fetching plants: %s", exc)
            raise RepositoryError("Failed to fetch plants", detail={"error": str(exc)}) from exc

    def update_plant(self, plant_id: int, **fields: Any) -> bool:
        """Update a plant row with the provided fields. None values are written as NULL."""
        updates: list[str] = []
        values: list[Any] = []
        for key, value in fields.items():
            if key not in PLANT_COLUMNS:
                continue
            updates.append(f"{key} = ?")
            values.append(value)
        updates.append("updated_at = datetime('now')")
        values.append(plant_id)
        query = f"UPDATE plants SET {', '.join(updates)} WHERE id = ?"  # nosec B608: PLANT_COLUMNS allowlist
        try:
            with self.connection() as db:
                return db.execute(query, values).rowcount > 0
        except sqlite3.Error as exc:
            logging.error("Error updating plant %s: %s", plant_id, exc)
            raise RepositoryError("Failed to update plant", detail={"error": str(exc)}) from exc

    def touch_plant(self, plant_id: int) -> bool:
        try:
            with self.connection() as db:
                cursor = db.execute("UPDATE plants SET updated_at = datetime('now') WHERE id = ?", (plant_id,))
                return cursor.rowcount > 0
        except sqlite3.Error as exc:
            logging.error("Error touching plant %s: %s", plant_id, exc)
            raise RepositoryError("Failed to update plant", detail={"error": str(exc)}) from exc

    def delete_plant(self, plant_id: int) -> bool:
        try:
            with self.connection() as db:
                return db.execute("DELETE FROM plants WHERE id = ?", (plant_id,)).rowcount > 0
        except sqlite3.Error as exc:
            logging.error("Error deleting plant %s: %s", plant_id, exc)
            raise RepositoryError("Failed to delete plant", detail={"error": str(exc)}) from exc

    def count_plants(self) -> int:
        try:
            return int(self.get_db().execute("SELECT COUNT(*) FROM plants").fetchone()[0])
        except sqlite3.Error as exc:
            logging.error("Error counting plants: %s", exc)
            raise RepositoryError("Failed to count plants", detail={"error": str(exc)}) from exc

    # --- Sync queries -------------------------------------------------------
    def get_plant_ids(self) -> set[int]:
        try:
            rows = self.get_db().execute("SELECT id FROM plants").fetchall()
            return {int(row[0]) for row in rows}
        except sqlite3.Error as exc:
            logging.error("Error fetching plant ids: %s", exc)
            raise RepositoryError("Failed to fetch plant ids", detail={"error": str(exc)}) from exc

    def get_plants_for_sync(self) -> list[dict[str, Any]]:
        try:
            rows = self.get_db().execute(
                """
                SELECT p.id, p.name, p.watering_interval_days,
                       (SELECT MAX(occurred_at) FROM care_events
                         WHERE plant_id = p.id AND event_type = 'watered') AS last_watered
                FROM plants p
                ORDER BY p.id
                """
            ).fetchall()
            return [dict(row) for row in rows]
        except sqlite3.Error as exc:
            logging.error("Error fetching plants for sync: %s", exc)
            raise RepositoryError("Failed to fetch plants for sync", detail={"error": str(exc)}) from exc
