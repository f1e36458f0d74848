from __future__ import annotations

import logging
import sqlite3
from typing import Any

from app.domain.exceptions import RepositoryError


class LocationOperations:
    """Location table helpers shared across database handlers."""

    def insert_location(self, name: str) -> int:
        try:
            with self.connection() as db:
                cursor = db.execute("INSERT INTO locations (name) VALUES (?)", (name,))
                return int(cursor.lastrowid)
        except sqlite3.Error as exc:
            logging.error("Error inserting location %r: %s", name, exc)
            raise RepositoryError("Failed to insert location", detail={"error": str(exc)}) from exc

    def get_location(self, location_id: int) -> dict[str, Any] | None:
        try:
            row = self.get_db().execute(
                "SELECT id, name FROM locations WHERE id = ?", (location_id,)
            ).fetchone()
            return dict(row) if row else None
        except sqlite3.Error as exc:
            logging.error("Error fetching location %s: %s", location_id, exc)
            raise RepositoryError("Failed to fetch location", detail={"error": str(exc)}) from exc

    def find_location_id_by_name(self, name: str, exclude_id: int | None = None) -> int | None:
        query = "SELECT id FROM locations WHERE name = ?"
        params: list[Any] = [name]
        if exclude_id is not None:
            query += " AND id != ?"
            params.append(exclude_id)
        try:
            row = self.get_db().execute(query, params).fetchone()
            return int(row[0]) if row else None
        except sqlite3.Error as exc:
            logging.error("Error looking up location %r: %s", name, exc)
            raise RepositoryError("Failed to look up location", detail={"error": str(exc)}) from exc

    def get_all_locations(self) -> list[dict[str, Any]]:
        try:
            rows = self.get_db().execute("SELECT id, name FROM locations ORDER BY name").fetchall()
            return [dict(row) for row in rows]
        except sqlite3.Error as exc:
            logging.error("Error fetching locations: %s", exc)
            raise RepositoryError("Failed to fetch locations", detail={"error": str(exc)}) from exc

    def rename_location(self, location_id: int, name: str) -> bool:
        try:
            with self.connection() as db:
                cursor = db.execute("UPDATE locations SET name = ? WHERE id = ?", (name, location_id))
                return cursor.rowcount > 0
        except sqlite3.Error as exc:
            logging.error("Error renaming location %s: %s", location_id, exc)
            raise RepositoryError("Failed to update location", detail={"error": str(exc)}) from exc

    def delete_location(self, location_id: int) -> bool:
        """Delete a location; plants in it keep existing with a NULL location."""
        try:
            with self.connection() as db:
                db.execute("UPDATE plants SET location_id = NULL WHERE location_id = ?", (location_id,))
                cursor = db.execute("DELETE FROM locations WHERE id = ?", (location_id,))
                return cursor.rowcount > 0
        except sqlite3.Error as exc:
            logging.error("Error deleting location %s: %s", location_id, exc)
            raise RepositoryError("Failed to delete location", detail={"error": str(exc)}) from exc
