from __future__ import annotations

import logging
import sqlite3
from typing import Any

from app.domain.exceptions import RepositoryError

CARE_EVENT_SELECT = """
    SELECT ce.id, ce.plant_id, p.name AS plant_name, ce.event_type, ce.notes,
           ce.occurred_at, ce.created_at
    FROM care_events ce JOIN plants p ON ce.plant_id = p.id
"""


class CareEventOperations:
    """Care event helpers shared across database handlers."""

    def insert_care_event(
        self,
        plant_id: int,
        event_type: str,
        occurred_at: str,
        notes: str | None = None,
    ) -> int:
        try:
            with self.connection() as db:
                cursor = db.execute(
                    """
                    INSERT INTO care_events (plant_id, event_type, notes, occurred_at)
                    VALUES (?, ?, ?, ?)
                    """,
                    (plant_id, event_type, notes, occurred_at),
                )
                return int(cursor.lastrowid)
        except sqlite3.Error as exc:
            logging.error("Error inserting care event for plant %s: %s", plant_id, exc)
            raise RepositoryError("Failed to insert care event", detail={"error": str(exc)}) from exc

    def get_care_event(self, event_id: int) -> dict[str, Any] | None:
        try:
            row = self.get_db().execute(f"{CARE_EVENT_SELECT} WHERE ce.id = ?", (event_id,)).fetchone()
            return dict(row) if row else None
        except sqlite3.Error as exc:
            logging.error("Error fetching care event %s: %s", event_id, exc)
            raise RepositoryError("Failed to fetch care event", detail={"error": str(exc)}) from exc

    def get_care_events_for_plant(self, plant_id: int) -> list[dict[str, Any]]:
        try:
            rows = self.get_db().execute(
                f"{CARE_EVENT_SELECT} WHERE ce.plant_id = ? ORDER BY ce.occurred_at DESC, ce.id DESC",
                (plant_id,),
            ).fetchall()
            return [dict(row) for row in rows]
        except sqlite3.Error as exc:
            logging.error("Error fetching care events for plant %s: %s", plant_id, exc)
            raise RepositoryError("Failed to fetch care events", detail={"error": str(exc)}) from exc

    def get_care_events_page(
        self,
        limit: int,
        before: int | None = None,
        event_type: str | None = None,
    ) -> list[dict[str, Any]]:
        """Newest-first care events across all plants; fetches up to ``limit`` rows."""
        conditions: list[str] = []
        params: list[Any] = []
        if before is not None:
            conditions.append("ce.id < ?")
            params.append(before)
        if event_type is not None:
            conditions.append("ce.event_type = ?")
            params.append(event_type)

        query = CARE_EVENT_SELECT
        if conditions:
            query += " WHERE " + " AND ".join(conditions)
        query += " ORDER BY ce.occurred_at DESC, ce.id DESC LIMIT ?"
        params.append(limit)
        try:
            rows = self.get_db().execute(query, params).fetchall()
            return [dict(row) for row in rows]
        except sqlite3.Error as exc:
            logging.error("Error fetching care event page: %s", exc)
            raise RepositoryError("Failed to fetch care events", detail={"error": str(exc)}) from exc

    def delete_care_event(self, plant_id: int, event_id: int) -> bool:
        try:
            with self.connection() as db:
                cursor = db.execute(
                    "DELETE FROM care_events WHERE id = ? AND plant_id = ?", (event_id, plant_id)
                )
                return cursor.rowcount > 0
        except sqlite3.Error as exc:
            logging.error("Error deleting care event %s: %s", event_id, exc)
            raise RepositoryError("Failed to delete care event", detail={"error": str(exc)}) from exc

    def count_care_events(self) -> int:
        try:
            return int(self.get_db().execute("SELECT COUNT(*) FROM care_events").fetchone()[0])
        except sqlite3.Error as exc:
            logging.error("Error counting care events: %s", exc)
            raise RepositoryError("Failed to count care events", detail={"error": str(exc)}) from exc
