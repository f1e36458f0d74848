"""Shared broker connectivity flag.

Written only by the MQTT network thread (connect/disconnect callbacks) and
read by API handlers and the reconciler. A ``threading.Event`` gives atomic
reads and writes; readers may observe a value that is one tick stale.
"""

from __future__ import annotations

import threading


class ConnectionState:
    """Connected/disconnected flag injected wherever broker state matters."""

    def __init__(self, connected: bool = False) -> None:
        self._event = threading.Event()
        if connected:
            self._event.set()

    def is_connected(self) -> bool:
        return self._event.is_set()

    def mark_connected(self) -> None:
        self._event.set()

    def mark_disconnected(self) -> None:
        self._event.clear()

    def __repr__(self) -> str:
        return f"ConnectionState(connected={self.is_connected()})"
