"""
Workers module for background services.

This module contains:
- mqtt_reconciler: periodic sync of plant watering state to the MQTT broker
"""

__all__ = [
    "MQTTReconciler",
    "ReconciliationCache",
]

from app.workers.mqtt_reconciler import MQTTReconciler, ReconciliationCache
