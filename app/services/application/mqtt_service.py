"""
MQTT Service
============
Facade the API layer uses for broker status and on-demand repair.

Status reads the shared ConnectionState, so it may be one tick stale.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from app.domain.exceptions import ConflictError, ServiceUnavailableError
from app.enums.common import MQTTStatus
from app.hardware.mqtt.connection_state import ConnectionState
from app.hardware.mqtt.mqtt_broker_wrapper import MQTTClientWrapper
from app.services.application.mqtt_repair_service import MQTTRepairService, RepairResult

logger = logging.getLogger(__name__)


class MQTTService:
    def __init__(
        self,
        *,
        enabled: bool,
        host: str,
        port: int,
        prefix: str,
        connection_state: ConnectionState,
        client: Optional[MQTTClientWrapper] = None,
        repair_service: Optional[MQTTRepairService] = None,
    ):
        self.enabled = enabled
        self.host = host
        self.port = port
        self.prefix = prefix
        self.connection_state = connection_state
        self.client = client
        self.repair_service = repair_service

    @property
    def broker_address(self) -> str:
        return f"{self.host}:{self.port}"

    def get_status(self) -> Dict[str, Any]:
        if not self.enabled:
            return {
                "status": MQTTStatus.DISABLED.value,
                "enabled": False,
                "connected": False,
                "broker": None,
                "topic_prefix": None,
            }
        connected = self.connection_state.is_connected()
        status = {
            "status": (MQTTStatus.CONNECTED if connected else MQTTStatus.DISCONNECTED).value,
            "enabled": True,
            "connected": connected,
            "broker": self.broker_address,
            "topic_prefix": self.prefix,
        }
        if self.client is not None:
            status["health"] = self.client.health_status.to_dict()
        return status

    def trigger_repair(self) -> RepairResult:
        """
        Clear orphaned retained topics and republish every plant.

        Raises:
            ConflictError: MQTT is disabled.
            ServiceUnavailableError: not connected, or no client/repair service.
        """
        if not self.enabled:
            raise ConflictError("MQTT is disabled")
        if not self.connection_state.is_connected():
            raise ServiceUnavailableError("MQTT is not connected")
        if self.client is None or self.repair_service is None:
            raise ServiceUnavailableError("MQTT client unavailable")
        logger.info("MQTT repair requested")
        return self.repair_service.repair()
