from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from app.config import AppConfig
from app.hardware.mqtt.connection_state import ConnectionState
from app.hardware.mqtt.mqtt_broker_wrapper import MQTTClientWrapper
from app.services.application.care_service import CareService
from app.services.application.location_service import LocationService
from app.services.application.mqtt_publisher import PlantStatePublisher
from app.services.application.mqtt_repair_service import MQTTRepairService
from app.services.application.mqtt_service import MQTTService
from app.services.application.plant_service import PlantService
from app.services.application.stats_service import StatsService
from app.services.container_builder import ContainerBuilder
from app.workers.mqtt_reconciler import MQTTReconciler
from infrastructure.database.repositories.care_events import CareEventRepository
from infrastructure.database.repositories.locations import LocationRepository
from infrastructure.database.repositories.plants import PlantRepository
from infrastructure.database.sqlite_handler import SQLiteDatabaseHandler

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Aggregate and manage core backend services."""

    config: AppConfig
    database: SQLiteDatabaseHandler
    plant_repo: PlantRepository
    location_repo: LocationRepository
    care_repo: CareEventRepository
    # MQTT (client, repair service and reconciler are None when disabled)
    connection_state: ConnectionState
    mqtt_client: Optional[MQTTClientWrapper]
    publisher: PlantStatePublisher
    repair_service: Optional[MQTTRepairService]
    reconciler: Optional[MQTTReconciler]
    mqtt_service: MQTTService
    # Application services
    plant_service: PlantService
    location_service: LocationService
    care_service: CareService
    stats_service: StatsService
    _shutdown_complete: bool = field(default=False, init=False, repr=False)

    @classmethod
    def build(cls, config: AppConfig, *, start_background: bool = False) -> "ServiceContainer":
        """Construct the service container with all dependencies.

        Args:
            config: Application configuration
            start_background: Whether to connect to the broker and start the reconciler
        """
        logger.info("Building ServiceContainer using ContainerBuilder...")
        builder = ContainerBuilder(config)
        container = cls(**builder.build(start_background=start_background))
        logger.info("ServiceContainer built successfully.")
        return container

    def shutdown(self) -> None:
        """Release external resources before process exit."""
        if self._shutdown_complete:
            return

        # Stop the reconciler first so it does not publish on a closing client
        if self.reconciler is not None:
            try:
                self.reconciler.cancel()
            except Exception as e:
                logger.warning(f"Failed to stop MQTT reconciler: {e}")

        if self.mqtt_client is not None:
            self.mqtt_client.disconnect()

        self.database.close()
        self._shutdown_complete = True
        logger.info("ServiceContainer shutdown complete.")
