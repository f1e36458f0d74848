"""
Container Builder
=================

Builds the service container subsystem by subsystem: infrastructure
(database and repositories), MQTT (broker connection, publisher, repair,
reconciler) and the application services the blueprints use.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from app.config import AppConfig
from app.hardware.mqtt.client_factory import build_client_id
from app.hardware.mqtt.connection_state import ConnectionState
from app.hardware.mqtt.mqtt_broker_wrapper import MQTTClientWrapper
from app.services.application.care_service import CareService
from app.services.application.location_service import LocationService
from app.services.application.mqtt_publisher import PlantStatePublisher
from app.services.application.mqtt_repair_service import MQTTRepairService
from app.services.application.mqtt_service import MQTTService
from app.services.application.plant_service import PlantService
from app.services.application.stats_service import StatsService
from app.workers.mqtt_reconciler import MQTTReconciler
from infrastructure.database.repositories.care_events import CareEventRepository
from infrastructure.database.repositories.locations import LocationRepository
from infrastructure.database.repositories.plants import PlantRepository
from infrastructure.database.sqlite_handler import SQLiteDatabaseHandler

logger = logging.getLogger(__name__)


@dataclass
class InfrastructureComponents:
    """Infrastructure layer components (database, repos)."""

    database: SQLiteDatabaseHandler
    plant_repo: PlantRepository
    location_repo: LocationRepository
    care_repo: CareEventRepository


@dataclass
class MQTTComponents:
    """Broker connection and everything that publishes through it."""

    connection_state: ConnectionState
    mqtt_client: MQTTClientWrapper | None
    publisher: PlantStatePublisher
    repair_service: MQTTRepairService | None
    reconciler: MQTTReconciler | None
    mqtt_service: MQTTService


@dataclass
class ServiceComponents:
    """Application services used by the blueprints."""

    plant_service: PlantService
    location_service: LocationService
    care_service: CareService
    stats_service: StatsService


class ContainerBuilder:
    """
    Builder for constructing the service container.

    Each method constructs one subsystem so it can be built and tested on its own.
    """

    def __init__(self, config: AppConfig):
        """Initialize builder with configuration."""
        self.config = config

    def build_infrastructure(self) -> InfrastructureComponents:
        """
        Build infrastructure layer (database, repositories).

        Returns:
            InfrastructureComponents with the database and its repositories
        """
        logger.info("Building infrastructure components...")

        database = SQLiteDatabaseHandler(self.config.database_path)
        database.init_app(None)

        logger.info("✓ Infrastructure components initialized")
        return InfrastructureComponents(
            database=database,
            plant_repo=PlantRepository(database),
            location_repo=LocationRepository(database),
            care_repo=CareEventRepository(database),
        )

    def build_mqtt_components(self, infra: InfrastructureComponents) -> MQTTComponents:
        """
        Build MQTT components. When MQTT is disabled only the status facade
        and a no-op publisher exist; no client, repair service or reconciler.
        """
        logger.info("Building MQTT components...")
        config = self.config
        connection_state = ConnectionState()
        mqtt_client: MQTTClientWrapper | None = None
        repair_service: MQTTRepairService | None = None
        reconciler: MQTTReconciler | None = None

        if config.mqtt_enabled:
            mqtt_client = MQTTClientWrapper(
                broker=config.mqtt_host,
                port=config.mqtt_port,
                client_id=build_client_id(config.mqtt_topic_prefix),
                connection_state=connection_state,
            )
            publisher = PlantStatePublisher(mqtt_client, config.mqtt_topic_prefix)
            repair_service = MQTTRepairService(
                plant_repo=infra.plant_repo,
                publisher=publisher,
                host=config.mqtt_host,
                port=config.mqtt_port,
                prefix=config.mqtt_topic_prefix,
                idle_timeout=config.mqtt_discovery_timeout,
            )
            reconciler = MQTTReconciler(
                plant_repo=infra.plant_repo,
                publisher=publisher,
                connection_state=connection_state,
                interval_seconds=config.mqtt_sync_interval,
            )
            logger.info("✓ MQTT components initialized (%s:%s)", config.mqtt_host, config.mqtt_port)
        else:
            publisher = PlantStatePublisher(None, config.mqtt_topic_prefix)
            logger.info("MQTT disabled, skipping MQTT components")

        mqtt_service = MQTTService(
            enabled=config.mqtt_enabled,
            host=config.mqtt_host,
            port=config.mqtt_port,
            prefix=config.mqtt_topic_prefix,
            connection_state=connection_state,
            client=mqtt_client,
            repair_service=repair_service,
        )
        return MQTTComponents(
            connection_state=connection_state,
            mqtt_client=mqtt_client,
            publisher=publisher,
            repair_service=repair_service,
            reconciler=reconciler,
            mqtt_service=mqtt_service,
        )

    def build_services(self, infra: InfrastructureComponents, mqtt: MQTTComponents) -> ServiceComponents:
        return ServiceComponents(
            plant_service=PlantService(
                plant_repo=infra.plant_repo,
                location_repo=infra.location_repo,
                care_repo=infra.care_repo,
                publisher=mqtt.publisher if mqtt.mqtt_client is not None else None,
            ),
            location_service=LocationService(infra.location_repo),
            care_service=CareService(infra.care_repo, infra.plant_repo),
            stats_service=StatsService(infra.plant_repo, infra.care_repo),
        )

    def build(self, *, start_background: bool = False) -> dict[str, Any]:
        """
        Build the complete service container.

        Args:
            start_background: Connect to the broker and start the reconciler.

        Returns:
            Dictionary with all components for ServiceContainer construction
        """
        infra = self.build_infrastructure()
        mqtt = self.build_mqtt_components(infra)
        services = self.build_services(infra, mqtt)

        if start_background and mqtt.mqtt_client is not None:
            mqtt.mqtt_client.start()
            if mqtt.reconciler is not None:
                mqtt.reconciler.start()

        return {
            "config": self.config,
            **vars(infra),
            **vars(mqtt),
            **vars(services),
        }
