"""
Service Organization
====================
**application/**
  Singleton services managed by ServiceContainer. One instance per application.
  Examples: PlantService, CareService, MQTTService, PlantStatePublisher

``container_builder`` wires them together; ``container`` owns their lifecycle.
"""
