"""
    This module provides a wrapper class around the long-lived paho MQTT client.
    It owns the broker connection, keeps the shared ConnectionState in sync
    with the network loop, and exposes a publish method that never raises.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

import paho.mqtt.client as mqtt

from app.constants import Timeouts
from app.hardware.mqtt.client_factory import create_mqtt_client
from app.hardware.mqtt.connection_state import ConnectionState
from app.utils.time import utc_now

_mqtt_logger = logging.getLogger("flowl.mqtt")

KEEPALIVE_SECONDS = Timeouts.MQTT_KEEPALIVE
RECONNECT_DELAY_SECONDS = Timeouts.MQTT_RECONNECT_DELAY


@dataclass
class HealthStatus:
    """
    Tracks the health status of the MQTT client connection.
    """

    last_error: str | None = None
    last_error_time: datetime | None = None
    connection_attempts: int = 0
    successful_publishes: int = 0
    failed_publishes: int = 0

    @property
    def success_rate(self) -> float:
        """Calculate publish success rate percentage"""
        total_publishes = self.successful_publishes + self.failed_publishes
        if total_publishes == 0:
            return 0.0
        return (self.successful_publishes / total_publishes) * 100

    def record_error(self, error: object):
        """Record a connection or operation error."""
        self.last_error = str(error)
        self.last_error_time = utc_now()

    def increment_connection_attempts(self):
        self.connection_attempts += 1

    def record_publish_success(self):
        self.successful_publishes += 1

    def record_publish_failure(self):
        self.failed_publishes += 1

    def to_dict(self):
        """Return health status as a dictionary."""
        return {
            "last_error": self.last_error,
            "last_error_time": self.last_error_time.isoformat() if self.last_error_time else None,
            "connection_attempts": self.connection_attempts,
            "successful_publishes": self.successful_publishes,
            "failed_publishes": self.failed_publishes,
            "publish_success_rate": round(self.success_rate, 2),
        }


class MQTTClientWrapper:
    """
    Wrapper class for the process-wide MQTT connection.
    """

    def __init__(self, broker, port, client_id="", connection_state: ConnectionState | None = None):
        """
        Initializes the MQTT client wrapper.

        Args:
            broker (str): The MQTT broker address.
            port (int): The MQTT broker port.
            client_id (str, optional): The MQTT client ID. Defaults to "".
            connection_state (ConnectionState, optional): Shared flag updated
                from the network loop. A private one is created if omitted.
        """
        self.broker = broker
        self.port = port
        self.client_id = client_id
        self.connection_state = connection_state or ConnectionState()
        self.health_status = HealthStatus()
        self.client = create_mqtt_client(client_id=client_id)
        self.client.on_connect = self._on_connect
        self.client.on_disconnect = self._on_disconnect
        self._started = False

    @property
    def connected(self) -> bool:
        return self.connection_state.is_connected()

    def start(self):
        """
        Starts connecting in the background. paho keeps reconnecting on its own
        network thread until :meth:`disconnect` is called.
        """
        if self._started:
            return
        try:
            self.client.reconnect_delay_set(min_delay=RECONNECT_DELAY_SECONDS, max_delay=RECONNECT_DELAY_SECONDS)
            self.client.connect_async(self.broker, self.port, KEEPALIVE_SECONDS)
            self.client.loop_start()
            self._started = True
            self.health_status.increment_connection_attempts()
            _mqtt_logger.info("MQTT client connecting to %s:%s", self.broker, self.port)
        except Exception as e:
            _mqtt_logger.error("Error starting MQTT client for %s:%s: %s", self.broker, self.port, e)
            self.health_status.record_error(e)

    def _on_connect(self, client, userdata, flags, rc):
        if rc == 0:
            self.connection_state.mark_connected()
            _mqtt_logger.info("MQTT connected to %s:%s", self.broker, self.port)
        else:
            self.connection_state.mark_disconnected()
            self.health_status.record_error(f"connack rc={rc}")
            _mqtt_logger.warning("MQTT connection refused by %s:%s (rc=%s)", self.broker, self.port, rc)

    def _on_disconnect(self, client, userdata, rc):
        self.connection_state.mark_disconnected()
        if rc != 0:
            self.health_status.record_error(f"disconnect rc={rc}")
            self.health_status.increment_connection_attempts()
            _mqtt_logger.warning("MQTT connection lost (rc=%s); retrying in %ss", rc, RECONNECT_DELAY_SECONDS)
        else:
            _mqtt_logger.info("Disconnected from MQTT broker.")

    def disconnect(self):
        """
        Disconnects from the MQTT broker and stops the network loop.
        """
        if not self._started:
            return
        try:
            self.client.disconnect()
        except Exception as e:
            _mqtt_logger.warning("MQTT disconnect error: %s", e)
        finally:
            self.client.loop_stop()
            self.connection_state.mark_disconnected()
            self._started = False

    def publish(self, topic, payload, retain=True, qos=1) -> bool:
        """
        Publishes a message to the MQTT broker.

        Args:
            topic (str): The MQTT topic to publish to.
            payload (str | bytes): The message payload. Empty clears a retained topic.
            retain (bool): Whether the broker should retain the message.
            qos (int): Quality of service level.

        Returns:
            True if paho accepted the message, False otherwise. Never raises.
        """
        if not self.connected:
            _mqtt_logger.debug("MQTT client not connected. Dropping publish to %s", topic)
            return False
        try:
            msg_info = self.client.publish(topic, payload, qos=qos, retain=retain)
            if msg_info.rc == mqtt.MQTT_ERR_SUCCESS:
                self.health_status.record_publish_success()
                _mqtt_logger.debug("Published to %s: %s", topic, payload)
                return True
            self.health_status.record_publish_failure()
            _mqtt_logger.error("Failed to publish to %s. MQTT result code: %s", topic, msg_info.rc)
        except Exception as e:
            self.health_status.record_publish_failure()
            self.health_status.record_error(e)
            _mqtt_logger.error("Error publishing to MQTT topic %s: %s", topic, e)
        return False
