from types import SimpleNamespace
from unittest.mock import patch

import paho.mqtt.client as mqtt

from app.hardware.mqtt.connection_state import ConnectionState
from app.hardware.mqtt.mqtt_broker_wrapper import RECONNECT_DELAY_SECONDS, MQTTClientWrapper


class DummyClient:
    def __init__(self, publish_rc=0):
        self.on_connect = None
        self.on_disconnect = None
        self.publish_rc = publish_rc
        self.published = []
        self.calls = []

    def reconnect_delay_set(self, min_delay, max_delay):
        self.calls.append(("reconnect_delay_set", min_delay, max_delay))

    def connect_async(self, host, port, keepalive):
        self.calls.append(("connect_async", host, port, keepalive))

    def loop_start(self):
        self.calls.append(("loop_start",))

    def loop_stop(self):
        self.calls.append(("loop_stop",))

    def disconnect(self):
        self.calls.append(("disconnect",))

    def publish(self, topic, payload, qos=0, retain=False):
        self.published.append((topic, payload, qos, retain))
        return SimpleNamespace(rc=self.publish_rc)


def build_wrapper(dummy_client: DummyClient, state: ConnectionState | None = None) -> MQTTClientWrapper:
    with patch(
        "app.hardware.mqtt.mqtt_broker_wrapper.create_mqtt_client",
        return_value=dummy_client,
    ):
        wrapper = MQTTClientWrapper(broker="test", port=1883, connection_state=state)
    return wrapper


def test_start_connects_asynchronously_with_fixed_reconnect_delay():
    dummy = DummyClient()
    wrapper = build_wrapper(dummy)

    wrapper.start()
    wrapper.start()  # second call is a no-op

    assert dummy.calls[0] == ("reconnect_delay_set", RECONNECT_DELAY_SECONDS, RECONNECT_DELAY_SECONDS)
    assert dummy.calls[1][:3] == ("connect_async", "test", 1883)
    assert dummy.calls.count(("loop_start",)) == 1
    assert wrapper.health_status.connection_attempts == 1


def test_callbacks_keep_connection_state_in_sync():
    state = ConnectionState()
    dummy = DummyClient()
    wrapper = build_wrapper(dummy, state)

    assert dummy.on_connect == wrapper._on_connect
    wrapper._on_connect(dummy, None, {}, 0)
    assert state.is_connected() and wrapper.connected

    wrapper._on_disconnect(dummy, None, 7)
    assert not state.is_connected()
    assert wrapper.health_status.last_error == "disconnect rc=7"


def test_refused_connection_stays_disconnected():
    state = ConnectionState()
    wrapper = build_wrapper(DummyClient(), state)

    wrapper._on_connect(None, None, {}, 5)

    assert not state.is_connected()
    assert wrapper.health_status.last_error == "connack rc=5"


def test_publish_drops_message_while_disconnected():
    dummy = DummyClient()
    wrapper = build_wrapper(dummy)

    assert wrapper.publish("flowl/plant/1/state", "ok") is False
    assert dummy.published == []


def test_publish_is_retained_and_counts_results():
    dummy = DummyClient()
    wrapper = build_wrapper(dummy, ConnectionState(connected=True))

    assert wrapper.publish("flowl/plant/1/state", "ok") is True
    assert dummy.published == [("flowl/plant/1/state", "ok", 1, True)]

    dummy.publish_rc = mqtt.MQTT_ERR_NO_CONN
    assert wrapper.publish("flowl/plant/1/state", "due") is False

    health = wrapper.health_status.to_dict()
    assert health["successful_publishes"] == 1
    assert health["failed_publishes"] == 1
    assert health["publish_success_rate"] == 50.0


def test_publish_never_raises():
    dummy = DummyClient()
    wrapper = build_wrapper(dummy, ConnectionState(connected=True))

    with patch.object(dummy, "publish", side_effect=RuntimeError("socket closed")):
        assert wrapper.publish("flowl/plant/1/state", "ok") is False

    assert wrapper.health_status.last_error == "socket closed"


def test_disconnect_stops_loop_and_clears_state():
    state = ConnectionState()
    dummy = DummyClient()
    wrapper = build_wrapper(dummy, state)
    wrapper.start()
    wrapper._on_connect(dummy, None, {}, 0)

    wrapper.disconnect()

    assert ("disconnect",) in dummy.calls
    assert dummy.calls[-1] == ("loop_stop",)
    assert not state.is_connected()
