import os

import paho.mqtt.client as mqtt

from app.hardware.mqtt.client_factory import build_client_id, create_mqtt_client


def test_create_mqtt_client_handles_available_version_flags():
    client = create_mqtt_client("factory-test")

    assert getattr(client, "_client_id", b"").decode() == "factory-test"
    assert getattr(client, "_protocol", None) in (4, getattr(mqtt, "MQTTv311", 4))
    assert hasattr(client, "connect_async")


def test_build_client_id_is_unique_per_process_and_role():
    pid = os.getpid()

    assert build_client_id("flowl") == f"flowl-{pid}"
    assert build_client_id("flowl", "repair") == f"flowl-repair-{pid}"
    assert build_client_id("flowl") != build_client_id("flowl", "repair")
