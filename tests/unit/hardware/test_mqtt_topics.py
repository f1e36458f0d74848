import pytest

from app.hardware.mqtt.topics import TopicSet, extract_plant_id, unique_id, wildcard_patterns


def test_topic_set_layout():
    topics = TopicSet.for_plant("flowl", 42)

    assert topics.discovery == "homeassistant/sensor/flowl_plant_42/config"
    assert topics.state == "flowl/plant/42/state"
    assert topics.attributes == "flowl/plant/42/attributes"
    assert topics.all() == (topics.discovery, topics.state, topics.attributes)
    assert unique_id("flowl", 42) == "flowl_plant_42"


def test_wildcards_cover_every_plant_topic():
    assert wildcard_patterns("flowl") == [
        "homeassistant/sensor/+/config",
        "flowl/plant/+/state",
        "flowl/plant/+/attributes",
    ]


@pytest.mark.parametrize(
    "topic, expected",
    [
        ("homeassistant/sensor/flowl_plant_42/config", 42),
        ("flowl/plant/7/state", 7),
        ("flowl/plant/7/attributes", 7),
        # Another installation sharing the broker
        ("homeassistant/sensor/other_plant_3/config", None),
        ("other/plant/3/state", None),
        # Not plant topics
        ("homeassistant/sensor/flowl_plant_abc/config", None),
        ("homeassistant/binary_sensor/flowl_plant_1/config", None),
        ("flowl/plant/1/command", None),
        ("flowl/plant/-1/state", None),
        ("flowl/plant/1", None),
        ("flowl/plant/٣/state", None),
    ],
)
def test_extract_plant_id(topic, expected):
    assert extract_plant_id(topic, "flowl") == expected
