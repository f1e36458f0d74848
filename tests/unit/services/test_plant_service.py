import pytest

from app.domain.exceptions import NotFoundError, ValidationError
from app.schemas.plants import CreatePlantRequest, UpdatePlantRequest
from app.services.application.plant_service import PlantService, serialize_plant


@pytest.fixture()
def plant_service(plant_repo, location_repo, care_repo, publisher):
    return PlantService(plant_repo, location_repo, care_repo, publisher=publisher)


def test_create_applies_defaults_and_publishes(plant_service, fake_wrapper):
    plant = plant_service.create_plant(CreatePlantRequest(name="  Monstera  "))

    assert plant["name"] == "Monstera"
    assert plant["icon"] == "\U0001fab4"
    assert plant["watering_interval_days"] == 7
    assert plant["light_needs"] == "indirect"
    assert plant["watering_status"] == "due"
    assert plant["next_due"] is None
    assert plant["last_watered"] is None
    assert fake_wrapper.topics() == [
        f"homeassistant/sensor/flowl_plant_{plant['id']}/config",
        f"flowl/plant/{plant['id']}/state",
        f"flowl/plant/{plant['id']}/attributes",
    ]


def test_create_with_unknown_location_is_rejected(plant_service, fake_wrapper):
    with pytest.raises(ValidationError, match="Location not found"):
        plant_service.create_plant(CreatePlantRequest(name="Fern", location_id=42))
    assert fake_wrapper.published == []


def test_update_clears_nullable_fields_and_keeps_required(plant_service, seed):
    location_id = seed.create_location("Kitchen")
    plant_id = seed.create_plant("Basil", location_id=location_id, notes="south window")

    request = UpdatePlantRequest.model_validate({"location_id": None, "notes": None, "icon": None})
    plant = plant_service.update_plant(plant_id, request)

    assert plant["location_id"] is None
    assert plant["location_name"] is None
    assert plant["notes"] is None
    assert plant["icon"] == "\U0001fab4"


def test_update_missing_plant(plant_service):
    with pytest.raises(NotFoundError):
        plant_service.update_plant(404, UpdatePlantRequest(name="Ghost"))


def test_water_records_event_and_publishes_state(plant_service, seed, care_repo, fake_wrapper):
    plant_id = seed.create_plant("Pothos", watering_interval_days=5)

    plant = plant_service.water_plant(plant_id)

    assert plant["watering_status"] == "ok"
    assert plant["last_watered"].endswith("Z")
    events = care_repo.list_for_plant(plant_id)
    assert [e["event_type"] for e in events] == ["watered"]
    assert fake_wrapper.topics() == [f"flowl/plant/{plant_id}/state", f"flowl/plant/{plant_id}/attributes"]
    assert fake_wrapper.payloads_for(f"flowl/plant/{plant_id}/state") == ["ok"]


def test_water_missing_plant(plant_service, care_repo):
    with pytest.raises(NotFoundError, match="Plant not found"):
        plant_service.water_plant(404)
    assert care_repo.count_events() == 0


def test_delete_removes_plant_and_its_topics(plant_service, seed, plant_repo, fake_wrapper):
    plant_id = seed.create_plant("Cactus")
    seed.water(plant_id)

    plant_service.delete_plant(plant_id)

    assert plant_repo.get_plant(plant_id) is None
    assert [payload for _, payload, _ in fake_wrapper.published] == ["", "", ""]
    with pytest.raises(NotFoundError):
        plant_service.delete_plant(plant_id)


def test_service_without_publisher_still_works(plant_repo, location_repo, care_repo, seed):
    service = PlantService(plant_repo, location_repo, care_repo)
    plant_id = seed.create_plant("Aloe")

    assert service.water_plant(plant_id)["watering_status"] == "ok"
    service.delete_plant(plant_id)


def test_serialize_plant_adds_derived_fields():
    row = {"id": 1, "name": "Fern", "watering_interval_days": 3, "last_watered": "2000-01-01T00:00:00Z"}

    plant = serialize_plant(row)

    assert plant["watering_status"] == "overdue"
    assert plant["next_due"] == "2000-01-04"
    assert "watering_status" not in row
