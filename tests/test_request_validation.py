import pytest
from fastapi.testclient import TestClient

from backend.app.core.errors import validation_message
from backend.app.db.base import Base
from backend.app.db.session import engine
from backend.app.main import app
from backend.app.services.photo_storage import PhotoStorage, get_photo_storage


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def storage(tmp_path):
    store = PhotoStorage(str(tmp_path), "quote-photos", "http://testserver/media")
    app.dependency_overrides[get_photo_storage] = lambda: store
    yield store
    app.dependency_overrides.pop(get_photo_storage, None)


def assert_bad_request(response, field=None):
    assert response.status_code == 400
    body = response.json()
    assert set(body) == {"error"}
    assert body["error"]["message"].startswith("Invalid")
    if field:
        assert field in body["error"]["message"]


def appointment(**overrides):
    payload = {
        "name": "Morgan Lee",
        "phone": "555-0199",
        "address": "42 Birch Lane",
        "serviceType": "lawn-mowing",
        "estimate": 175,
        "scheduledDateTime": "2025-07-16T09:30:00",
    }
    payload.update(overrides)
    return payload


def test_schedule_appointment_photos_must_be_a_list():
    client = TestClient(app)
    response = client.post("/api/schedule-appointment", json=appointment(photos="single.jpg"))
    assert_bad_request(response, "photos")


def test_schedule_appointment_name_must_be_text():
    client = TestClient(app)
    response = client.post("/api/schedule-appointment", json=appointment(name=123))
    assert_bad_request(response, "name")


@pytest.mark.parametrize("path", ["/api/update-lead-status", "/api/status-update"])
def test_status_update_lead_id_must_be_numeric(path):
    client = TestClient(app)
    response = client.post(path, json={"leadId": "abc", "status": "Contacted"})
    assert_bad_request(response, "leadId")


def test_notes_update_id_must_be_numeric():
    client = TestClient(app)
    response = client.post("/api/update-lead-notes", json={"id": "abc", "notes": "hi"})
    assert_bad_request(response, "id")


def test_submit_quote_rejects_malformed_json():
    client = TestClient(app)
    response = client.post(
        "/api/submit-quote",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )
    assert_bad_request(response)
    assert response.json()["error"]["message"] == "Invalid JSON body."


def test_upload_rejects_text_in_file_field(storage):
    client = TestClient(app)
    response = client.post("/api/upload-quote-photo", data={"file": "not-a-file"})
    assert_bad_request(response, "file")


def test_estimate_body_must_be_an_object():
    client = TestClient(app)
    response = client.post("/api/estimate", json=["lawn-mowing", 2000])
    assert_bad_request(response)


def test_availability_date_must_parse():
    client = TestClient(app)
    assert_bad_request(client.get("/api/availability", params={"date": "next tuesday"}), "date")
    assert_bad_request(client.get("/api/availability"), "date")


def test_validation_message_names_first_field():
    errors = [
        {"loc": ("body", "photos"), "msg": "Input should be a valid list"},
        {"loc": ("body", "name"), "msg": "Input should be a valid string"},
    ]
    assert validation_message(errors) == "Invalid photos: Input should be a valid list"
    assert validation_message([{"loc": ("body",), "msg": "Field required"}]) == "Invalid request: Field required"
    assert validation_message([]) == "Invalid request."
    assert validation_message([{"type": "json_invalid", "loc": ("body", 1), "msg": "JSON decode error"}]) == "Invalid JSON body."
