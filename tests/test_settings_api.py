import pytest
from fastapi.testclient import TestClient

from backend.app.db.base import Base
from backend.app.db.session import engine
from backend.app.main import app
from backend.app.services.local_store import LocalStore, get_local_store


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def local_store():
    store = LocalStore()
    app.dependency_overrides[get_local_store] = lambda: store
    yield store
    app.dependency_overrides.pop(get_local_store, None)


def test_pricing_defaults_when_not_saved():
    client = TestClient(app)
    response = client.get("/api/settings/pricing")
    assert response.status_code == 200
    body = response.json()
    assert body["key"] == "pricing"
    assert body["updated_at"] is None
    assert body["data"]["laborRate"] == 45
    assert body["data"]["minCharge"] == 75
    assert [s["name"] for s in body["data"]["services"]] == [
        "Lawn Mowing",
        "Landscaping Design",
        "Tree Removal",
        "Hardscaping",
    ]


def test_pricing_save_replaces_document():
    client = TestClient(app)
    payload = {
        "laborRate": 55,
        "travelFee": 3,
        "minCharge": 90,
        "emergencyRate": "2",
        "services": [{"id": 1, "name": "Lawn Mowing", "basePrice": 60, "pricePerSqft": 0.06, "markup": 25}],
    }
    saved = client.put("/api/settings/pricing", json=payload)
    assert saved.status_code == 200
    assert saved.json()["updated_at"] is not None

    body = client.get("/api/settings/pricing").json()
    assert body["data"]["laborRate"] == 55
    assert len(body["data"]["services"]) == 1
    assert body["data"]["services"][0]["basePrice"] == 60


def test_pricing_save_validates_numbers():
    client = TestClient(app)
    response = client.put("/api/settings/pricing", json={"laborRate": "lots", "services": []})
    assert response.status_code == 400
    assert response.json()["error"]["message"].startswith("Invalid laborRate")


def test_local_pricing_is_imported_once(local_store):
    local_store.set("pricingSettings", {"laborRate": 70})
    client = TestClient(app)
    body = client.get("/api/settings/pricing").json()
    assert body["data"]["laborRate"] == 70
    assert body["updated_at"] is not None
    assert local_store.get("pricingSettings") is None


def test_business_settings_last_write_wins():
    client = TestClient(app)
    defaults = client.get("/api/settings/business").json()["data"]
    assert defaults["businessName"] == "GreenScapes Landscaping"
    assert len(defaults["hours"]) == 7

    first = {**defaults, "businessName": "First Name"}
    second = {**defaults, "businessName": "Second Name"}
    client.put("/api/settings/business", json=first)
    client.put("/api/settings/business", json=second)
    assert client.get("/api/settings/business").json()["data"]["businessName"] == "Second Name"


def test_widget_settings_and_embed_code():
    client = TestClient(app)
    widget = client.get("/api/settings/widget").json()["data"]
    assert widget["requirePhotos"] is True
    widget["businessId"] = "biz-42"
    assert client.put("/api/settings/widget", json=widget).status_code == 200
    embed = client.get("/api/settings/widget/embed-code").json()["embed_code"]
    assert 'data-business-id="biz-42"' in embed
    assert "https://widget.grndwrk.com/embed.js" in embed


def test_availability_settings_are_device_local(local_store):
    client = TestClient(app)
    data = client.get("/api/settings/availability").json()["data"]
    assert data["minNotice"] == "24"
    assert [d["name"] for d in data["days"]][0] == "Monday"

    data["minNotice"] = "48"
    response = client.put("/api/settings/availability", json=data)
    assert response.status_code == 200
    assert local_store.get("availabilitySettings")["minNotice"] == "48"


def test_service_colors_follow_service_order():
    client = TestClient(app)
    body = client.get("/api/settings/service-colors").json()
    assert body["colors"]["lawn-mowing"] == "bg-emerald-100 text-emerald-800"
    assert body["colors"]["hardscaping"] == "bg-amber-100 text-amber-800"
    assert body["default"] == "bg-gray-200 text-gray-800"
