"""HTTP surface tests driving the wardrobe through FastAPI's TestClient."""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

sys.path.append(str(Path(__file__).resolve().parents[1]))

from server.api import create_app
from tools.capabilities import CapabilitySet, MockImageClassifier, MockImageSynthesizer, MockOutfitReasoner
from tools.kv_store import InMemoryKeyValueStore
from wardrobe_app.app import SmartWardrobeApp
from wardrobe_app.config import WardrobeConfig

IMAGE = "data:image/jpeg;base64,aGVsbG8="


@pytest.fixture()
def capabilities() -> CapabilitySet:
    return CapabilitySet(
        classifier=MockImageClassifier(),
        reasoner=MockOutfitReasoner(),
        synthesizer=MockImageSynthesizer(),
    )


@pytest.fixture()
def client(capabilities: CapabilitySet) -> TestClient:
    wardrobe = SmartWardrobeApp(
        config=WardrobeConfig(),
        backend=InMemoryKeyValueStore(),
        capabilities=capabilities,
    )
    return TestClient(create_app(wardrobe))


def _create_item(client: TestClient, location: str = "鞋架") -> dict:
    response = client.post("/drafts/image", json={"imageUrl": IMAGE})
    assert response.status_code == 200
    client.patch("/drafts", json={"location": location})
    submitted = client.post("/drafts/submit")
    assert submitted.status_code == 200
    return submitted.json()["item"]


def test_healthcheck_and_presets(client: TestClient) -> None:
    assert client.get("/healthz").json()["status"] == "ok"

    presets = client.get("/presets").json()
    assert presets["categories"][0] == "全部"
    assert "凉爽微风" in presets["weather"]
    assert "工作/办公" in presets["occasions"]


def test_inventory_requires_login(client: TestClient) -> None:
    response = client.get("/items")
    assert response.status_code == 401


def test_auth_errors(client: TestClient) -> None:
    assert client.post("/auth/register", json={"username": "alice", "password": "pw"}).status_code == 200
    assert client.post("/auth/register", json={"username": "alice", "password": "pw"}).status_code == 409
    assert client.post("/auth/login", json={"username": "alice", "password": "nope"}).status_code == 401
    assert client.post("/auth/register", json={"username": "", "password": "pw"}).status_code == 400


def test_item_creation_and_browsing(client: TestClient) -> None:
    client.post("/auth/register", json={"username": "alice", "password": "pw"})

    drafted = client.post("/drafts/image", json={"imageUrl": IMAGE}).json()
    assert drafted["status"] == "ok"
    assert drafted["notification"] is None
    assert drafted["state"] == "drafting"
    assert drafted["draft"]["category"] == "上装"

    assert client.patch("/drafts", json={"category": "帽子"}).status_code == 422
    patched = client.patch("/drafts", json={"name": "白T", "location": "收纳箱"}).json()
    assert patched["draft"]["name"] == "白T"

    item = client.post("/drafts/submit").json()["item"]
    assert item["location"] == "收纳箱"

    listing = client.get("/items", params={"category": "上装", "q": "收纳"}).json()
    assert listing["total"] == 1
    assert [entry["id"] for entry in listing["items"]] == [item["id"]]
    assert client.get("/items", params={"category": "鞋履"}).json()["items"] == []


def test_editing_without_image_is_a_conflict(client: TestClient) -> None:
    client.post("/auth/register", json={"username": "alice", "password": "pw"})

    response = client.patch("/drafts", json={"name": "x"})

    assert response.status_code == 409
    assert response.json()["detail"]["reason"] == "invalid_state"


def test_classification_failure_is_reported_and_draft_stays_usable(capabilities: CapabilitySet, client: TestClient) -> None:
    capabilities.classifier.response = RuntimeError("vision offline")
    client.post("/auth/register", json={"username": "alice", "password": "pw"})

    drafted = client.post("/drafts/image", json={"imageUrl": IMAGE}).json()

    assert drafted["status"] == "failed"
    assert drafted["notification"]["message"] == "自动识别图片失败，请手动填写详情。"
    item = client.post("/drafts/submit").json()["item"]
    assert item["name"] == "未命名衣物"


def test_stylist_flow(client: TestClient) -> None:
    client.post("/auth/register", json={"username": "alice", "password": "pw"})
    _create_item(client)

    too_small = client.post("/stylist/recommendations", json={"occasion": "工作/办公", "weather": "凉爽微风"})
    assert too_small.status_code == 400
    assert too_small.json()["detail"]["reason"] == "inventory_too_small"

    _create_item(client, location="衣柜 - 上层")
    suggestion = client.post(
        "/stylist/recommendations", json={"occasion": "工作/办公", "weather": "凉爽微风"}
    ).json()
    assert suggestion["outfitName"]
    assert len(suggestion["items"]) == 2

    rendered = client.post("/stylist/visualization").json()
    assert rendered["imageUrl"].startswith("data:image/png;base64,")


def test_recommendation_failure_maps_to_bad_gateway(capabilities: CapabilitySet, client: TestClient) -> None:
    capabilities.reasoner.response = RuntimeError("quota exceeded")
    client.post("/auth/register", json={"username": "alice", "password": "pw"})
    _create_item(client)
    _create_item(client)

    response = client.post("/stylist/recommendations", json={"occasion": "工作/办公", "weather": "凉爽微风"})

    assert response.status_code == 502
    assert response.json()["detail"]["message"] == "获取建议失败，请尝试其他关键词。"
    assert client.get("/items").json()["total"] == 2


def test_delete_requires_confirm_flag(client: TestClient) -> None:
    client.post("/auth/register", json={"username": "alice", "password": "pw"})
    item = _create_item(client)

    assert client.delete(f"/items/{item['id']}").status_code == 400
    assert client.delete(f"/items/{item['id']}", params={"confirm": "true"}).json() == {"removed": True}
    assert client.get("/items").json()["items"] == []
