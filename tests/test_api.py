"""HTTP status surface tests."""

from __future__ import annotations

import asyncio
import datetime
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from imagebot.api import create_app
from imagebot.schemas import GenerationStatus, GenerationUpdate
from imagebot.storage import MemStorage


class FakeBotService:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.launched = False
        self.stopped = False

    async def launch(self) -> None:
        self.launched = True

    async def stop(self) -> None:
        self.stopped = True

    async def get_me(self):
        if self.error is not None:
            raise self.error
        return SimpleNamespace(id=123456, username="image_bot", first_name="Image Bot")


class BrokenStorage(MemStorage):
    async def compute_stats(self):
        raise RuntimeError("database offline")

    async def list_recent(self, limit):
        raise RuntimeError("database offline")


def make_client(storage=None, bot_service=None, launch_bot=False, static_dir="does-not-exist"):
    app = create_app(
        storage or MemStorage(),
        bot_service or FakeBotService(),
        launch_bot=launch_bot,
        static_dir=str(static_dir),
    )
    return TestClient(app)


def test_root_liveness_payload():
    response = make_client().get("/")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["message"] == "AI Image Generator Bot is running"
    assert body["team"] == "The Firm AI Team"
    datetime.datetime.fromisoformat(body["timestamp"])


def test_bot_stats_on_empty_store():
    response = make_client().get("/api/bot-stats")

    assert response.status_code == 200
    assert response.json() == {
        "totalGenerations": 0,
        "successfulGenerations": 0,
        "failedGenerations": 0,
        "uniqueUsers": 0,
        "averageGenerationTimeSeconds": 0,
    }


def test_bot_stats_reflect_store():
    storage = MemStorage()

    async def seed():
        done = await storage.create_record("1", "one")
        await storage.create_record("2", "two")
        await storage.update_record(done.id, GenerationUpdate(
            status=GenerationStatus.COMPLETED,
            completed_at=done.created_at + datetime.timedelta(seconds=2),
        ))

    asyncio.run(seed())
    body = make_client(storage=storage).get("/api/bot-stats").json()

    assert body["totalGenerations"] == 2
    assert body["successfulGenerations"] == 1
    assert body["uniqueUsers"] == 2
    assert body["averageGenerationTimeSeconds"] == 2.0


def test_recent_generations_uses_camel_case_and_limit():
    storage = MemStorage()

    async def seed():
        for i in range(12):
            await storage.create_record(str(i), f"prompt {i}")

    asyncio.run(seed())
    response = make_client(storage=storage).get("/api/recent-generations")

    assert response.status_code == 200
    body = response.json()
    assert len(body) == 10
    assert body[0]["prompt"] == "prompt 11"
    assert set(body[0]) == {
        "id", "requesterId", "prompt", "status", "imageLocation",
        "errorDetail", "createdAt", "completedAt",
    }
    assert body[0]["status"] == "pending"


@pytest.mark.parametrize(
    "path, message",
    [
        ("/api/bot-stats", "Failed to fetch bot statistics"),
        ("/api/recent-generations", "Failed to fetch recent generations"),
    ],
)
def test_store_failures_return_500(path, message):
    response = make_client(storage=BrokenStorage()).get(path)

    assert response.status_code == 500
    assert response.json() == {"error": message}


def test_bot_health_reports_identity():
    response = make_client().get("/api/bot-health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["botInfo"] == {"id": 123456, "username": "image_bot", "first_name": "Image Bot"}
    assert "timestamp" in body


def test_bot_health_reports_outage():
    client = make_client(bot_service=FakeBotService(error=ConnectionError("Unauthorized")))
    response = client.get("/api/bot-health")

    assert response.status_code == 503
    body = response.json()
    assert body["status"] == "unhealthy"
    assert body["error"] == "Unauthorized"
    assert "timestamp" in body


def test_bot_lifecycle_follows_app_lifecycle():
    bot_service = FakeBotService()

    with make_client(bot_service=bot_service, launch_bot=True) as client:
        assert bot_service.launched
        assert client.get("/").status_code == 200

    assert bot_service.stopped


def test_unknown_paths():
    client = make_client()

    api_response = client.get("/api/unknown")
    assert api_response.status_code == 404
    assert api_response.json() == {"error": "Not found"}

    page = client.get("/some/page")
    assert page.status_code == 200
    assert "AI Image Generator Bot" in page.text


def test_static_directory_is_served(tmp_path):
    (tmp_path / "index.html").write_text("<h1>dashboard</h1>")
    client = make_client(static_dir=tmp_path)

    assert client.get("/index.html").text == "<h1>dashboard</h1>"
    assert client.get("/").json()["status"] == "healthy"
