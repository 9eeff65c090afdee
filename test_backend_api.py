"""Tests for the HTTP API."""

import time
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from story_illustrator import orchestrator
from story_illustrator import app as app_module
from story_illustrator.app import app
from story_illustrator.media import is_placeholder_image
from story_illustrator.models import ImageGenerationResponse


@pytest.fixture
def no_delay(monkeypatch):
    monkeypatch.setattr(orchestrator, "SCENE_DELAY_S", 0)
    monkeypatch.setattr(orchestrator, "PROGRESS_RESET_S", 0)


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def fake_images():
    generator = AsyncMock(return_value=ImageGenerationResponse(success=True, image_url="data:image/png;base64,abc"))
    with patch("story_illustrator.illustrations.generate_image", new=generator):
        yield generator


class TestHealth:

    def test_reports_key(self, client, monkeypatch):
        monkeypatch.setenv("STABILITY_API_KEY", "test-key")
        assert client.get("/health").json() == {"ok": True, "has_image_key": True}

    def test_reports_missing_key(self, client, monkeypatch):
        monkeypatch.delenv("STABILITY_API_KEY", raising=False)
        with patch("story_illustrator.settings.STABILITY_API_KEY", ""):
            assert client.get("/health").json()["has_image_key"] is False


class TestImageGenerationEndpoint:

    def test_missing_prompt(self, client):
        r = client.post("/api/image-generation", json={"prompt": ""})
        assert r.status_code == 400
        assert r.json() == {"success": False, "error": "Missing prompt"}

    def test_success(self, client):
        resp = ImageGenerationResponse(success=True, image_url="data:image/png;base64,xyz", prompt="a robot")
        with patch("story_illustrator.app.generate_image", new=AsyncMock(return_value=resp)) as gen:
            r = client.post("/api/image-generation", json={"prompt": "a robot"})

        assert r.status_code == 200
        assert r.json() == {"success": True, "imageUrl": "data:image/png;base64,xyz", "prompt": "a robot"}
        gen.assert_awaited_once_with("a robot", 1024, 768)

    def test_failure(self, client):
        resp = ImageGenerationResponse(success=False, error="Stability API error", prompt="a robot")
        with patch("story_illustrator.app.generate_image", new=AsyncMock(return_value=resp)):
            r = client.post("/api/image-generation", json={"prompt": "a robot", "width": 512, "height": 512})

        assert r.status_code == 500
        assert r.json()["success"] is False
        assert r.json()["error"] == "Stability API error"


class TestStoryEndpoints:

    def test_scenes(self, client):
        r = client.post("/v1/story/scenes", json={"idea": "a lonely robot finds a flower", "genre": "sci-fi"})
        assert r.status_code == 200
        scenes = r.json()
        assert [s["id"] for s in scenes] == [1, 2, 3, 4, 5]
        assert scenes[0]["title"] == "Future Discovery"

    @pytest.mark.parametrize("body", [
        {"idea": ""},
        {"idea": "   "},
        {"idea": "a robot", "genre": "western"},
        {"genre": "fantasy"},
    ])
    def test_invalid_requests(self, client, body):
        assert client.post("/v1/story/scenes", json=body).status_code == 422

    def test_generate(self, client, no_delay, fake_images):
        r = client.post("/v1/story:generate", json={"idea": "a lonely robot finds a flower", "tone": "peaceful"})

        assert r.status_code == 200
        body = r.json()
        assert body["request"]["tone"] == "peaceful"
        assert [s["id"] for s in body["scenes"]] == [1, 2, 3, 4, 5]
        assert all(s["image_url"] == "data:image/png;base64,abc" and s["image_prompt"] for s in body["scenes"])
        assert fake_images.await_count == 5

    def test_generate_with_failing_endpoint(self, client, no_delay):
        failing = AsyncMock(return_value=ImageGenerationResponse(success=False, error="boom"))
        with patch("story_illustrator.illustrations.generate_image", new=failing):
            r = client.post("/v1/story:generate", json={"idea": "a lonely robot finds a flower"})

        assert r.status_code == 200
        assert all(is_placeholder_image(s["image_url"]) for s in r.json()["scenes"])

    def test_regenerate(self, client, fake_images):
        r = client.post("/v1/story/scenes:regenerate", json={"story": {"idea": "a map in a bottle"}, "scene_id": 2})
        assert r.status_code == 200
        assert r.json()["id"] == 2
        assert r.json()["image_url"] == "data:image/png;base64,abc"

    def test_regenerate_unknown_scene(self, client, fake_images):
        r = client.post("/v1/story/scenes:regenerate", json={"story": {"idea": "a map in a bottle"}, "scene_id": 9})
        assert r.status_code == 404


class TestJobs:

    def test_background_job(self, client, no_delay, fake_images):
        r = client.post("/v1/story:start", json={"idea": "a lonely robot finds a flower"})
        assert r.status_code == 200
        job_id = r.json()["job_id"]

        status = None
        for _ in range(100):
            status = client.get(f"/v1/jobs/{job_id}").json()
            if status["status"] in ("succeeded", "failed"):
                break
            time.sleep(0.02)

        assert status["status"] == "succeeded"
        assert [s["id"] for s in status["scenes"]] == [1, 2, 3, 4, 5]
        assert status["progress"]["fraction"] == 0.0

    def test_oldest_finished_jobs_dropped_past_limit(self, monkeypatch):
        monkeypatch.setattr(app_module, "JOBS", {})
        for job_id, status in [("a", "succeeded"), ("b", "running"), ("c", "failed"), ("d", "succeeded")]:
            job = app_module.JobRecord(job_id)
            job.status = status
            app_module.JOBS[job_id] = job

        app_module._register_job(app_module.JobRecord("e"), max_jobs=3)

        assert list(app_module.JOBS) == ["b", "d", "e"]

    def test_running_jobs_never_dropped(self, monkeypatch):
        monkeypatch.setattr(app_module, "JOBS", {})
        for job_id in ("a", "b"):
            app_module._register_job(app_module.JobRecord(job_id), max_jobs=1)

        assert list(app_module.JOBS) == ["a", "b"]

    def test_unknown_job(self, client):
        assert client.get("/v1/jobs/does-not-exist").status_code == 404
