"""Tests for the Stability text-to-image client."""

import json

import httpx
import pytest

from story_illustrator import stability_client
from story_illustrator.stability_client import generate_image


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("STABILITY_API_KEY", "test-key")
    return "test-key"


def _transport(handler):
    calls = []

    def recording_handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return handler(request)

    return httpx.MockTransport(recording_handler), calls


class TestGenerateImage:
    """Tests for generate_image."""

    @pytest.mark.asyncio
    async def test_success_returns_data_uri(self, api_key):
        transport, calls = _transport(lambda r: httpx.Response(200, json={"artifacts": [{"base64": "iVBORw0"}]}))

        resp = await generate_image("a robot and a flower", transport=transport)

        assert resp.success is True
        assert resp.image_url == "data:image/png;base64,iVBORw0"
        request = calls[0]
        assert request.url.path == f"/v1/generation/{stability_client.STABILITY_ENGINE_ID}/text-to-image"
        assert request.headers["Authorization"] == "Bearer test-key"
        body = json.loads(request.content)
        assert body["text_prompts"] == [{"text": "a robot and a flower"}]
        assert (body["width"], body["height"], body["samples"]) == (1024, 768, 1)

    @pytest.mark.asyncio
    async def test_missing_key_is_a_failure_response(self, monkeypatch):
        monkeypatch.delenv("STABILITY_API_KEY", raising=False)
        transport, calls = _transport(lambda r: httpx.Response(200, json={}))

        resp = await generate_image("a robot", transport=transport)

        assert resp.success is False
        assert resp.error == "Server missing STABILITY_API_KEY"
        assert calls == []

    @pytest.mark.asyncio
    async def test_missing_prompt(self, api_key):
        resp = await generate_image("")
        assert resp.success is False
        assert resp.error == "Missing prompt"

    @pytest.mark.asyncio
    async def test_error_status(self, api_key):
        transport, _ = _transport(lambda r: httpx.Response(401, text="invalid key"))

        resp = await generate_image("a robot", transport=transport)

        assert resp.success is False
        assert resp.error == "Stability API error"
        assert resp.details == "invalid key"

    @pytest.mark.asyncio
    async def test_no_artifacts(self, api_key):
        transport, _ = _transport(lambda r: httpx.Response(200, json={"artifacts": []}))
        resp = await generate_image("a robot", transport=transport)
        assert resp.success is False
        assert resp.error == "No image returned from Stability"

    @pytest.mark.asyncio
    async def test_artifacts_not_a_list(self, api_key):
        transport, _ = _transport(lambda r: httpx.Response(200, json={"artifacts": {"base64": "x"}}))
        resp = await generate_image("a robot", transport=transport)
        assert resp.success is False
        assert resp.error == "No image returned from Stability"

    @pytest.mark.asyncio
    async def test_artifact_without_payload(self, api_key):
        transport, _ = _transport(lambda r: httpx.Response(200, json={"artifacts": ["iVBORw0"]}))
        resp = await generate_image("a robot", transport=transport)
        assert resp.success is False

    @pytest.mark.asyncio
    async def test_non_json_body(self, api_key):
        transport, _ = _transport(lambda r: httpx.Response(200, text="<html>oops</html>"))
        resp = await generate_image("a robot", transport=transport)
        assert resp.success is False
        assert resp.error == "Malformed response from Stability"

    @pytest.mark.asyncio
    async def test_transport_error(self, api_key):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        transport, _ = _transport(handler)
        resp = await generate_image("a robot", transport=transport)

        assert resp.success is False
        assert resp.error == "Failed to generate image"
        assert "connection refused" in resp.details

    @pytest.mark.asyncio
    async def test_invalid_host_is_a_failure_response(self, api_key, monkeypatch):
        monkeypatch.setattr(stability_client, "STABILITY_API_HOST", "https://api.stab\x01ility.ai")
        transport, calls = _transport(lambda r: httpx.Response(200, json={}))

        resp = await generate_image("a robot", transport=transport)

        assert resp.success is False
        assert resp.error == "Failed to generate image"
        assert calls == []

    def test_wire_format_uses_camel_case(self):
        resp = stability_client.ImageGenerationResponse(success=True, image_url="data:x", prompt="p")
        assert resp.model_dump(by_alias=True, exclude_none=True) == {"success": True, "imageUrl": "data:x", "prompt": "p"}
