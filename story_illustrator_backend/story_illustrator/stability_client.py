import os, httpx, logging
from typing import Optional
from .models import ImageGenerationResponse
from .settings import (
    STABILITY_API_HOST,
    STABILITY_ENGINE_ID,
    STABILITY_CFG_SCALE,
    STABILITY_TIMEOUT_S,
    IMAGE_WIDTH,
    IMAGE_HEIGHT,
)

logger = logging.getLogger(__name__)

def _api_key() -> str:
    return os.getenv("STABILITY_API_KEY", "")

def _headers(api_key: str):
    return {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
        "Accept": "application/json",
    }

def _text_to_image_url() -> str:
    return f"{STABILITY_API_HOST}/v1/generation/{STABILITY_ENGINE_ID}/text-to-image"

def _failure(error: str, prompt: str, details: Optional[str] = None) -> ImageGenerationResponse:
    return ImageGenerationResponse(success=False, error=error, prompt=prompt, details=details)

async def generate_image(
    prompt: str,
    width: int = IMAGE_WIDTH,
    height: int = IMAGE_HEIGHT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ImageGenerationResponse:
    """Request one image from Stability. Every failure comes back as success=False."""
    if not prompt:
        return _failure("Missing prompt", prompt)

    api_key = _api_key()
    if not api_key:
        logger.error("STABILITY_API_KEY is not set; please configure your .env")
        return _failure("Server missing STABILITY_API_KEY", prompt)

    json_body = {
        "text_prompts": [{"text": prompt}],
        "cfg_scale": STABILITY_CFG_SCALE,
        "height": height,
        "width": width,
        "samples": 1,
    }
    logger.info(f"Starting Stability image generation for prompt: {prompt[:100]}...")

    try:
        async with httpx.AsyncClient(timeout=STABILITY_TIMEOUT_S, transport=transport) as client:
            r = await client.post(_text_to_image_url(), headers=_headers(api_key), json=json_body)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.error(f"Stability request failed: {str(e)}")
        return _failure("Failed to generate image", prompt, details=str(e))

    if r.status_code >= 400:
        logger.error(f"Stability error {r.status_code}: {r.text}")
        return _failure("Stability API error", prompt, details=r.text)

    try:
        body = r.json()
    except ValueError:
        logger.error("Stability returned a non-JSON body")
        return _failure("Malformed response from Stability", prompt, details=r.text)

    artifacts = body.get("artifacts") if isinstance(body, dict) else None
    image = artifacts[0] if isinstance(artifacts, list) and artifacts else None
    if not isinstance(image, dict) or not image.get("base64"):
        logger.error("Stability succeeded but returned no image")
        return _failure("No image returned from Stability", prompt)

    logger.info("Stability image generation succeeded")
    return ImageGenerationResponse(
        success=True,
        image_url=f"data:image/png;base64,{image['base64']}",
        prompt=prompt,
    )
