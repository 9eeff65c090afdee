"""
Scene illustration: prompt composition, image requests and placeholder fallback.

Scenes are illustrated strictly one after another with a fixed pause between
them. A batch always returns one scene per input scene, in input order.
"""
import asyncio
import logging
from typing import Awaitable, Callable, List, Optional

from .composer import build_scene_prompt, compose_prompt, optimize_prompt
from .media import placeholder_data_uri
from .models import ImageGenerationResponse, Scene, StoryRequest
from .settings import IMAGE_HEIGHT, IMAGE_WIDTH, OPTIMIZE_PROMPTS, PROGRESS_RESET_S, SCENE_DELAY_S
from .stability_client import generate_image

logger = logging.getLogger(__name__)

ImageGenerator = Callable[[str, int, int], Awaitable[ImageGenerationResponse]]


class ImageGenerationProgress:
    """Completion state of the current batch. Owned by a single batch at a time."""

    def __init__(self, on_update: Optional[Callable[[float], None]] = None):
        self.on_update = on_update
        self.is_generating = False
        self.completed = 0
        self.total = 0
        self._batch = 0

    @property
    def fraction(self) -> float:
        if not self.total:
            return 0.0
        return self.completed / self.total

    @property
    def percent(self) -> float:
        return self.fraction * 100

    def start(self, total: int):
        self._batch += 1
        self.is_generating = True
        self.completed = 0
        self.total = total
        self._notify()

    def advance(self):
        self.completed += 1
        self._notify()

    def finish(self, reset_after: float = 0.0):
        self.is_generating = False
        if reset_after <= 0:
            self.reset()
            return
        batch = self._batch
        asyncio.get_running_loop().call_later(reset_after, self._reset_if_current, batch)

    def reset(self):
        self.completed = 0
        self.total = 0
        self._notify()

    def _reset_if_current(self, batch: int):
        if batch == self._batch and not self.is_generating:
            self.reset()

    def _notify(self):
        if self.on_update is not None:
            self.on_update(self.fraction)


async def resolve_image(prompt: str, scene_index: int = 0, generator: Optional[ImageGenerator] = None) -> str:
    """Return an image reference for the prompt, or a local placeholder if the request fails."""
    generator = generator or generate_image
    try:
        resp = await generator(prompt, IMAGE_WIDTH, IMAGE_HEIGHT)
        if isinstance(resp, dict):
            resp = ImageGenerationResponse.model_validate(resp)
    except Exception as e:
        logger.warning(f"Image generation failed, using placeholder: {str(e)}")
        return placeholder_data_uri(prompt, scene_index)

    if not isinstance(resp, ImageGenerationResponse):
        logger.warning(f"Image generation returned {type(resp).__name__}, using placeholder")
        return placeholder_data_uri(prompt, scene_index)
    if not resp.success or not resp.image_url:
        logger.warning(f"Image generation failed, using placeholder: {resp.error or 'no image returned'}")
        return placeholder_data_uri(prompt, scene_index)
    return resp.image_url


def _best_effort_prompt(scene: Scene, req: StoryRequest) -> str:
    try:
        return build_scene_prompt(scene, req)
    except Exception:
        logger.exception(f"Could not build a prompt for scene {scene.id}; using its title")
        return scene.title


async def generate_scene_images(
    scenes: List[Scene],
    req: StoryRequest,
    generator: Optional[ImageGenerator] = None,
    progress: Optional[ImageGenerationProgress] = None,
    delay: float = SCENE_DELAY_S,
    optimize: bool = OPTIMIZE_PROMPTS,
    reset_after: float = PROGRESS_RESET_S,
) -> List[Scene]:
    # TODO: accept a cancellation event and check it before each request and each pause
    progress = progress or ImageGenerationProgress()
    total_scenes = len(scenes)
    progress.start(total_scenes)
    logger.info(f"Generating images for {total_scenes} scenes")

    scenes_with_images: List[Scene] = []
    try:
        for i, scene in enumerate(scenes):
            prompt = None
            try:
                prompt = compose_prompt(scene, req)
                if optimize:
                    prompt = optimize_prompt(prompt)
                logger.info(f"Generating image for scene {i + 1}: {prompt}")
                image_url = await resolve_image(prompt, i, generator)
                scenes_with_images.append(scene.model_copy(update={"image_url": image_url, "image_prompt": prompt}))
            except Exception:
                logger.exception(f"Error generating image for scene {i + 1}")
                scenes_with_images.append(scene.model_copy(update={
                    "image_url": None,
                    "image_prompt": prompt or _best_effort_prompt(scene, req),
                }))
            progress.advance()

            # Pace requests to the image endpoint; no pause after the last scene
            if i < total_scenes - 1:
                await asyncio.sleep(delay)
    finally:
        progress.finish(reset_after)

    return scenes_with_images


async def regenerate_scene_image(
    scene_id: int,
    scenes: List[Scene],
    req: StoryRequest,
    generator: Optional[ImageGenerator] = None,
) -> Optional[Scene]:
    scene = next((s for s in scenes if s.id == scene_id), None)
    if scene is None:
        return None

    prompt = compose_prompt(scene, req)
    logger.info(f"Regenerating image for scene {scene_id}: {prompt}")
    image_url = await resolve_image(prompt, scene_id - 1, generator)
    return scene.model_copy(update={"image_url": image_url, "image_prompt": prompt})
