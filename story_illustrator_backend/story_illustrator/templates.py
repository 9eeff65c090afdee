"""
Fixed five-beat story templates keyed by (genre, audience).

Each body template carries a single ``{idea}`` slot. Pairs missing from the
table fall back to the fantasy/kids set.
"""
import logging
from typing import Dict, List, Tuple

from .models import Scene, StoryRequest

logger = logging.getLogger(__name__)

IDEA_SLOT = "{idea}"
DEFAULT_TEMPLATE_KEY = ("fantasy", "kids")
SCENES_PER_STORY = 5

CLOSING_SENTENCE = (
    " The {tone} atmosphere fills this {genre} tale, making it perfect for "
    "{audience} who love stories full of wonder and excitement."
)

STORY_TEMPLATES: Dict[Tuple[str, str], List[Tuple[str, str]]] = {
    ("fantasy", "kids"): [
        ("The Discovery",
         "In a magical land where {idea}, a young hero discovers something extraordinary that will change everything. "
         "The air shimmers with possibility as they take their first steps into adventure."),
        ("The Challenge Appears",
         "But not all is as peaceful as it seems in a land where {idea}. A great challenge emerges that threatens the harmony "
         "of this magical world. Our hero must find courage they never knew they had."),
        ("The Journey Begins",
         "With determination in their heart, our hero sets out on an incredible journey. Along the way, they meet wonderful "
         "friends who believe that {idea}, and who join them in their quest to save their world."),
        ("The Great Test",
         "At the moment when all seems lost, our hero faces the greatest test of all. Remembering that {idea}, and with the "
         "help of their friends, they discover the true power of believing in themselves."),
        ("The Happy Ending",
         "Peace and joy return to the magical land where {idea}. Our hero has grown wise and brave, and the world is more "
         "beautiful than ever before. The adventure has ended, but the magic lives on forever."),
    ],
    ("fantasy", "teens"): [
        ("The Awakening",
         "In a world where {idea}, everything changes when ancient powers awaken. The balance between light and darkness "
         "hangs in the balance as destiny calls to unlikely heroes."),
        ("The Prophecy Unfolds",
         "An ancient prophecy foretold a time when {idea}. As evil forces gather strength, the chosen ones must embrace "
         "their destiny and rise to face the emerging darkness."),
        ("Trials of Power",
         "The heroes face trials that test not only their magical abilities but their bonds of friendship, all because "
         "{idea}. Each challenge reveals deeper truths about their powers and their purpose."),
        ("The Final Battle",
         "In an epic confrontation between good and evil over a world where {idea}, our heroes must use everything they've "
         "learned. The fate of both worlds hangs in the balance as they make their ultimate stand."),
        ("New Beginnings",
         "With victory achieved and wisdom gained in a world where {idea}, our heroes look toward a future full of "
         "possibility. They have grown into the legends they were meant to become."),
    ],
    ("sci-fi", "kids"): [
        ("Future Discovery",
         "In the amazing world of tomorrow where {idea}, a curious young explorer discovers something that could change "
         "everything. Technology and wonder go hand in hand in this bright future."),
        ("The Problem",
         "But even in this advanced world where {idea}, problems arise. A malfunction in the great machines threatens the "
         "peaceful life everyone enjoys, and someone needs to find a solution."),
        ("Teamwork and Innovation",
         "Working together with their robot friends and using incredible future technology, our young hero learns why "
         "{idea} and starts to unravel the mystery with creative solutions."),
        ("The Big Fix",
         "Using their intelligence, creativity, and the help of artificial intelligence friends, our hero proves that "
         "{idea} matters and implements a brilliant solution that saves the day."),
        ("A Brighter Tomorrow",
         "The future is brighter than ever as harmony is restored to the world where {idea}. Technology and humanity work "
         "together perfectly, creating endless possibilities for adventure and discovery."),
    ],
}

for _key, _templates in STORY_TEMPLATES.items():
    assert len(_templates) == SCENES_PER_STORY, f"template set {_key} must have {SCENES_PER_STORY} scenes"
    assert all(body.count(IDEA_SLOT) == 1 for _, body in _templates), f"template set {_key} needs one idea slot per scene"
assert DEFAULT_TEMPLATE_KEY in STORY_TEMPLATES, "default template set is missing"


def select_templates(genre: str, audience: str) -> List[Tuple[str, str]]:
    templates = STORY_TEMPLATES.get((genre, audience))
    if templates is None:
        logger.info(f"No templates for ({genre}, {audience}); using {DEFAULT_TEMPLATE_KEY}")
        templates = STORY_TEMPLATES[DEFAULT_TEMPLATE_KEY]
    return templates


def build_scenes(req: StoryRequest) -> List[Scene]:
    """Build the five scenes of a story. Output depends only on the request."""
    if not req.idea or not req.idea.strip():
        raise ValueError("idea must not be empty")

    closing = CLOSING_SENTENCE.format(tone=req.tone, genre=req.genre, audience=req.audience)
    scenes = []
    for index, (title, body) in enumerate(select_templates(req.genre, req.audience)):
        scenes.append(Scene(
            id=index + 1,
            title=title,
            text=body.replace(IDEA_SLOT, req.idea, 1) + closing,
        ))
    return scenes
