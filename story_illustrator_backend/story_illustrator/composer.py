import re
import logging

from .extractor import detect_mood, extract_characters, extract_setting, extract_visual_terms
from .models import Scene, StoryRequest
from .prompts import (
    ARTISTIC_STYLES,
    DEFAULT_STYLE_AUDIENCE,
    DEFAULT_STYLE_GENRE,
    FALLBACK_ATMOSPHERE,
    GENRE_ELEMENTS,
    INTENSIFIERS,
    MAX_PROMPT_CLAUSES,
    MAX_PROMPT_LENGTH,
    MOOD_ATMOSPHERES,
    NARRATIVE_VERBS,
    QUALITY_SUFFIX,
    STOPWORDS,
    TONE_ATMOSPHERES,
    TONE_MODIFIERS,
)

logger = logging.getLogger(__name__)

_NARRATIVE_VERBS_RE = re.compile(r"\b(" + "|".join(NARRATIVE_VERBS) + r")\b", re.IGNORECASE)
_STOPWORDS_RE = re.compile(r"\b(" + "|".join(STOPWORDS) + r")\b", re.IGNORECASE)
_INTENSIFIERS_RE = re.compile(r"\b(" + "|".join(INTENSIFIERS) + r")\b", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")

MIN_CONDENSED_LENGTH = 10


def _collapse(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def condense_sentence(sentence: str) -> str:
    visual = _NARRATIVE_VERBS_RE.sub("", sentence)
    visual = _STOPWORDS_RE.sub(" ", visual)
    return _collapse(visual)


def base_phrase(text: str, title: str) -> str:
    """Condensed first sentence of the scene, or the title when too little survives."""
    sentences = [s.strip() for s in text.split(".") if s.strip()]
    if sentences:
        condensed = condense_sentence(sentences[0])
        if len(condensed) > MIN_CONDENSED_LENGTH:
            return condensed
    return title


def atmosphere(text: str, tone: str) -> str:
    mood = detect_mood(text)
    if mood:
        return MOOD_ATMOSPHERES[mood]
    return TONE_ATMOSPHERES.get(tone, FALLBACK_ATMOSPHERE)


def genre_elements(genre: str) -> str:
    return GENRE_ELEMENTS.get(genre, "")


def artistic_style(genre: str, audience: str, tone: str) -> str:
    genre_styles = ARTISTIC_STYLES.get(genre, ARTISTIC_STYLES[DEFAULT_STYLE_GENRE])
    audience_style = genre_styles.get(audience, genre_styles[DEFAULT_STYLE_AUDIENCE])
    return f"{audience_style}{TONE_MODIFIERS.get(tone, '')}"


def build_scene_prompt(scene: Scene, req: StoryRequest) -> str:
    """Scene-level description: base phrase, characters, setting, atmosphere, genre flourish."""
    logger.debug(f"Visual terms for scene {scene.id}: {extract_visual_terms(scene.text)}")

    prompt = base_phrase(scene.text, scene.title)
    characters = extract_characters(scene.text)
    if characters:
        prompt += f", featuring {', '.join(characters)}"
    for part in (
        extract_setting(scene.text, req.genre),
        atmosphere(scene.text, req.tone),
        genre_elements(req.genre),
    ):
        if part:
            prompt += f", {part}"
    return _collapse(prompt)


def compose_prompt(scene: Scene, req: StoryRequest) -> str:
    style = artistic_style(req.genre, req.audience, req.tone)
    return _collapse(f"{build_scene_prompt(scene, req)}, {style}{QUALITY_SUFFIX}")


def optimize_prompt(prompt: str) -> str:
    optimized = _collapse(_INTENSIFIERS_RE.sub("", prompt))
    if len(optimized) > MAX_PROMPT_LENGTH:
        clauses = [c.strip() for c in optimized.split(",")]
        optimized = ", ".join(clauses[:MAX_PROMPT_CLAUSES])
    return optimized
