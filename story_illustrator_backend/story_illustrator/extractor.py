"""
Keyword extraction over scene text.

Matching is plain case-insensitive substring containment ("children" also
matches "child", "street" also matches "tree"). Results come back in
vocabulary order.
"""
from typing import List, Optional

from .prompts import (
    CHARACTER_TYPES,
    COLOR_WORDS,
    DEFAULT_SETTINGS,
    FALLBACK_SETTING,
    LOCATION_KEYWORDS,
    MOOD_KEYWORDS,
    OBJECT_WORDS,
    SETTING_DESCRIPTIONS,
)


def _matches(text: str, vocabulary) -> List[str]:
    lower = text.lower()
    found = []
    for word in vocabulary:
        if word in lower and word not in found:
            found.append(word)
    return found


def extract_visual_terms(text: str) -> List[str]:
    """Colors first, then objects."""
    return _matches(text, COLOR_WORDS + OBJECT_WORDS)


def extract_characters(text: str) -> List[str]:
    return _matches(text, CHARACTER_TYPES)


def detect_location(text: str) -> Optional[str]:
    lower = text.lower()
    for location, keywords in LOCATION_KEYWORDS:
        if any(keyword in lower for keyword in keywords):
            return location
    return None


def setting_description(location: str, genre: str) -> str:
    return SETTING_DESCRIPTIONS.get((location, genre)) or f"{location} environment with {genre} elements"


def default_setting(genre: str) -> str:
    return DEFAULT_SETTINGS.get(genre, FALLBACK_SETTING)


def extract_setting(text: str, genre: str) -> str:
    location = detect_location(text)
    if location is None:
        return default_setting(genre)
    return setting_description(location, genre)


def detect_mood(text: str) -> Optional[str]:
    lower = text.lower()
    for mood, keywords in MOOD_KEYWORDS:
        if any(keyword in lower for keyword in keywords):
            return mood
    return None
