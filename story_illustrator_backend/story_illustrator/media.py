from urllib.parse import quote
from xml.sax.saxutils import escape
from .settings import IMAGE_WIDTH, IMAGE_HEIGHT

PLACEHOLDER_PREFIX = "data:image/svg+xml,"
PLACEHOLDER_COLORS = ("#8B5CF6", "#EC4899")
PLACEHOLDER_TEXT_LENGTH = 40

# Characters left unescaped by JavaScript's encodeURIComponent
_URI_SAFE = "-_.!~*'()"

def placeholder_svg(prompt: str, scene_index: int, w=IMAGE_WIDTH, h=IMAGE_HEIGHT) -> str:
    start, end = PLACEHOLDER_COLORS
    label = escape(prompt[:PLACEHOLDER_TEXT_LENGTH])
    return (
        f'<svg width="{w}" height="{h}" xmlns="http://www.w3.org/2000/svg">'
        f'<defs>'
        f'<linearGradient id="grad{scene_index}" x1="0%" y1="0%" x2="100%" y2="100%">'
        f'<stop offset="0%" style="stop-color:{start};stop-opacity:1" />'
        f'<stop offset="100%" style="stop-color:{end};stop-opacity:1" />'
        f'</linearGradient>'
        f'</defs>'
        f'<rect width="{w}" height="{h}" fill="url(#grad{scene_index})" />'
        f'<text x="50%" y="50%" font-size="32" text-anchor="middle" fill="white">{label}...</text>'
        f'</svg>'
    )

def placeholder_data_uri(prompt: str, scene_index: int) -> str:
    return PLACEHOLDER_PREFIX + quote(placeholder_svg(prompt, scene_index), safe=_URI_SAFE)

def is_placeholder_image(url) -> bool:
    return bool(url) and url.startswith(PLACEHOLDER_PREFIX)
