# Vocabularies and phrase tables used to turn scene text into an illustration prompt.
# Ordered tuples are scanned first-match-wins, so declaration order matters.

COLOR_WORDS = (
    "red", "blue", "green", "yellow", "purple", "orange", "pink", "black", "white",
    "golden", "silver", "brown", "gray", "crimson", "azure", "emerald",
)

OBJECT_WORDS = (
    "door", "window", "tree", "house", "castle", "sword", "book", "key", "flower",
    "mountain", "river", "forest", "cave", "bridge", "tower", "ship", "car", "horse",
    "dragon", "crown", "ring", "mirror", "chest", "statue",
)

CHARACTER_TYPES = (
    "girl", "boy", "woman", "man", "child", "children", "person", "people",
    "princess", "prince", "king", "queen", "knight", "wizard", "witch",
    "hero", "heroine", "villain", "warrior", "mage", "archer", "thief",
    "dragon", "unicorn", "fairy", "elf", "dwarf", "giant", "monster",
    "robot", "alien", "android", "cyborg", "detective", "scientist",
    "pirate", "sailor", "captain", "traveler", "explorer", "adventurer",
)

LOCATION_KEYWORDS = (
    ("forest", ("forest", "woods", "jungle", "trees")),
    ("castle", ("castle", "palace", "fortress", "tower")),
    ("city", ("city", "town", "street", "building")),
    ("ocean", ("ocean", "sea", "beach", "shore", "waves")),
    ("mountain", ("mountain", "hill", "peak", "cliff")),
    ("cave", ("cave", "cavern", "underground", "tunnel")),
    ("sky", ("sky", "clouds", "flying", "floating")),
    ("desert", ("desert", "sand", "dunes", "oasis")),
    ("space", ("space", "stars", "planet", "galaxy", "spaceship")),
    ("house", ("house", "home", "room", "attic", "basement")),
    ("garden", ("garden", "park", "meadow", "field")),
    ("laboratory", ("laboratory", "lab", "experiment", "research")),
)

SETTING_DESCRIPTIONS = {
    ("forest", "fantasy"): "mystical enchanted forest with magical glowing elements",
    ("forest", "sci-fi"): "alien forest with bioluminescent plants and strange trees",
    ("forest", "mystery"): "dark mysterious forest with fog and shadows",
    ("forest", "adventure"): "lush adventure forest with ancient trees and hidden paths",
    ("forest", "comedy"): "cheerful cartoon forest with friendly animals",
    ("castle", "fantasy"): "majestic fantasy castle with towers and magical aura",
    ("castle", "sci-fi"): "futuristic fortress with advanced technology",
    ("castle", "mystery"): "gothic castle with mysterious shadows and secrets",
    ("castle", "adventure"): "grand adventure castle on a hilltop",
    ("castle", "comedy"): "whimsical cartoon castle with bright colors",
    ("city", "fantasy"): "magical medieval city with fantasy architecture",
    ("city", "sci-fi"): "futuristic cyberpunk city with neon lights and flying vehicles",
    ("city", "mystery"): "noir city streets with dramatic lighting",
    ("city", "adventure"): "bustling adventure city with diverse architecture",
    ("city", "comedy"): "colorful cartoon city with funny buildings",
}

DEFAULT_SETTINGS = {
    "fantasy": "magical fantasy realm with enchanted elements",
    "sci-fi": "futuristic sci-fi environment with advanced technology",
    "mystery": "mysterious atmospheric setting with dramatic lighting",
    "adventure": "exciting adventure landscape with epic scale",
    "comedy": "bright cheerful setting with whimsical elements",
    "drama": "emotional dramatic setting with meaningful atmosphere",
}
FALLBACK_SETTING = "beautiful detailed environment"

MOOD_KEYWORDS = (
    ("happy", ("happy", "joy", "smile", "laugh", "cheerful", "bright", "wonderful")),
    ("sad", ("sad", "cry", "tear", "sorrow", "melancholy", "gloomy")),
    ("scared", ("scared", "afraid", "fear", "terrified", "frightened", "nervous")),
    ("excited", ("excited", "thrilled", "eager", "enthusiastic", "energetic")),
    ("peaceful", ("peaceful", "calm", "serene", "quiet", "tranquil", "gentle")),
    ("dramatic", ("dramatic", "intense", "powerful", "strong", "urgent", "critical")),
    ("mysterious", ("mysterious", "secret", "hidden", "unknown", "strange", "puzzling")),
)

MOOD_ATMOSPHERES = {
    "happy": "bright cheerful atmosphere with warm lighting",
    "sad": "melancholic atmosphere with soft muted colors",
    "scared": "tense atmospheric lighting with dramatic shadows",
    "excited": "dynamic energetic atmosphere with vibrant colors",
    "peaceful": "serene calm atmosphere with gentle lighting",
    "dramatic": "intense dramatic atmosphere with powerful composition",
    "mysterious": "mysterious atmospheric mood with intriguing shadows",
}

TONE_ATMOSPHERES = {
    "dark": "dark moody atmosphere with dramatic lighting",
    "lighthearted": "bright uplifting atmosphere with cheerful mood",
    "epic": "epic grandiose atmosphere with dramatic scale",
    "mysterious": "mysterious enigmatic atmosphere",
    "romantic": "romantic soft atmosphere with warm gentle lighting",
    "adventurous": "adventurous dynamic atmosphere with exciting energy",
}
FALLBACK_ATMOSPHERE = "beautiful atmospheric lighting"

GENRE_ELEMENTS = {
    "fantasy": "magical sparkles, mystical aura, fantasy elements",
    "sci-fi": "futuristic technology, sci-fi elements, advanced design",
    "mystery": "mysterious shadows, noir elements, investigative mood",
    "adventure": "epic adventure elements, heroic composition, dynamic action",
    "comedy": "humorous visual elements, cartoonish style, playful details",
    "drama": "emotional depth, character-focused composition, meaningful details",
    "horror": "spooky atmospheric elements, dark mood, eerie details",
    "romance": "romantic soft elements, warm colors, tender mood",
}

ARTISTIC_STYLES = {
    "fantasy": {
        "kids": "whimsical children’s book, bright magical colors",
        "teens": "fantasy art, epic, mystical, detailed",
        "adults": "dark fantasy, atmospheric, intricate",
    },
    "sci-fi": {
        "kids": "cartoon sci-fi, friendly robots, space adventure",
        "teens": "cyberpunk, neon, futuristic, dynamic",
        "adults": "realistic sci-fi, cinematic lighting, concept art",
    },
    "mystery": {
        "kids": "gentle mystery, warm colors, cozy detective",
        "teens": "noir style, dramatic lighting, intriguing",
        "adults": "dark mystery, sophisticated, atmospheric",
    },
    "adventure": {
        "kids": "bright cartoon adventure, fun and colorful",
        "teens": "dynamic action, heroic characters",
        "adults": "cinematic adventure, epic composition",
    },
}
DEFAULT_STYLE_GENRE = "adventure"
DEFAULT_STYLE_AUDIENCE = "kids"

TONE_MODIFIERS = {
    "dark": ", moody, dramatic shadows",
    "lighthearted": ", cheerful, uplifting",
    "epic": ", grand, heroic, majestic",
    "mysterious": ", enigmatic, shadowy",
    "romantic": ", warm, emotional, soft light",
    "adventurous": ", dynamic, exciting action",
    "peaceful": ", serene, calm colors",
    "intense": ", high energy, powerful composition",
}

QUALITY_SUFFIX = ", high quality, detailed illustration, storybook art"

# Words dropped from the first sentence before it is used as the base of a prompt
NARRATIVE_VERBS = (
    "said", "told", "thought", "felt", "knew", "realized", "remembered", "wondered",
    "decided", "began", "started", "continued", "finished", "ended",
)
STOPWORDS = ("the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by")

INTENSIFIERS = ("very", "really", "quite", "somewhat", "rather")
MAX_PROMPT_LENGTH = 200
MAX_PROMPT_CLAUSES = 4
