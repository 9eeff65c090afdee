import os
from dotenv import load_dotenv
import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Optional .env next to the backend directory; deployments set STABILITY_API_KEY directly
env_path = os.path.join(os.path.dirname(__file__), "..", ".env")
if os.path.exists(env_path):
    load_dotenv(env_path)
    logger.info(f"Loaded settings from {env_path}")
else:
    logger.info("No .env file found, using environment variables")

STABILITY_API_KEY = os.getenv("STABILITY_API_KEY", "")
STABILITY_API_HOST = os.getenv("STABILITY_API_HOST", "https://api.stability.ai").rstrip("/")
STABILITY_ENGINE_ID = os.getenv("STABILITY_ENGINE_ID", "stable-diffusion-v1-5")
STABILITY_CFG_SCALE = float(os.getenv("STABILITY_CFG_SCALE", "7"))
STABILITY_TIMEOUT_S = float(os.getenv("STABILITY_TIMEOUT_S", "60"))

IMAGE_WIDTH = int(os.getenv("IMAGE_WIDTH", "1024"))
IMAGE_HEIGHT = int(os.getenv("IMAGE_HEIGHT", "768"))

# Pause between scenes in a batch, and how long the finished progress stays visible
SCENE_DELAY_S = float(os.getenv("SCENE_DELAY_S", "1.5"))
PROGRESS_RESET_S = float(os.getenv("PROGRESS_RESET_S", "2.0"))

OPTIMIZE_PROMPTS = os.getenv("OPTIMIZE_PROMPTS", "").strip().lower() in ("1", "true", "yes")

# Origins allowed to call the story API from a browser, comma-separated
_allowed_origins_env = os.getenv("ALLOWED_ORIGINS", "").strip()
if _allowed_origins_env:
    ALLOWED_ORIGINS = [o.strip() for o in _allowed_origins_env.split(",") if o.strip()]
else:
    ALLOWED_ORIGINS = ["*"]

# Finished background jobs kept for status polling; oldest are dropped first
MAX_JOBS = int(os.getenv("MAX_JOBS", "100"))

def has_image_key() -> bool:
    key_present = bool(os.getenv("STABILITY_API_KEY", STABILITY_API_KEY))
    if not key_present:
        logger.warning("Missing API keys: STABILITY_API_KEY")
    return key_present
