import logging
import os
from dotenv import load_dotenv

from services.deadline import DEFAULT_TIMEOUT

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger("config")

def _env_number(name: str, cast, default):
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        value = None
    if value is None or value <= 0:
        logger.warning("Ignoring %s=%r, expected a positive number; using %s", name, raw, default)
        return default
    return value

def load_settings():
    # Loads .env into process env; safe to call multiple times
    load_dotenv()
    return {
        "WEATHER_TIMEOUT": _env_number("WEATHER_TIMEOUT", float, DEFAULT_TIMEOUT),
        "LOG_LEVEL": os.getenv("LOG_LEVEL", "INFO"),
        "HOST": os.getenv("HOST", "0.0.0.0"),
        "PORT": _env_number("PORT", int, 5000),
    }

def setup_logging(level: str = "INFO"):
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
    # Connection pool chatter drowns out our own request lines
    logging.getLogger("urllib3").setLevel(logging.WARNING)
