import os
from dotenv import find_dotenv, load_dotenv

# Values from a .env file in the working directory; real env vars win
load_dotenv(find_dotenv(usecwd=True))


def parse_origins(raw):
    """Split a comma-separated ORIGIN value into a clean list."""
    return [origin.strip() for origin in (raw or "").split(",") if origin.strip()]


HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 3001))

# Empty list means every origin is accepted
ALLOWED_ORIGINS = parse_origins(os.getenv("ORIGIN", ""))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", None)

RELOAD = os.getenv("RELOAD", "false").lower() in ("1", "true", "yes")
