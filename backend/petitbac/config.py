import os
from pathlib import Path


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev")

    # CORS
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")

    # Reverse proxy / IP headers
    TRUST_PROXY_HEADERS = os.environ.get("TRUST_PROXY_HEADERS", "1") == "1"

    # Socket.IO (empty means: pick per platform in create_app)
    SOCKETIO_ASYNC_MODE = os.environ.get("SOCKETIO_ASYNC_MODE", "").strip()

    # Categories (random themes pool, JSON array or {"categories": [...]})
    CATEGORIES_FILE = os.environ.get(
        "CATEGORIES_FILE",
        str(Path(__file__).resolve().parents[1] / "data" / "categories.json"),
    )
    RANDOM_THEMES_COUNT = int(os.environ.get("RANDOM_THEMES_COUNT", "6"))

    # Game
    ROOM_CODE_LENGTH = int(os.environ.get("ROOM_CODE_LENGTH", "5"))
    NAME_MAX_LENGTH = int(os.environ.get("NAME_MAX_LENGTH", "20"))
    ANSWER_MAX_LENGTH = int(os.environ.get("ANSWER_MAX_LENGTH", "60"))
