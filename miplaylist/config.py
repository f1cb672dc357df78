import os
from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

class Settings:
    DATA_FILE = os.getenv("PLAYLIST_DATA_FILE", os.path.join(PROJECT_ROOT, "data", "videos.json"))

    # Where the client finds the server
    API_URL = os.getenv("PLAYLIST_API_URL", "http://127.0.0.1:8000")

    HOST = os.getenv("PLAYLIST_HOST", "127.0.0.1")
    PORT = int(os.getenv("PLAYLIST_PORT", "8000"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # UI delays, in seconds
    REFRESH_DELAY = 1.0
    TOAST_DELAY = 3.0
    ERROR_DELAY = 5.0
    ANIMATION_DELAY = 0.5

settings = Settings()
