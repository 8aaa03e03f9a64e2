import os
from dotenv import load_dotenv

load_dotenv()

DEFAULT_API_BASE_URL = "http://localhost:8080"


def build_api_base_url():
    url = os.getenv("API_BASE_URL") or os.getenv("VITE_API_BASE_URL")
    if not url:
        return DEFAULT_API_BASE_URL
    return url.rstrip("/")


def _int_env(name, default):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


API_BASE_URL = build_api_base_url()
POLL_INTERVAL_SECONDS = _int_env("POLL_INTERVAL_SECONDS", 30)
UPCOMING_MONTHS_LIMIT = _int_env("UPCOMING_MONTHS_LIMIT", 6)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
