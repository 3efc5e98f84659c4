import os
from pathlib import Path
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

# On Vercel, env vars are injected by the platform
if not os.environ.get("VERCEL"):
    load_dotenv(BASE_DIR / ".env")


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> list:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


# Database
MONGODB_URI = os.getenv("MONGODB_URI")
DEFAULT_DB_NAME = "ij_portfolio"
DB_REQUIRED = _env_bool("DB_REQUIRED")
DB_TIMEOUT_MS = int(os.getenv("DB_TIMEOUT_MS", "5000"))

# HTTP
API_PREFIX = "/api/v1"
CORS_ORIGINS = _env_list("CORS_ORIGINS", "*")
MAX_UPLOAD_MB = int(os.getenv("MAX_UPLOAD_MB", "5"))
ALLOWED_ATTACHMENT_EXTENSIONS = _env_list(
    "ALLOWED_ATTACHMENT_EXTENSIONS", "pdf,png,jpg,jpeg,txt,doc,docx"
)

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Local dev server
PORT = int(os.getenv("PORT", "5000"))


def default_settings() -> dict:
    """Snapshot of the environment-derived settings, keyed as Flask config."""
    return {
        "MONGODB_URI": MONGODB_URI,
        "DB_REQUIRED": DB_REQUIRED,
        "DB_TIMEOUT_MS": DB_TIMEOUT_MS,
        "CORS_ORIGINS": CORS_ORIGINS,
        "MAX_CONTENT_LENGTH": MAX_UPLOAD_MB * 1024 * 1024,
        "ALLOWED_ATTACHMENT_EXTENSIONS": ALLOWED_ATTACHMENT_EXTENSIONS,
    }
