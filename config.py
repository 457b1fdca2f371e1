"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()


# ── Database ──────────────────────────────────────────────
DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///personal_website.db")
DB_POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", "5"))
DB_POOL_TIMEOUT_SECONDS: float = float(os.getenv("DB_POOL_TIMEOUT_SECONDS", "30"))

# ── Uploads ───────────────────────────────────────────────
UPLOAD_DIR: str = os.getenv("UPLOAD_DIR", "/var/lib/personal-website/photos")
PHOTOS_URL_PREFIX: str = os.getenv("PHOTOS_URL_PREFIX", "/photos").rstrip("/")

# ── Frontend ──────────────────────────────────────────────
STATIC_DIR: str = os.getenv("STATIC_DIR", "../frontend/dist")

# ── HTTP server ───────────────────────────────────────────
HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "8080"))

_raw_origins = os.getenv("CORS_ORIGINS", "*")
CORS_ORIGINS: list[str] = [o.strip() for o in _raw_origins.split(",") if o.strip()]

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
