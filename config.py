import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./testhub.db")
    REDIS_URL = data.get("REDIS_URL", "redis://localhost:6379/0")
    CACHE_BACKEND = data.get("CACHE_BACKEND", "redis")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_EXPIRE_MINUTES = int(data.get("JWT_EXPIRE_MINUTES", 60))
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")

    INVITATION_TTL_DAYS = int(data.get("INVITATION_TTL_DAYS", 7))
    MAX_ID_ATTEMPTS = int(data.get("MAX_ID_ATTEMPTS", 3))
    MAX_FORCED_REMOVALS = int(data.get("MAX_FORCED_REMOVALS", 50))

    # (limit, window_seconds)
    LOGIN_RATE_LIMIT = tuple(data.get("LOGIN_RATE_LIMIT", (5, 900)))
    INVITE_RATE_LIMIT = tuple(data.get("INVITE_RATE_LIMIT", (20, 3600)))
    INVITATION_CANCEL_RATE_LIMIT = tuple(data.get("INVITATION_CANCEL_RATE_LIMIT", (10, 60)))
    SEAT_RESOLUTION_RATE_LIMIT = tuple(data.get("SEAT_RESOLUTION_RATE_LIMIT", (5, 60)))
