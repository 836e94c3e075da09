import os
from dataclasses import dataclass
from typing import List, Optional

from dotenv import load_dotenv

# Load a local .env file if present (no-op otherwise).
load_dotenv()


def _env_bool(name: str, default: Optional[bool] = None) -> Optional[bool]:
    """Parse a boolean environment variable.

    Returns:
      - True/False if the env var is set to a recognizable value
      - default if unset or unrecognized

    Accepted truthy: 1, true, yes, y, on
    Accepted falsy:  0, false, no, n, off
    """

    raw = os.environ.get(name)
    if raw is None:
        return default
    v = raw.strip().lower()
    if v in ("1", "true", "yes", "y", "on"):
        return True
    if v in ("0", "false", "no", "n", "off"):
        return False
    return default


def _default_cors_origins() -> str:
    origins = [
        (os.environ.get("FRONTEND_URL") or "").strip(),
        (os.environ.get("ADMIN_URL") or "").strip(),
    ]
    origins = [o for o in origins if o]
    if origins:
        return ",".join(origins)
    return "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000"


@dataclass(frozen=True)
class Config:
    """Runtime configuration.

    IMPORTANT: Provide secrets via environment variables or a .env file.
    Do not hardcode secrets in source code.
    """

    # -----------------
    # Core
    # -----------------
    MONGODB_URI: str = os.environ.get("MONGODB_URI", "mongodb://localhost:27017")
    MONGODB_DB: str = os.environ.get("MONGODB_DB", "carshowroom")

    # All API routes are mounted under this prefix (the admin SPA expects /api).
    API_PREFIX: str = os.environ.get("API_PREFIX", "/api")

    # development|production. Development responses include stack traces on 500s.
    APP_ENV: str = os.environ.get("APP_ENV", "production")

    # -----------------
    # Auth (JWT)
    # -----------------
    # NOTE: In dev, this defaults to a fixed string so you can get started.
    # In production, you MUST set AUTH_JWT_SECRET to a strong random value.
    AUTH_JWT_SECRET: str = os.environ.get("AUTH_JWT_SECRET", "dev_change_me")
    AUTH_TOKEN_EXPIRE_MINUTES: int = int(os.environ.get("AUTH_TOKEN_EXPIRE_MINUTES", "10080"))  # 7 days

    # Bootstrap the admin account on startup if it doesn't exist yet
    BOOTSTRAP_ADMIN: bool = _env_bool("BOOTSTRAP_ADMIN", True) is True
    ADMIN_EMAIL: str = os.environ.get("ADMIN_EMAIL", "admin@carshowroom.com")
    ADMIN_PASSWORD: str = os.environ.get("ADMIN_PASSWORD", "CarShowroom2024@AdminSecurePass")
    ADMIN_NAME: str = os.environ.get("ADMIN_NAME", "CarShowroom Admin")

    # -----------------
    # Uploads
    # -----------------
    UPLOAD_DIR: str = os.environ.get("UPLOAD_DIR", "./uploads")
    UPLOAD_MAX_BYTES: int = int(os.environ.get("UPLOAD_MAX_BYTES", str(5 * 1024 * 1024)))  # 5MB
    UPLOAD_MAX_FILES: int = int(os.environ.get("UPLOAD_MAX_FILES", "10"))

    # -----------------
    # CORS
    # -----------------
    # Public site + admin SPA origins. Defaults to FRONTEND_URL/ADMIN_URL when set.
    CORS_ALLOW_ORIGINS: str = os.environ.get("CORS_ALLOW_ORIGINS", _default_cors_origins())

    @property
    def is_development(self) -> bool:
        return (self.APP_ENV or "").strip().lower() == "development"

    def cors_origins(self) -> List[str]:
        return [o.strip() for o in (self.CORS_ALLOW_ORIGINS or "").split(",") if o.strip()]


def load_config() -> Config:
    return Config()
