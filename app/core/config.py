import os
import logging
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Invalid integer for {name}={raw!r}, using default {default}")
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Invalid number for {name}={raw!r}, using default {default}")
        return default
    if value <= 0:
        logger.warning(f"{name} must be positive, using default {default}")
        return default
    return value


class Settings:
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "PayPrompt Nudge API")
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = _int_env("PORT", 4000)
    # Comma-separated list of allowed origins, "*" allows any origin
    CLIENT_URL: str = os.getenv("CLIENT_URL", "*")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", "standard")
    WEBHOOK_TIMEOUT_SECONDS: float = _float_env("WEBHOOK_TIMEOUT_SECONDS", 10.0)

    @property
    def cors_origins(self) -> list:
        origins = [o.strip() for o in (self.CLIENT_URL or "").split(",") if o.strip()]
        if not origins or "*" in origins:
            return ["*"]
        return origins


settings = Settings()
