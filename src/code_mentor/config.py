import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


def _split_origins(raw: str) -> tuple[str, ...]:
    return tuple(origin.strip() for origin in raw.split(",") if origin.strip())


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Gemini
    gemini_api_key: str | None = os.getenv("GEMINI_API_KEY") or None
    gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    gemini_base_url: str = os.getenv("GEMINI_BASE_URL", "https://generativelanguage.googleapis.com")
    gemini_timeout: float = float(os.getenv("GEMINI_TIMEOUT", "30"))

    # Cache
    cache_ttl: float = float(os.getenv("CACHE_TTL", "60"))
    cache_check_period: float = float(os.getenv("CACHE_CHECK_PERIOD", "120"))  # ~2x TTL

    # Rate limiting (per client address)
    rate_limit_window: float = float(os.getenv("RATE_LIMIT_WINDOW", "10"))
    rate_limit_max: int = int(os.getenv("RATE_LIMIT_MAX", "10"))

    # API
    allowed_origins: tuple[str, ...] = _split_origins(os.getenv("ALLOWED_ORIGINS", ""))
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("PORT", "3000"))
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"

    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def allows_all_origins(self) -> bool:
        """An empty allow-list admits every origin."""
        return not self.allowed_origins

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_ttl <= 0:
            raise ValueError("CACHE_TTL must be positive")
        if self.cache_check_period <= 0:
            raise ValueError("CACHE_CHECK_PERIOD must be positive")
        if self.rate_limit_window <= 0:
            raise ValueError("RATE_LIMIT_WINDOW must be positive")
        if self.rate_limit_max < 1:
            raise ValueError(f"RATE_LIMIT_MAX must be at least 1, got {self.rate_limit_max}")
        if self.gemini_timeout <= 0:
            raise ValueError("GEMINI_TIMEOUT must be positive")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for the relay process."""
    logging.basicConfig(
        level=level or get_settings().log_level,
        format="[%(asctime)s] %(levelname)s %(name)s - %(message)s",
    )
