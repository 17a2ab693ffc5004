"""
hashtree - Configuration
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from hashtree.core.algorithms import HashAlgorithm


class Settings(BaseSettings):
    """Library settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="HASHTREE_",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "hashtree"
    VERSION: str = "0.1.0"
    ENV: str = "development"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Hashing
    HASH_ALGORITHM: HashAlgorithm = HashAlgorithm.SHA256

    # Metrics
    METRICS_ENABLED: bool = True


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
