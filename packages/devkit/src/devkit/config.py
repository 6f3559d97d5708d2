from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceSettings(BaseSettings):
    model_config = SettingsConfigDict(extra="ignore")

    SERVICE_NAME: str = "service"
    LOG_LEVEL: str = "INFO"
    DATABASE_URL: str | None = None
    REDIS_URL: str | None = None
    LLM_BASE_URL: str | None = None
    LLM_API_KEY: str | None = None
    LLM_MODEL: str = "mistral-7b-instruct"
    LLM_TIMEOUT_SECONDS: float = 15.0
    PINCODE_SEARCH_LIMIT: int = 10
    PINCODE_PREFIX_LIMIT: int = 100
    FALLBACK_RANDOM_SEED: int | None = None
    RATE_LIMIT_PER_MINUTE: int = 100


def load_settings(service_name: str) -> ServiceSettings:
    return ServiceSettings(SERVICE_NAME=service_name)
