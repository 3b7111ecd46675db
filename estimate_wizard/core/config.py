from __future__ import annotations

from dataclasses import dataclass

from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_CATEGORY_SLUGS: dict[str, str] = {
    "kitchens": "calculator-kitchens",
    "bathrooms": "calculator-bathrooms",
    "basements": "calculator-basements",
    "windows": "calculator-windows",
    "flooring": "calculator-flooring",
    "home-renovations": "calculator-renovations",
    "structural": "calculator-structural",
}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    API_BASE_URL: str = "http://localhost:8080/wp-json/estimate-calculator/v1"
    API_TIMEOUT_MS: int = 10000
    API_RETRIES: int = 2
    API_RETRY_BACKOFF_SECONDS: float = 1.0

    CONTENT_FALLBACK_ENABLED: bool = True
    CATEGORY_SLUGS: dict[str, str] = dict(DEFAULT_CATEGORY_SLUGS)

    EMAIL_FROM_ADDRESS: str = "info@example.com"
    EMAIL_FROM_NAME: str = "Estimate Calculator"
    NOTIFICATION_FROM_NAME: str = "Estimate Calculator Leads"
    MARKETING_EMAIL_ADDRESS: str = "info@example.com"
    MARKETING_EMAIL_NAME: str = "Marketing"

    CURRENCY_SYMBOL: str = "$"


settings = Settings()


@dataclass(frozen=True)
class ApiConfig:
    base_url: str
    timeout_ms: int = 10000
    retries: int = 2
    retry_backoff_seconds: float = 1.0

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0

    @classmethod
    def from_settings(cls, source: Settings | None = None) -> "ApiConfig":
        source = source or settings
        return cls(
            base_url=source.API_BASE_URL.rstrip("/"),
            timeout_ms=source.API_TIMEOUT_MS,
            retries=max(0, source.API_RETRIES),
            retry_backoff_seconds=source.API_RETRY_BACKOFF_SECONDS,
        )
