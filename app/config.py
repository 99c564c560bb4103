"""Application settings loaded from environment variables and `.env`."""

from enum import Enum

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMProvider(str, Enum):
    GEMINI = "gemini"
    OPENAI = "openai"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── LLM ────────────────────────────────────────
    llm_provider: LLMProvider = LLMProvider.GEMINI
    llm_api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("llm_api_key", "api_key", "gemini_api_key"),
    )
    gemini_model: str = "gemini-2.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    openai_model: str = "gpt-4o-mini"

    # ── Auth ───────────────────────────────────────
    admin_password: SecretStr | None = None

    # ── Sessions ───────────────────────────────────
    session_idle_ttl: float = Field(default=1800.0, gt=0)
    max_sessions: int = Field(default=1000, ge=1)

    # ── Seat simulation ────────────────────────────
    seat_refresh_interval: float = Field(default=2.5, gt=0)

    # ── Covers ─────────────────────────────────────
    cover_lookup_enabled: bool = True
    openlibrary_base_url: str = "https://openlibrary.org"

    log_level: str = "INFO"

    @property
    def has_llm_credential(self) -> bool:
        return bool(self.llm_api_key and self.llm_api_key.get_secret_value())


settings = Settings()
