"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ────────────────────────────────────────────────
#
# pydantic-settings reads configuration from two sources (in priority order):
#
#   1. **Environment variables**: e.g., MONGODB_URI=mongodb://db:27017
#      (highest priority: always wins)
#   2. **.env file**: key=value lines in the project root .env file
#      (lower priority: used for local development)
#
# Field ``mongodb_uri`` maps to env var ``MONGODB_URI``; matching is
# case-insensitive.  Defaults apply when neither source sets a value.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Tokoro application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Document store ===
    # "mongodb" talks to a real server; "memory" keeps everything in-process
    # and is meant for local experiments and tests.
    document_store: str = "mongodb"
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_database: str = "tokoro"

    # === LLM Providers ===
    # Empty string = "not configured" → main.py skips the provider.
    openai_api_key: str = ""
    openai_base_url: str = ""  # OpenAI-compatible endpoint (TogetherAI, etc.)
    openai_text_model: str = ""  # Override the tag generation model
    ollama_base_url: str = ""

    # === HTTP ===
    cors_allowed_origins: list[str] = ["*"]

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"

    def get_available_llm_providers(self) -> list[str]:
        """Return the LLM provider names that are configured, in priority order."""
        providers: list[str] = []
        if self.openai_api_key:
            providers.append("openai")
        if self.ollama_base_url:
            providers.append("ollama")
        return providers
