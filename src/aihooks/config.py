"""Configuration management using pydantic-settings.

Settings are the external credential-loading layer: they read AI_HOOK_*
environment variables (and a local .env file) and produce the credential
records handed to ProviderRegistry. The provider engine itself never reads
the environment, and no Settings instance exists until a caller builds one.
"""

from typing import Any, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .providers.catalog import ProviderId
from .providers.registry import ProviderCredential

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="AI_HOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Provider keys (AI_HOOK_<PROVIDER>_KEY)
    openai_key: str = ""  # https://platform.openai.com/api-keys
    claude_key: str = ""  # https://console.anthropic.com/
    gemini_key: str = ""  # https://aistudio.google.com/apikey
    groq_key: str = ""  # https://console.groq.com/keys
    deepseek_key: str = ""
    mistral_key: str = ""
    xai_key: str = ""
    perplexity_key: str = ""
    openrouter_key: str = ""  # https://openrouter.ai/keys

    # Per-provider default models (AI_HOOK_<PROVIDER>_MODEL), empty = built-in default
    openai_model: str = ""
    claude_model: str = ""
    gemini_model: str = ""
    groq_model: str = ""
    deepseek_model: str = ""
    mistral_model: str = ""
    xai_model: str = ""
    perplexity_model: str = ""
    openrouter_model: str = ""

    # Provider used when a call names none (must also have a key)
    default_provider: str = ""

    # HTTP
    http_timeout: float = 60.0

    # Logging
    log_level: LogLevel = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v: Any) -> Any:
        """Accept log levels in any case."""
        return v.strip().upper() if isinstance(v, str) else v

    def key_for(self, provider: ProviderId) -> str:
        """Get the configured key for a provider."""
        return getattr(self, f"{provider.value}_key", "").strip()

    def model_for(self, provider: ProviderId) -> str | None:
        """Get the configured default model for a provider, if any."""
        return getattr(self, f"{provider.value}_model", "").strip() or None

    def credentials(self) -> list[ProviderCredential]:
        """Credential records for every provider with a key, in catalog order."""
        return [
            ProviderCredential(provider, self.key_for(provider), self.model_for(provider))
            for provider in ProviderId
            if self.key_for(provider)
        ]

    @property
    def has_providers(self) -> bool:
        """Check if at least one provider key is configured."""
        return any(self.key_for(provider) for provider in ProviderId)

    @property
    def default_provider_id(self) -> ProviderId | None:
        """Parsed default provider.

        Raises:
            AIHookError: UNSUPPORTED_PROVIDER for an unknown name
        """
        if not self.default_provider.strip():
            return None
        return ProviderId.parse(self.default_provider)

