from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from bottleneckiq.model_presets import KEYED_PROVIDERS, get_default_model
from bottleneckiq.models.analysis import RiskThresholds

LLMProvider = Literal["openrouter", "openai", "anthropic", "ollama"]

# Placeholder shipped in example .env files; treated as "not configured"
API_KEY_PLACEHOLDER = "your_openrouter_api_key_here"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    # API Keys
    openrouter_api_key: SecretStr = SecretStr("")
    openai_api_key: SecretStr = SecretStr("")
    anthropic_api_key: SecretStr = SecretStr("")

    # LLM Configuration
    llm_provider: LLMProvider = "openrouter"
    llm_model: str = ""  # Empty = use provider default
    llm_temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for insight phrasing",
    )
    llm_max_tokens: int = Field(
        default=150,
        ge=1,
        description="Output budget per insight (1-2 sentences)",
    )
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    openrouter_app_title: str = "Process Intelligence Hub"
    ollama_base_url: str = "http://localhost:11434"

    # Enrichment
    enrichment_enabled: bool = Field(
        default=True,
        description="Phrase high-risk insights with the LLM. Disable for testing or cost control.",
    )
    enrichment_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Per-insight timeout for the LLM call",
    )
    enrichment_min_risk_score: int = Field(
        default=60,
        ge=0,
        le=100,
        description="Only insights at or above this risk score are sent to the LLM",
    )
    enrichment_max_workers: int = Field(default=4, ge=1)

    # Scoring
    thresholds: RiskThresholds = Field(default_factory=RiskThresholds)
    insight_threshold: int = Field(
        default=20,
        ge=0,
        le=100,
        description="Minimum risk score for a process to produce an insight",
    )

    # Cost impact assumptions
    hourly_operation_cost: float = Field(default=500.0, ge=0)
    orders_per_day: int = Field(default=1000, ge=0)

    # Application
    log_level: str = "INFO"

    def get_api_key(self, provider: str | None = None) -> str:
        """Get the API key for a provider ("" for keyless providers)."""
        provider = provider or self.llm_provider
        keys = {
            "openrouter": self.openrouter_api_key,
            "openai": self.openai_api_key,
            "anthropic": self.anthropic_api_key,
        }
        secret = keys.get(provider)
        if secret is None:
            return ""
        value = secret.get_secret_value()
        return "" if value == API_KEY_PLACEHOLDER else value

    def is_llm_configured(self, provider: str | None = None) -> bool:
        """Check whether the provider can be called (has a real API key)."""
        provider = provider or self.llm_provider
        if provider not in KEYED_PROVIDERS:
            return True
        return bool(self.get_api_key(provider))

    def get_resolved_config(
        self,
        provider: str | None = None,
    ) -> tuple[str, str, float]:
        """Get fully resolved LLM config (provider, model, temperature).

        LLM_MODEL only applies to the configured provider; an explicit
        provider override falls back to that provider's default model.
        """
        resolved_provider = provider or self.llm_provider
        if resolved_provider == self.llm_provider and self.llm_model:
            model = self.llm_model
        else:
            model = get_default_model(resolved_provider) or ""
        return resolved_provider, model, self.llm_temperature


settings = Settings()
