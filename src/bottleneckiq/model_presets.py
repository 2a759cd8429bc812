"""Default LLM model per provider for insight enrichment.

Edit this file to change which model phrases bottleneck insights when
LLM_MODEL is not set. OpenRouter model ids are "<vendor>/<model>".
"""

PROVIDER_DEFAULTS: dict[str, str] = {
    "openrouter": "anthropic/claude-3.5-sonnet",
    "openai": "gpt-4o-mini",
    "anthropic": "claude-haiku-4-5-20251001",
    "ollama": "qwen3:8b",
}

# Providers that need an API key before they can be called
KEYED_PROVIDERS = frozenset({"openrouter", "openai", "anthropic"})


def get_default_model(provider: str) -> str | None:
    """Look up the default model for a provider.

    Returns None for unknown providers.
    """
    return PROVIDER_DEFAULTS.get(provider)
