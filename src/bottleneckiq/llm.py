"""Centralized LLM factory for BottleneckIQ.

All LLM calls should go through this module to ensure consistent
configuration, logging, and error handling across the application.

Usage:
    from bottleneckiq.llm import get_chat_model

    model = get_chat_model()
    response = model.invoke([HumanMessage(content="...")])

    # Override provider/model for specific calls
    model = get_chat_model(provider="openai", model="gpt-4o-mini")
"""

import logging
from typing import Any

from langchain_core.language_models import BaseChatModel

from bottleneckiq.config import settings
from bottleneckiq.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Sent to OpenRouter for app attribution
OPENROUTER_REFERER = "https://github.com/bottleneckiq/bottleneckiq"


def extract_text_content(response: Any) -> str:
    """Extract text content from an LLM response, regardless of format.

    Handles the different ways models return content:
    - Plain string in response.content (most models)
    - List of content blocks in response.content (some newer models)
    - Content in additional_kwargs (reasoning models)

    Returns "" when nothing usable came back; callers treat that as a
    failed completion.
    """
    if hasattr(response, "content"):
        content = response.content

        if isinstance(content, str) and content.strip():
            return content.strip()

        # List of content blocks (e.g. [{"type": "text", "text": "..."}])
        if isinstance(content, list):
            text_parts = []
            for block in content:
                if isinstance(block, dict) and block.get("type") == "text":
                    text_parts.append(block.get("text", ""))
                elif isinstance(block, str):
                    text_parts.append(block)
            joined = "\n".join(text_parts).strip()
            if joined:
                return joined

    kwargs = getattr(response, "additional_kwargs", None)
    if isinstance(kwargs, dict):
        for key in ("content", "output"):
            value = kwargs.get(key)
            if isinstance(value, str) and value.strip():
                logger.info("Extracted content from additional_kwargs['%s']", key)
                return value.strip()

    return ""


def is_restricted_openai_model(model: str) -> bool:
    """Check if an OpenAI model has parameter restrictions.

    GPT-5 series and o-series models only support temperature=1.
    """
    return model.startswith(("gpt-5", "o1", "o3"))


def get_chat_model(
    *,
    provider: str | None = None,
    model: str | None = None,
    temperature: float | None = None,
    max_tokens: int | None = None,
    timeout: float | None = None,
) -> BaseChatModel:
    """Get a LangChain chat model based on configuration.

    Explicit parameters win over settings. Models are built with retries
    disabled: a failed call is reported once and the caller falls back.

    Args:
        provider: Override the configured provider.
        model: Override the configured model.
        temperature: Override the configured temperature.
        max_tokens: Output token budget (defaults to settings.llm_max_tokens).
        timeout: Request timeout in seconds (defaults to the enrichment timeout).

    Returns:
        A LangChain BaseChatModel instance.

    Raises:
        ConfigurationError: If the provider is not supported or API key is missing.
    """
    resolved_provider, resolved_model, resolved_temp = settings.get_resolved_config(
        provider=provider
    )

    provider = resolved_provider
    model = model or resolved_model
    temperature = temperature if temperature is not None else resolved_temp
    max_tokens = max_tokens or settings.llm_max_tokens
    timeout = timeout or settings.enrichment_timeout_seconds

    logger.info(
        "Using LLM: %s/%s (temperature=%.1f, max_tokens=%d, timeout=%.0fs)",
        provider,
        model,
        temperature,
        max_tokens,
        timeout,
    )

    if provider == "openrouter":
        return _get_openrouter_model(model, temperature, max_tokens, timeout)
    elif provider == "openai":
        return _get_openai_model(model, temperature, max_tokens, timeout)
    elif provider == "anthropic":
        return _get_anthropic_model(model, temperature, max_tokens, timeout)
    elif provider == "ollama":
        return _get_ollama_model(model, temperature, max_tokens, timeout)
    else:
        raise ConfigurationError(
            message=f"Unsupported LLM provider: {provider}",
            config_key="llm_provider",
            user_message=f"Provider '{provider}' is not supported. "
            "Use 'openrouter', 'openai', 'anthropic', or 'ollama'.",
        )


def _require_api_key(provider: str, env_var: str) -> str:
    api_key = settings.get_api_key(provider)
    if not api_key:
        raise ConfigurationError(
            message=f"{provider} API key not configured",
            config_key=f"{provider}_api_key",
            user_message=f"Please set {env_var} in your environment or .env file.",
        )
    return api_key


def _get_openrouter_model(
    model: str, temperature: float, max_tokens: int, timeout: float
) -> BaseChatModel:
    """Create a chat model for OpenRouter's OpenAI-compatible endpoint."""
    from langchain_openai import ChatOpenAI

    api_key = _require_api_key("openrouter", "OPENROUTER_API_KEY")

    return ChatOpenAI(
        model=model,
        api_key=api_key,  # pyright: ignore[reportArgumentType]
        base_url=settings.openrouter_base_url,
        temperature=temperature,
        max_tokens=max_tokens,  # pyright: ignore[reportCallIssue]
        timeout=timeout,
        max_retries=0,
        default_headers={
            "HTTP-Referer": OPENROUTER_REFERER,
            "X-Title": settings.openrouter_app_title,
        },
    )


def _get_openai_model(
    model: str, temperature: float, max_tokens: int, timeout: float
) -> BaseChatModel:
    """Create an OpenAI chat model."""
    from langchain_openai import ChatOpenAI

    api_key = _require_api_key("openai", "OPENAI_API_KEY")

    restricted = is_restricted_openai_model(model)
    if restricted and temperature != 1.0:
        logger.warning(
            "Model %s does not support temperature=%.1f, using default (1.0)",
            model,
            temperature,
        )

    return ChatOpenAI(
        model=model,
        api_key=api_key,  # pyright: ignore[reportArgumentType]
        temperature=1.0 if restricted else temperature,
        max_completion_tokens=max_tokens,  # pyright: ignore[reportCallIssue]
        timeout=timeout,
        max_retries=0,
    )


def _get_anthropic_model(
    model: str, temperature: float, max_tokens: int, timeout: float
) -> BaseChatModel:
    """Create an Anthropic chat model."""
    from langchain_anthropic import ChatAnthropic

    api_key = _require_api_key("anthropic", "ANTHROPIC_API_KEY")

    return ChatAnthropic(
        model=model,  # pyright: ignore[reportCallIssue]
        api_key=api_key,  # pyright: ignore[reportArgumentType]
        temperature=temperature,
        max_tokens=max_tokens,  # pyright: ignore[reportCallIssue]
        timeout=timeout,
        max_retries=0,
    )


def _get_ollama_model(
    model: str, temperature: float, max_tokens: int, timeout: float
) -> BaseChatModel:
    """Create an Ollama chat model (local LLM)."""
    from langchain_ollama import ChatOllama

    return ChatOllama(
        model=model,
        base_url=settings.ollama_base_url,
        temperature=temperature,
        num_predict=max_tokens,
        client_kwargs={"timeout": timeout},
    )
