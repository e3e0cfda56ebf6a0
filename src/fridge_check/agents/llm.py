"""Chat model factory for the analysis gateway.

One model instance is built per request from the current settings. Every
provider gets the same limits: temperature, reply token cap, request timeout,
and no SDK-level retries (a failed upstream call is terminal for the request).
"""

from langchain_core.language_models import BaseChatModel

from fridge_check.core.config import Settings, LLMProvider, get_settings

# Environment variable holding each provider's credential
API_KEY_ENV_VARS = {
    LLMProvider.ANTHROPIC: "ANTHROPIC_API_KEY",
    LLMProvider.OPENAI: "OPENAI_API_KEY",
    LLMProvider.GEMINI: "GOOGLE_API_KEY",
}


def get_llm(settings: Settings | None = None) -> BaseChatModel:
    """
    Build the chat model for the selected provider.

    Args:
        settings: Application settings (uses default if not provided)

    Returns:
        Chat model ready for a single ``ainvoke``

    Raises:
        ValueError: If the provider has no API key or is unsupported
    """
    settings = settings or get_settings()

    match settings.llm_provider:
        case LLMProvider.ANTHROPIC:
            from langchain_anthropic import ChatAnthropic

            return ChatAnthropic(
                model=settings.anthropic_model,
                api_key=_require_key(settings),
                max_tokens=settings.llm_max_tokens,
                **_shared_limits(settings),
            )
        case LLMProvider.OPENAI:
            from langchain_openai import ChatOpenAI

            return ChatOpenAI(
                model=settings.openai_model,
                api_key=_require_key(settings),
                max_tokens=settings.llm_max_tokens,
                **_shared_limits(settings),
            )
        case LLMProvider.GEMINI:
            from langchain_google_genai import ChatGoogleGenerativeAI

            return ChatGoogleGenerativeAI(
                model=settings.gemini_model,
                google_api_key=_require_key(settings),
                max_output_tokens=settings.llm_max_tokens,
                **_shared_limits(settings),
            )
        case _:
            raise ValueError(f"Unsupported LLM provider: {settings.llm_provider}")


def _require_key(settings: Settings) -> str:
    key = settings.llm_api_key
    if not key:
        provider = settings.llm_provider
        raise ValueError(
            f"{provider.value} API key not configured. "
            f"Set {API_KEY_ENV_VARS[provider]} in your .env file."
        )
    return key


def _shared_limits(settings: Settings) -> dict:
    return {
        "temperature": settings.llm_temperature,
        "timeout": settings.llm_timeout,
        "max_retries": 0,
    }


def get_llm_info(settings: Settings | None = None) -> dict:
    """Describe the configured upstream model for health and startup logs."""
    settings = settings or get_settings()

    return {
        "provider": settings.llm_provider.value,
        "model": settings.llm_model,
        "configured": settings.is_llm_configured,
        "temperature": settings.llm_temperature,
        "max_tokens": settings.llm_max_tokens,
        "timeout": settings.llm_timeout,
    }
