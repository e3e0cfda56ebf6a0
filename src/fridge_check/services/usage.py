"""Token usage extraction from LangChain responses."""

import logging

from fridge_check.models.analysis import TokenUsage

logger = logging.getLogger(__name__)


def extract_token_usage(response) -> TokenUsage | None:
    """
    Extract token usage from a LangChain LLM response.

    Supports multiple response formats from different LLM providers.

    Args:
        response: LangChain AIMessage or similar response object

    Returns:
        TokenUsage, or None if the provider reported nothing
    """
    # Try usage_metadata (Anthropic, Gemini, newer LangChain)
    metadata = getattr(response, "usage_metadata", None)
    if isinstance(metadata, dict) and metadata:
        input_tokens = metadata.get("input_tokens", 0) or metadata.get("prompt_tokens", 0)
        output_tokens = metadata.get("output_tokens", 0) or metadata.get("completion_tokens", 0)
        logger.debug(f"Token usage from usage_metadata: in={input_tokens}, out={output_tokens}")
        return TokenUsage(input_tokens=input_tokens, output_tokens=output_tokens)

    # Try response_metadata (OpenAI, Anthropic raw usage, some providers)
    metadata = getattr(response, "response_metadata", None)
    if not isinstance(metadata, dict) or not metadata:
        return None

    if "token_usage" in metadata:
        # OpenAI format
        usage = metadata["token_usage"]
        input_tokens = usage.get("prompt_tokens", 0)
        output_tokens = usage.get("completion_tokens", 0)
    elif "usage" in metadata:
        # Anthropic format
        usage = metadata["usage"]
        input_tokens = usage.get("input_tokens", 0)
        output_tokens = usage.get("output_tokens", 0)
    elif "usage_metadata" in metadata:
        # Gemini format in response_metadata
        usage = metadata["usage_metadata"]
        input_tokens = usage.get("prompt_token_count", 0) or usage.get("input_tokens", 0)
        output_tokens = usage.get("candidates_token_count", 0) or usage.get("output_tokens", 0)
    else:
        return None

    logger.debug(f"Token usage from response_metadata: in={input_tokens}, out={output_tokens}")
    return TokenUsage(input_tokens=input_tokens or 0, output_tokens=output_tokens or 0)
