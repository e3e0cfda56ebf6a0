"""Upstream model access: provider factory and prompt templates."""

from .llm import get_llm, get_llm_info

__all__ = ["get_llm", "get_llm_info"]
