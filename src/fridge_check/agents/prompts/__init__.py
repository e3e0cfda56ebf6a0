"""Prompt templates for the upstream model."""

from .recipes import PHOTO_PROMPT, RESPONSE_FORMAT, format_text_prompt

__all__ = ["PHOTO_PROMPT", "RESPONSE_FORMAT", "format_text_prompt"]
