"""Pydantic models for API schemas."""

from .analysis import (
    AnalysisResult,
    AnalyzeRequest,
    ErrorResponse,
    Mode,
    Recipe,
    TokenUsage,
)

__all__ = [
    "AnalysisResult",
    "AnalyzeRequest",
    "ErrorResponse",
    "Mode",
    "Recipe",
    "TokenUsage",
]
