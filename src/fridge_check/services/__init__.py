"""Business logic services."""

from .analysis import AnalysisService
from .json_extraction import extract_json_object
from .usage import extract_token_usage

__all__ = [
    "AnalysisService",
    "extract_json_object",
    "extract_token_usage",
]
