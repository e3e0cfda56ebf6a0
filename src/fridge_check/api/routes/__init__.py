"""API routes."""

from . import analyze

__all__ = ["analyze"]
