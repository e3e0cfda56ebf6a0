"""
Client wizard for the analysis gateway.

Immutable wizard state with a pure reducer, the HTTP client, impact
estimation and a plain-text render path.
"""

from .api_client import FridgeCheckClient, get_client
from .impact import (
    DEFAULT_COEFFICIENTS,
    ImpactCoefficients,
    ImpactEstimate,
    SessionImpact,
    calculate_impact,
)
from .render import render
from .state import Screen, WizardState, initial_state, reduce
from .wizard import RecipeWizard

__all__ = [
    "DEFAULT_COEFFICIENTS",
    "FridgeCheckClient",
    "ImpactCoefficients",
    "ImpactEstimate",
    "RecipeWizard",
    "Screen",
    "SessionImpact",
    "WizardState",
    "calculate_impact",
    "get_client",
    "initial_state",
    "reduce",
    "render",
]
