"""Environmental impact estimates derived from token usage.

The coefficients are rough published estimates, not measurements. They are
kept together in :class:`ImpactCoefficients` so they can be corrected
without touching the formula.
"""

from pydantic import BaseModel, ConfigDict, Field

from fridge_check.models.analysis import TokenUsage

# =============================================================================
# Coefficients
# =============================================================================

TOKENS_PER_UNIT = 1000

# Per 1000 tokens
WATER_ML_PER_1K_TOKENS = 0.5  # Data center cooling
ENERGY_KWH_PER_1K_TOKENS = 0.0003
CO2_GRAMS_PER_1K_TOKENS = 0.2

# Comparisons
PHONE_CHARGE_KWH = 0.01
DRINKING_GLASS_ML = 250.0


class ImpactCoefficients(BaseModel):
    """Conversion factors from token counts to physical resources."""

    model_config = ConfigDict(frozen=True)

    water_ml_per_1k_tokens: float = WATER_ML_PER_1K_TOKENS
    energy_kwh_per_1k_tokens: float = ENERGY_KWH_PER_1K_TOKENS
    co2_grams_per_1k_tokens: float = CO2_GRAMS_PER_1K_TOKENS
    phone_charge_kwh: float = PHONE_CHARGE_KWH
    drinking_glass_ml: float = DRINKING_GLASS_ML


DEFAULT_COEFFICIENTS = ImpactCoefficients()


# =============================================================================
# Estimates
# =============================================================================


class ImpactEstimate(BaseModel):
    """Estimated resource cost of one model invocation."""

    model_config = ConfigDict(frozen=True)

    input_tokens: int = Field(ge=0)
    output_tokens: int = Field(ge=0)
    water_ml: float = Field(ge=0)
    energy_kwh: float = Field(ge=0)
    co2_grams: float = Field(ge=0)
    phone_charge_fraction: float = Field(ge=0, description="Share of one phone charge")
    drinking_glass_fraction: float = Field(ge=0, description="Share of one 250 ml glass")

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


class SessionImpact(BaseModel):
    """Running totals for one client session. Never persisted."""

    model_config = ConfigDict(frozen=True)

    water_ml: float = 0.0
    energy_kwh: float = 0.0
    co2_grams: float = 0.0
    scan_count: int = 0

    def add(self, estimate: ImpactEstimate) -> "SessionImpact":
        """Return a new accumulator including ``estimate``."""
        return SessionImpact(
            water_ml=self.water_ml + estimate.water_ml,
            energy_kwh=self.energy_kwh + estimate.energy_kwh,
            co2_grams=self.co2_grams + estimate.co2_grams,
            scan_count=self.scan_count + 1,
        )


def calculate_impact(
    input_tokens: int,
    output_tokens: int,
    coefficients: ImpactCoefficients = DEFAULT_COEFFICIENTS,
) -> ImpactEstimate:
    """
    Estimate water, energy and CO2 for one request.

    Args:
        input_tokens: Prompt tokens reported by the model
        output_tokens: Completion tokens reported by the model
        coefficients: Conversion factors (defaults to the published estimates)

    Returns:
        ImpactEstimate with the derived comparison ratios
    """
    units = (input_tokens + output_tokens) / TOKENS_PER_UNIT

    water_ml = units * coefficients.water_ml_per_1k_tokens
    energy_kwh = units * coefficients.energy_kwh_per_1k_tokens
    co2_grams = units * coefficients.co2_grams_per_1k_tokens

    return ImpactEstimate(
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        water_ml=water_ml,
        energy_kwh=energy_kwh,
        co2_grams=co2_grams,
        phone_charge_fraction=energy_kwh / coefficients.phone_charge_kwh,
        drinking_glass_fraction=water_ml / coefficients.drinking_glass_ml,
    )


def impact_from_usage(
    usage: TokenUsage,
    coefficients: ImpactCoefficients = DEFAULT_COEFFICIENTS,
) -> ImpactEstimate:
    """Shortcut for :func:`calculate_impact` on a TokenUsage."""
    return calculate_impact(usage.input_tokens, usage.output_tokens, coefficients)
