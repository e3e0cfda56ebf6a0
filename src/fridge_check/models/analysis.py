"""Pydantic models for the /api/analyze contract.

Shared by the gateway (request parsing, reply shape validation) and the
client (response parsing).
"""

from enum import Enum

from pydantic import BaseModel, Field


class Mode(str, Enum):
    """Input modality chosen by the user."""

    PHOTO = "photo"
    TEXT = "text"


# =============================================================================
# Request Models
# =============================================================================


class AnalyzeRequest(BaseModel):
    """
    Request payload for /api/analyze.

    Exactly one of ``image`` (photo mode) or ``ingredients`` (text mode) is
    expected. Cross-field checks happen in the analysis service so that every
    rejection uses the same error shape.
    """

    mode: Mode = Field(..., description="Input modality: 'photo' or 'text'")
    image: str | None = Field(
        None, description="Base64-encoded image (photo mode)"
    )
    ingredients: str | None = Field(
        None, description="Free-form ingredient list (text mode)"
    )


# =============================================================================
# Response Models
# =============================================================================


class Recipe(BaseModel):
    """A single suggested recipe."""

    name: str = Field(..., description="Recipe name")
    description: str = Field("", description="Brief description")
    time: str | None = Field(None, description="Free-form duration, e.g. '~30 min'")
    instructions: list[str] | None = Field(None, description="Ordered steps")
    missing: list[str] | None = Field(
        None, description="Ingredients that would enhance the recipe but weren't supplied"
    )


class TokenUsage(BaseModel):
    """Token counts reported by the upstream model."""

    input_tokens: int = Field(0, ge=0)
    output_tokens: int = Field(0, ge=0)

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


class AnalysisResult(BaseModel):
    """Ingredients and recipes returned for one analysis."""

    ingredients: list[str] = Field(default_factory=list)
    recipes: list[Recipe] = Field(default_factory=list)
    usage: TokenUsage | None = Field(
        None, description="Absent when the upstream call did not report usage"
    )


class ErrorResponse(BaseModel):
    """Error body returned by the gateway."""

    error: str
    details: str | int | dict | None = None
    raw: str | None = None
