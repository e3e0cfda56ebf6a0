"""Wizard state and the pure reducer that transitions it.

The wizard walks choose mode -> capture input -> await result -> show result.
Each screen is an explicit variant, so an analysis that returned zero recipes
(``RESULT``) is distinguishable from one that never ran (``IDLE``).

``reduce`` never mutates its input and never performs I/O. Actions that are
not allowed from the current screen leave the state unchanged.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from fridge_check.client.impact import (
    DEFAULT_COEFFICIENTS,
    ImpactCoefficients,
    ImpactEstimate,
    SessionImpact,
    impact_from_usage,
)
from fridge_check.models.analysis import AnalysisResult, Mode


class Screen(str, Enum):
    """Which screen the wizard is showing."""

    IDLE = "idle"  # Mode choice
    AWAITING_PHOTO = "awaiting_photo"
    AWAITING_TEXT = "awaiting_text"
    LOADING = "loading"
    RESULT = "result"
    ERROR = "error"  # Input screen of the current mode, with the last error


INPUT_SCREENS = {
    Mode.PHOTO: Screen.AWAITING_PHOTO,
    Mode.TEXT: Screen.AWAITING_TEXT,
}


# =============================================================================
# Actions
# =============================================================================


class _Action(BaseModel):
    model_config = ConfigDict(frozen=True)


class SelectMode(_Action):
    type: Literal["SELECT_MODE"] = "SELECT_MODE"
    mode: Mode


class SubmitPhoto(_Action):
    type: Literal["SUBMIT_PHOTO"] = "SUBMIT_PHOTO"
    image: bytes


class SubmitText(_Action):
    type: Literal["SUBMIT_TEXT"] = "SUBMIT_TEXT"
    text: str


class ReceiveResult(_Action):
    type: Literal["RECEIVE_RESULT"] = "RECEIVE_RESULT"
    result: AnalysisResult


class ReceiveError(_Action):
    type: Literal["RECEIVE_ERROR"] = "RECEIVE_ERROR"
    message: str


class Reset(_Action):
    type: Literal["RESET"] = "RESET"


class ToggleDeveloperStats(_Action):
    type: Literal["TOGGLE_DEVELOPER_STATS"] = "TOGGLE_DEVELOPER_STATS"


Action = Annotated[
    Union[
        SelectMode,
        SubmitPhoto,
        SubmitText,
        ReceiveResult,
        ReceiveError,
        Reset,
        ToggleDeveloperStats,
    ],
    Field(discriminator="type"),
]


# =============================================================================
# State
# =============================================================================


class WizardState(BaseModel):
    """Immutable snapshot of the wizard."""

    model_config = ConfigDict(frozen=True)

    screen: Screen = Screen.IDLE
    mode: Mode | None = None  # None while choosing

    # Pending input
    image: bytes | None = None
    text: str = ""

    # Latest outcome
    result: AnalysisResult | None = None
    impact: ImpactEstimate | None = None
    error: str | None = None

    # Session scope, survives RESET
    session_impact: SessionImpact = Field(default_factory=SessionImpact)
    show_developer_stats: bool = False

    @property
    def is_loading(self) -> bool:
        return self.screen == Screen.LOADING

    def can_submit(self, mode: Mode) -> bool:
        """Whether a submission in ``mode`` is accepted from this screen."""
        if self.mode != mode:
            return False
        return self.screen in (INPUT_SCREENS[mode], Screen.ERROR)


def initial_state() -> WizardState:
    """State at the start of a session."""
    return WizardState()


def reduce(
    state: WizardState,
    action: Action,
    coefficients: ImpactCoefficients = DEFAULT_COEFFICIENTS,
) -> WizardState:
    """
    Apply ``action`` to ``state`` and return the next state.

    Args:
        state: Current state
        action: Action to apply
        coefficients: Impact conversion factors for RECEIVE_RESULT

    Returns:
        Next state (``state`` itself when the action is not allowed)
    """
    match action:
        case SelectMode(mode=mode):
            if state.screen != Screen.IDLE:
                return state
            return state.model_copy(update={
                "screen": INPUT_SCREENS[mode],
                "mode": mode,
                "error": None,
            })

        case SubmitPhoto(image=image):
            if not image or not state.can_submit(Mode.PHOTO):
                return state
            return state.model_copy(update={
                "screen": Screen.LOADING,
                "image": image,
                "error": None,
            })

        case SubmitText(text=text):
            if not text.strip() or not state.can_submit(Mode.TEXT):
                return state
            return state.model_copy(update={
                "screen": Screen.LOADING,
                "text": text,
                "error": None,
            })

        case ReceiveResult(result=result):
            if state.screen != Screen.LOADING:
                return state
            update = {
                "screen": Screen.RESULT,
                "result": result,
                "impact": None,
                "error": None,
            }
            if result.usage is not None:
                impact = impact_from_usage(result.usage, coefficients)
                update["impact"] = impact
                update["session_impact"] = state.session_impact.add(impact)
            return state.model_copy(update=update)

        case ReceiveError(message=message):
            if state.screen != Screen.LOADING:
                return state
            return state.model_copy(update={
                "screen": Screen.ERROR,
                "error": message,
            })

        case Reset():
            return WizardState(
                session_impact=state.session_impact,
                show_developer_stats=state.show_developer_stats,
            )

        case ToggleDeveloperStats():
            return state.model_copy(update={
                "show_developer_stats": not state.show_developer_stats,
            })

    return state
