"""Recipe wizard controller.

Holds the current :class:`WizardState`, dispatches actions through the pure
reducer and performs the one network call per submission.
"""

import logging

from fridge_check.client.api_client import FridgeCheckClient
from fridge_check.client.impact import DEFAULT_COEFFICIENTS, ImpactCoefficients
from fridge_check.client.state import (
    Action,
    ReceiveError,
    ReceiveResult,
    Reset,
    SelectMode,
    SubmitPhoto,
    SubmitText,
    ToggleDeveloperStats,
    WizardState,
    initial_state,
    reduce,
)
from fridge_check.core.exceptions import AnalysisFailedError, ClientNetworkError
from fridge_check.models.analysis import Mode

logger = logging.getLogger(__name__)

PHOTO_FAILURE_MESSAGE = "Failed to analyze image. Please try again."
TEXT_FAILURE_MESSAGE = "Failed to get recipes. Please try again."


class RecipeWizard:
    """
    Drives one client session.

    Submissions are single in-flight: while a request is outstanding the
    state is ``LOADING`` and further submits are ignored (not queued, not
    cancelled). Failures surface as an error message; there are no retries.

    Usage:
        wizard = RecipeWizard(FridgeCheckClient("http://localhost:8000"))
        wizard.select_mode(Mode.TEXT)
        await wizard.submit_text("eggs, spinach, feta")
        print(wizard.state.result)
    """

    def __init__(
        self,
        client: FridgeCheckClient,
        coefficients: ImpactCoefficients = DEFAULT_COEFFICIENTS,
    ):
        self._client = client
        self._coefficients = coefficients
        self._state = initial_state()

    @property
    def state(self) -> WizardState:
        return self._state

    def dispatch(self, action: Action) -> WizardState:
        """Apply an action and return the new state."""
        self._state = reduce(self._state, action, self._coefficients)
        return self._state

    def select_mode(self, mode: Mode) -> WizardState:
        return self.dispatch(SelectMode(mode=mode))

    def reset(self) -> WizardState:
        return self.dispatch(Reset())

    def toggle_developer_stats(self) -> WizardState:
        return self.dispatch(ToggleDeveloperStats())

    async def submit_photo(self, file_bytes: bytes | None) -> bool:
        """
        Submit a photo for analysis.

        Args:
            file_bytes: Raw image bytes; None or empty means no file was chosen

        Returns:
            True if a request was issued
        """
        if not file_bytes:
            return False
        if not self._state.can_submit(Mode.PHOTO):
            return False
        self.dispatch(SubmitPhoto(image=file_bytes))

        try:
            result = await self._client.analyze_photo(file_bytes)
        except AnalysisFailedError as e:
            self._fail(e.message)
        except ClientNetworkError as e:
            logger.warning(f"Photo analysis failed: {e}")
            self._fail(PHOTO_FAILURE_MESSAGE)
        except Exception:
            logger.exception("Unexpected error during photo analysis")
            self._fail(PHOTO_FAILURE_MESSAGE)
        else:
            self.dispatch(ReceiveResult(result=result))
        return True

    async def submit_text(self, text: str) -> bool:
        """
        Submit a typed ingredient list.

        Blank or whitespace-only text is rejected without a network call.

        Args:
            text: Ingredient list as typed

        Returns:
            True if a request was issued
        """
        if not text or not text.strip():
            return False
        if not self._state.can_submit(Mode.TEXT):
            return False
        self.dispatch(SubmitText(text=text))

        try:
            result = await self._client.analyze_text(text)
        except AnalysisFailedError as e:
            self._fail(e.message)
        except ClientNetworkError as e:
            logger.warning(f"Text analysis failed: {e}")
            self._fail(TEXT_FAILURE_MESSAGE)
        except Exception:
            logger.exception("Unexpected error during text analysis")
            self._fail(TEXT_FAILURE_MESSAGE)
        else:
            self.dispatch(ReceiveResult(result=result))
        return True

    def _fail(self, message: str) -> None:
        self.dispatch(ReceiveError(message=message))
