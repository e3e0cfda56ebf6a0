"""HTTP client for the analysis gateway."""

import base64
import logging

import httpx
from pydantic import ValidationError

from fridge_check.core.config import get_settings
from fridge_check.core.exceptions import AnalysisFailedError, ClientNetworkError
from fridge_check.models.analysis import AnalysisResult, AnalyzeRequest, Mode

logger = logging.getLogger(__name__)

ANALYZE_PATH = "/api/analyze"


class FridgeCheckClient:
    """Client for the /api/analyze endpoint."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 90.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the gateway client.

        Args:
            base_url: Base URL of the gateway (e.g., "http://localhost:8000")
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests, ASGI apps)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def analyze_photo(self, image_data: bytes) -> AnalysisResult:
        """
        Analyze a photo of food items.

        Args:
            image_data: Raw image bytes (JPEG-compatible)

        Returns:
            AnalysisResult with ingredients, recipes and usage
        """
        image_base64 = base64.b64encode(image_data).decode("utf-8")
        return await self.analyze(AnalyzeRequest(mode=Mode.PHOTO, image=image_base64))

    async def analyze_text(self, ingredients: str) -> AnalysisResult:
        """
        Get recipes for a typed ingredient list.

        Args:
            ingredients: Free-form ingredient list

        Returns:
            AnalysisResult with ingredients, recipes and usage
        """
        return await self.analyze(AnalyzeRequest(mode=Mode.TEXT, ingredients=ingredients))

    async def analyze(self, request: AnalyzeRequest) -> AnalysisResult:
        """
        Send one analysis request.

        Args:
            request: Request body

        Returns:
            Parsed AnalysisResult

        Raises:
            AnalysisFailedError: If the gateway answered with an error body
            ClientNetworkError: If the request failed or the body is not usable JSON
        """
        logger.debug(f"Sending {request.mode.value} analysis request")

        try:
            client = await self._get_client()
            response = await client.post(
                ANALYZE_PATH,
                json=request.model_dump(mode="json", exclude_none=True),
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ClientNetworkError(f"Request to {self.base_url} failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise ClientNetworkError(
                f"Gateway returned a non-JSON response (status {response.status_code})"
            ) from e

        if not isinstance(data, dict):
            raise ClientNetworkError("Gateway returned an unexpected response body")

        if data.get("error"):
            raise AnalysisFailedError(
                message=str(data["error"]),
                details=data.get("details"),
                raw=data.get("raw"),
            )

        try:
            result = AnalysisResult.model_validate(data)
        except ValidationError as e:
            raise ClientNetworkError("Gateway returned an unexpected response body") from e

        logger.info(
            f"Analysis complete: {len(result.ingredients)} ingredients, "
            f"{len(result.recipes)} recipes"
        )
        return result


def get_client() -> FridgeCheckClient:
    """
    Get a gateway client configured from settings.

    Returns:
        FridgeCheckClient for the configured API base URL
    """
    settings = get_settings()
    return FridgeCheckClient(
        base_url=settings.api_base_url,
        timeout=settings.client_timeout,
    )
