"""Analysis gateway service: one request in, one upstream call, one reply out."""

import asyncio
import base64
import binascii
import logging
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage
from pydantic import ValidationError

from fridge_check.agents.prompts import PHOTO_PROMPT, format_text_prompt
from fridge_check.core.config import Settings, get_settings
from fridge_check.core.exceptions import (
    RequestValidationError,
    ResponseParseError,
    UpstreamCallError,
)
from fridge_check.models.analysis import AnalysisResult, AnalyzeRequest, Mode
from fridge_check.services.json_extraction import extract_json_object
from fridge_check.services.usage import extract_token_usage

logger = logging.getLogger(__name__)

# Keys that identify a reply object as a recipe envelope
ENVELOPE_KEYS = ("ingredients", "recipes")


class AnalysisService:
    """
    Stateless gateway between the client and the upstream chat model.

    Each call to :meth:`analyze` validates the request, sends exactly one
    completion request, extracts the JSON object from the reply and merges in
    the reported token usage. Nothing is cached or retried.
    """

    def __init__(self, llm: BaseChatModel, settings: Settings | None = None):
        """
        Initialize analysis service.

        Args:
            llm: Chat model used for the upstream call
            settings: Application settings (uses default if not provided)
        """
        self._llm = llm
        self._settings = settings or get_settings()

    async def analyze(self, request: AnalyzeRequest) -> dict[str, Any]:
        """
        Run one analysis.

        Args:
            request: Validated request body

        Returns:
            Parsed model object with ``usage`` merged in (when reported)

        Raises:
            RequestValidationError: If the mode's input is missing or unusable
            UpstreamCallError: If the upstream call fails or times out
            ResponseParseError: If the reply holds no usable JSON object
        """
        messages = self.build_messages(request)

        logger.info(f"Analyzing {request.mode.value} request")

        response = await self._invoke(messages)
        text = _response_text(response)

        analysis = self._parse_reply(text)

        usage = extract_token_usage(response)
        if usage is not None:
            analysis["usage"] = usage.model_dump()

        logger.info(
            f"Analysis complete: {len(analysis.get('recipes') or [])} recipes, "
            f"usage={analysis.get('usage')}"
        )
        return analysis

    def build_messages(self, request: AnalyzeRequest) -> list[BaseMessage]:
        """
        Build the single upstream message for a request.

        Raises:
            RequestValidationError: If the mode's input is missing or unusable
        """
        image = (request.image or "").strip()
        if request.mode == Mode.PHOTO and image:
            try:
                base64.b64decode(image, validate=True)
            except (binascii.Error, ValueError) as e:
                raise RequestValidationError(details="Invalid base64 image data") from e

            return [
                HumanMessage(content=[
                    {
                        "type": "image_url",
                        "image_url": {
                            "url": f"data:{self._settings.image_media_type};base64,{image}",
                        },
                    },
                    {"type": "text", "text": PHOTO_PROMPT},
                ])
            ]

        if request.mode == Mode.TEXT and request.ingredients and request.ingredients.strip():
            prompt = format_text_prompt(request.ingredients)
            logger.debug(f"Text prompt length: {len(prompt)} chars")
            return [HumanMessage(content=prompt)]

        raise RequestValidationError()

    async def _invoke(self, messages: list[BaseMessage]):
        """Make the single upstream call, bounded by the configured timeout."""
        try:
            return await asyncio.wait_for(
                self._llm.ainvoke(messages),
                timeout=self._settings.llm_timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error(f"Upstream model timed out after {self._settings.llm_timeout}s")
            raise UpstreamCallError(
                message="Upstream model timed out",
                details=504,
            ) from e
        except Exception as e:
            logger.exception("Analysis error")
            raise UpstreamCallError(
                message=str(e) or "Failed to analyze",
                details=getattr(e, "status_code", None) or getattr(e, "code", None),
            ) from e

    def _parse_reply(self, text: str) -> dict[str, Any]:
        """Extract and shape-check the JSON envelope from the reply text."""
        data = extract_json_object(text)

        if data is None or not any(key in data for key in ENVELOPE_KEYS):
            logger.warning(f"No JSON envelope in model reply: {text[:200]!r}")
            raise ResponseParseError(raw=text)

        try:
            AnalysisResult.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Model reply has unexpected shape: {e}")
            raise ResponseParseError(raw=text) from e

        return data


def _response_text(response) -> str:
    """Flatten an AIMessage's content into plain text."""
    content = getattr(response, "content", "")
    if isinstance(content, str):
        return content

    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)
