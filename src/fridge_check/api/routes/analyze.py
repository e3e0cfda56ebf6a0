"""Analyze API routes.

Single stateless endpoint: photo or ingredient list in, recipes out.
"""

from fastapi import APIRouter, Response, status

from fridge_check.api.dependencies import AnalysisServiceDep
from fridge_check.models.analysis import AnalyzeRequest, ErrorResponse

router = APIRouter()


@router.post(
    "/analyze",
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def analyze(
    request: AnalyzeRequest,
    service: AnalysisServiceDep,
) -> dict:
    """
    Suggest recipes from a photo or an ingredient list.

    - **mode**: `photo` or `text`
    - **image**: Base64-encoded JPEG (photo mode)
    - **ingredients**: Free-form ingredient list (text mode)

    Returns the identified `ingredients`, three `recipes` and the upstream
    token `usage`.
    """
    return await service.analyze(request)


@router.options("/analyze", include_in_schema=False)
async def analyze_preflight() -> Response:
    """Answer CORS pre-flight requests that reach the route."""
    return Response(status_code=status.HTTP_200_OK)
