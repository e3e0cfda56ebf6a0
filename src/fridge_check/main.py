"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError as BodyValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from fridge_check.agents.llm import get_llm_info
from fridge_check.api.routes import analyze
from fridge_check.core.config import get_settings
from fridge_check.core.exceptions import APIError, RequestValidationError

# Configure logging
logging.basicConfig(
    level=getattr(logging, get_settings().log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log configuration on startup and shutdown."""
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} v{settings.api_version}")

    llm_info = get_llm_info(settings)
    if llm_info["configured"]:
        logger.info(f"Upstream model: {llm_info['provider']}/{llm_info['model']}")
    else:
        logger.warning(
            f"No API key for provider '{llm_info['provider']}', "
            "analysis requests will fail until one is set"
        )

    yield

    logger.info("Shutting down...")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.api_version,
        description="Recipe suggestions from a fridge photo or an ingredient list",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    # Exception handlers
    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        """Handle custom API errors."""
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_content(),
        )

    @app.exception_handler(BodyValidationError)
    async def body_validation_handler(request: Request, exc: BodyValidationError):
        """Report malformed bodies with the same shape as other rejections."""
        error = RequestValidationError(
            details="; ".join(
                f"{'.'.join(str(p) for p in e.get('loc', ()))}: {e.get('msg', '')}"
                for e in exc.errors()
            ),
        )
        return JSONResponse(
            status_code=error.status_code,
            content=error.to_content(),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        """Render framework HTTP errors (404, 405) as error bodies."""
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            message = "Method not allowed"
        else:
            message = str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": message},
            headers=getattr(exc, "headers", None),
        )

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "service": settings.app_name,
            "version": settings.api_version,
            "llm": get_llm_info(settings),
        }

    # Root endpoint
    @app.get("/")
    async def root():
        """Root endpoint with API info."""
        return {
            "name": settings.app_name,
            "version": settings.api_version,
            "docs": "/docs",
            "health": "/health",
            "analyze": "POST /api/analyze",
        }

    # Include routers
    app.include_router(analyze.router, prefix="/api", tags=["Analyze"])

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "fridge_check.main:app",
        host="0.0.0.0",
        port=8000,
        reload=get_settings().debug,
    )
