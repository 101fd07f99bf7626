"""
FastAPI server for AI-powered photo editing.

Proxies photo edit requests from the browser client to the Gemini image
model. Each edit endpoint validates the request, builds the prompt for its
mode, calls the model once and returns either the edited image or an error.

Endpoints:
- GET  /             - API information
- GET  /health       - Health check
- POST /api/retouch  - Localized edit around a hotspot
- POST /api/filter   - Stylistic filter over the whole image
- POST /api/adjust   - Global quality adjustment
"""

from __future__ import annotations

import logging
import os
import sys
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from schemas import AI_MODELS
from schemas import AdjustmentRequest, FilterRequest, RetouchRequest
from schemas import EditImageResponse, EditRequest, ErrorResponse
from services.gemini_client import ImageEditClient, get_gemini_client
from services.image_utils import parse_image_string
from services.prompt_builder import EDIT_MODES, build_prompt_for_request
from services.response_interpreter import interpret_response
from utils.ai_logging import log_image_inputs

# Load environment variables
load_dotenv()

# Track server start time for uptime calculation
# Initialized in lifespan handler, not at import time
_start_time: float | None = None

API_NAME = "Photo Edit AI Server"
API_VERSION = "1.0.0"


# =============================================================================
# Application Setup
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown."""
    global _start_time
    # Startup
    _start_time = time.time()
    logger.info("Photo Edit AI Server starting...")
    api_key = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
    logger.info("API Key: %s", "configured" if api_key else "MISSING")
    logger.info("Image edit model: %s", AI_MODELS["IMAGE_EDIT"])
    yield
    # Shutdown
    logger.info("Photo Edit AI Server shutting down...")


app = FastAPI(
    title=API_NAME,
    description="Gemini proxy for retouch, filter and adjustment photo edits",
    version=API_VERSION,
    lifespan=lifespan,
)

# CORS configuration
_allowed_origins = os.getenv(
    "ALLOWED_ORIGINS", "http://localhost:5173,http://localhost:3001"
).split(",")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in _allowed_origins],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Error Handlers
# =============================================================================


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build a JSON error body of the form {"error": message}."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


@app.exception_handler(StarletteHTTPException)
async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    """Report wrong-method requests with the same error body as edit failures."""
    if exc.status_code == 405:
        response = error_response(405, "Method not allowed")
        if exc.headers:
            response.headers.update(exc.headers)
        return response
    return await http_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Map body validation errors to 400 instead of FastAPI's default 422."""
    errors = exc.errors()
    logger.info(
        "Rejected request to %s: %s",
        request.url.path,
        [(err.get("loc"), err.get("type")) for err in errors],
    )
    if errors and all(err.get("type") == "missing" for err in errors):
        return error_response(400, "Missing required fields")
    return error_response(400, "Invalid request fields")


# =============================================================================
# Health & Info Endpoints
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: str
    uptime_seconds: float
    environment: str
    python_version: str


class RootResponse(BaseModel):
    """Root endpoint response."""

    name: str
    version: str
    status: str
    endpoints: dict[str, str]


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Return server health status."""
    uptime = round(time.time() - _start_time, 2) if _start_time else 0.0
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        uptime_seconds=uptime,
        environment=os.getenv("ENVIRONMENT", "development"),
        python_version=f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
    )


@app.get("/", response_model=RootResponse)
async def root() -> RootResponse:
    """Return API information."""
    endpoints = {"health": "GET /health"}
    for mode, spec in EDIT_MODES.items():
        endpoints[mode] = f"POST {spec.path}"
    return RootResponse(
        name=API_NAME,
        version=API_VERSION,
        status="running",
        endpoints=endpoints,
    )


# =============================================================================
# Edit Endpoints (POST /api/retouch, /api/filter, /api/adjust)
# =============================================================================

_EDIT_RESPONSES: dict[int | str, dict] = {
    400: {"model": ErrorResponse, "description": "Invalid request or model refused the edit"},
    405: {"model": ErrorResponse, "description": "Method not allowed"},
    500: {"model": ErrorResponse, "description": "Processing failed"},
}


async def process_edit(request: EditRequest, client: ImageEditClient):
    """
    Run one edit request through prompt building, the model and interpretation.

    Validation and model-reported failures return 400. Anything raised along
    the way (bad image string, missing API key, transport error) is logged
    and returned as a generic 500 so internals never reach the caller.
    """
    spec = EDIT_MODES[request.mode]

    missing = request.missing_fields()
    if missing:
        logger.info("Rejected %s request: missing %s", spec.label, missing)
        return error_response(400, "Missing required fields")

    logger.info(
        "Image %s request: prompt_length=%d, hotspot=%s",
        spec.label,
        len(request.instruction),
        getattr(request, "hotspot", None),
    )

    try:
        image = parse_image_string(request.imageData)
        log_image_inputs(logger, source_image=request.imageData)

        prompt = build_prompt_for_request(request)
        response = await client.edit_image(
            prompt=prompt,
            image_data=image.data,
            mime_type=image.mime_type,
        )
        result = interpret_response(response)

    except Exception as e:
        logger.exception("Error processing image %s: %s", spec.label, e)
        return error_response(500, f"Failed to process image {spec.label}")

    if not result.ok:
        logger.warning("Image %s failed (%s): %s", spec.label, result.category, result.error)
        return error_response(400, result.error)

    logger.info("Image %s successful", spec.label)
    return EditImageResponse(imageUrl=result.image_url)


@app.post("/api/retouch", response_model=EditImageResponse, responses=_EDIT_RESPONSES)
async def retouch(
    request: RetouchRequest,
    client: ImageEditClient = Depends(get_gemini_client),
):
    """Perform a natural, localized edit around the hotspot."""
    return await process_edit(request, client)


@app.post("/api/filter", response_model=EditImageResponse, responses=_EDIT_RESPONSES)
async def apply_filter(
    request: FilterRequest,
    client: ImageEditClient = Depends(get_gemini_client),
):
    """Apply a stylistic filter to the whole image."""
    return await process_edit(request, client)


@app.post("/api/adjust", response_model=EditImageResponse, responses=_EDIT_RESPONSES)
async def adjust(
    request: AdjustmentRequest,
    client: ImageEditClient = Depends(get_gemini_client),
):
    """Apply a professional global adjustment."""
    return await process_edit(request, client)


# =============================================================================
# Main Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", "8000"))
    host = os.getenv("HOST", "0.0.0.0")

    logger.info("Starting server on %s:%d", host, port)
    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=os.getenv("ENVIRONMENT") != "production",
    )
