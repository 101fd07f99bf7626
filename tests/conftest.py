"""Pytest configuration and fixtures."""

import base64
import io
import sys
import warnings
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from dotenv import load_dotenv
from google.genai import types
from PIL import Image


def pytest_configure(config):
    """Configure pytest settings."""
    # Filter out the google genai aiohttp deprecation warning (from external library)
    warnings.filterwarnings(
        "ignore",
        message="Inheritance class AiohttpClientSession from ClientSession is discouraged",
        category=DeprecationWarning,
    )


# Load environment variables from .env file
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


# 1x1 transparent PNG
PNG_BASE64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
VALID_BASE64_IMAGE = f"data:image/png;base64,{PNG_BASE64}"


# =============================================================================
# Gemini Response Builders
# =============================================================================


def make_response(
    *,
    image: tuple[str, bytes] | None = None,
    text: str | None = None,
    finish_reason: types.FinishReason | None = types.FinishReason.STOP,
    block_reason: types.BlockedReason | None = None,
    block_message: str | None = None,
) -> types.GenerateContentResponse:
    """Build a real GenerateContentResponse for interpreter/endpoint tests."""
    parts: list[types.Part] = []
    if text is not None:
        parts.append(types.Part(text=text))
    if image is not None:
        mime_type, data = image
        parts.append(types.Part(inline_data=types.Blob(mime_type=mime_type, data=data)))

    candidates = None
    if parts or finish_reason is not None:
        candidates = [
            types.Candidate(
                content=types.Content(role="model", parts=parts) if parts else None,
                finish_reason=finish_reason,
            )
        ]

    prompt_feedback = None
    if block_reason is not None:
        prompt_feedback = types.GenerateContentResponsePromptFeedback(
            block_reason=block_reason,
            block_reason_message=block_message,
        )

    return types.GenerateContentResponse(
        candidates=candidates,
        prompt_feedback=prompt_feedback,
    )


def create_test_image(width: int, height: int, color=(255, 0, 0)) -> bytes:
    """Create an RGB test image and return its PNG bytes."""
    img = Image.new("RGB", (width, height), color)
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def png_bytes() -> bytes:
    """Raw bytes of a 1x1 PNG."""
    return base64.b64decode(PNG_BASE64)


@pytest.fixture
def mock_gateway():
    """An ImageEditClient stand-in whose edit_image is an AsyncMock."""
    gateway = MagicMock()
    gateway.edit_image = AsyncMock(
        return_value=make_response(image=("image/png", base64.b64decode(PNG_BASE64)))
    )
    return gateway


@pytest.fixture
def client(mock_gateway):
    """Test client for the FastAPI app with the Gemini gateway mocked out."""
    from fastapi.testclient import TestClient

    from main import app
    from services.gemini_client import get_gemini_client

    app.dependency_overrides[get_gemini_client] = lambda: mock_gateway
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def image_file(tmp_path) -> Path:
    """A small PNG written to disk."""
    path = tmp_path / "photo.png"
    path.write_bytes(create_test_image(4, 3))
    return path
