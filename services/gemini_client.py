"""
Gemini gateway for image edits.

Sends one image part and one text part to the image-capable Gemini model
and hands back the raw response. Interpretation of the response happens in
services.response_interpreter; transport errors (network, auth, quota)
propagate to the caller unmodified.

There is no retry, no timeout and no rate limiting on this call.
"""

from __future__ import annotations

import base64
import logging
import os

from google import genai
from google.genai import types

from schemas import AI_MODELS

logger = logging.getLogger(__name__)


class GatewayConfigError(RuntimeError):
    """Raised when the gateway is used without an API key."""


class ImageEditClient:
    """
    Thin wrapper around the Gemini SDK for single-shot image edits.

    A missing API key does not fail construction; every call fails instead,
    so the server can start and report the problem per request.
    """

    def __init__(self, api_key: str | None = None):
        self._api_key = (
            api_key or os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
        )
        self._client = genai.Client(api_key=self._api_key) if self._api_key else None

    @property
    def configured(self) -> bool:
        return self._client is not None

    async def edit_image(
        self,
        *,
        prompt: str,
        image_data: str,
        mime_type: str,
        model: str = AI_MODELS["IMAGE_EDIT"],
    ) -> types.GenerateContentResponse:
        """
        Submit an image and an edit prompt to the model.

        Args:
            prompt: The full edit prompt
            image_data: Base64-encoded image payload (no data URL prefix)
            mime_type: MIME type of the image
            model: Model to use (defaults to IMAGE_EDIT model)

        Returns:
            The raw GenerateContentResponse

        Raises:
            GatewayConfigError: If no API key is configured
            binascii.Error: If image_data is not valid base64
        """
        if self._client is None:
            raise GatewayConfigError("GEMINI_API_KEY or GOOGLE_API_KEY must be set")

        image_bytes = base64.b64decode(image_data, validate=True)
        parts: list[types.Part] = [
            types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
            types.Part.from_text(text=prompt),
        ]

        logger.info(
            "Calling %s: mime_type=%s, image_bytes=%d, prompt_length=%d",
            model,
            mime_type,
            len(image_bytes),
            len(prompt),
        )

        try:
            return await self._client.aio.models.generate_content(
                model=model,
                contents=types.Content(role="user", parts=parts),
            )
        except Exception as e:
            logger.error("Gemini image edit call failed: %s", e)
            raise


# =============================================================================
# Module-level singleton
# =============================================================================

_client: ImageEditClient | None = None


def get_gemini_client() -> ImageEditClient:
    """Get the singleton image edit client instance."""
    global _client
    if _client is None:
        _client = ImageEditClient()
    return _client
