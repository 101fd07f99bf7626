"""
Client for the photo edit endpoints.

Encodes a local image file as a data URL, posts it to the matching endpoint
and records every attempt in the edit history before returning the image
or re-raising the failure.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import Any

import httpx

from schemas import DEFAULT_API_BASE_URL
from schemas.edits import EditMode, Hotspot
from services.history import EditHistory
from services.image_utils import file_to_data_url
from services.prompt_builder import EDIT_MODES

logger = logging.getLogger(__name__)

FALLBACK_ERROR = "An error occurred while processing the request."
UNKNOWN_ERROR = "An unknown error occurred."


class EditRequestError(Exception):
    """An edit request that the server rejected or failed to process."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class EditClient:
    """
    Calls the edit endpoints and records each attempt in the history.

    Args:
        history: Log that receives one entry per attempt
        base_url: Server base URL (defaults to EDIT_API_BASE_URL)
        http_client: Optional preconfigured httpx.AsyncClient
    """

    def __init__(
        self,
        history: EditHistory,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.history = history
        self._base_url = (
            base_url or os.getenv("EDIT_API_BASE_URL") or DEFAULT_API_BASE_URL
        ).rstrip("/")
        self._http = http_client

    async def generate_edited_image(
        self, image_path: str | Path, user_prompt: str, hotspot: Hotspot
    ) -> str:
        """Apply a localized edit around hotspot. Returns the image data URL."""
        logger.info("Starting generative edit at: %s", hotspot.model_dump())
        return await self._submit(
            "retouch", image_path, user_prompt, {"hotspot": hotspot.model_dump()}
        )

    async def generate_filtered_image(
        self, image_path: str | Path, filter_prompt: str
    ) -> str:
        """Apply a stylistic filter. Returns the image data URL."""
        logger.info("Starting filter generation: %s", filter_prompt)
        return await self._submit("filter", image_path, filter_prompt)

    async def generate_adjusted_image(
        self, image_path: str | Path, adjustment_prompt: str
    ) -> str:
        """Apply a global adjustment. Returns the image data URL."""
        logger.info("Starting global adjustment generation: %s", adjustment_prompt)
        return await self._submit("adjustment", image_path, adjustment_prompt)

    async def _submit(
        self,
        mode: EditMode,
        image_path: str | Path,
        instruction: str,
        extra: dict[str, Any] | None = None,
    ) -> str:
        spec = EDIT_MODES[mode]
        try:
            image_data = await asyncio.to_thread(file_to_data_url, image_path)
            payload = {"imageData": image_data, spec.instruction_field: instruction}
            if extra:
                payload.update(extra)

            response = await self._post(spec.path, payload)
            if not response.is_success:
                raise EditRequestError(
                    _error_message(response), status_code=response.status_code
                )

            image_url = response.json()["imageUrl"]
            logger.info("Received response from API endpoint for %s.", mode)
        except Exception as e:
            message = str(e) or UNKNOWN_ERROR
            await asyncio.to_thread(
                self.history.add, mode, instruction, "error", error=message
            )
            raise

        await asyncio.to_thread(
            self.history.add, mode, instruction, "success", image_url=image_url
        )
        return image_url

    async def _post(self, path: str, payload: dict[str, Any]) -> httpx.Response:
        if self._http is not None:
            return await self._http.post(path, json=payload)
        async with httpx.AsyncClient(base_url=self._base_url, timeout=None) as client:
            return await client.post(path, json=payload)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return FALLBACK_ERROR
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return FALLBACK_ERROR
