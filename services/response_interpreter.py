"""
Interpretation of Gemini image edit responses.

Checks run in a fixed order and the first match decides the result:
1. Prompt blocked (prompt_feedback.block_reason)
2. Image part present (first inline_data part of the first candidate)
3. Abnormal finish reason (anything other than STOP)
4. No image (embedding any text the model returned)

A normal STOP finish with an image is the success path, so the image check
must precede the finish-reason check.
"""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from typing import Any, Literal

from schemas import NORMAL_FINISH_REASON

logger = logging.getLogger(__name__)

FailureCategory = Literal["blocked", "stopped", "no_image", "transport", "validation"]

NO_IMAGE_HINT = (
    "This can happen due to safety filters or if the request is too complex. "
    "Please try rephrasing your prompt to be more direct."
)


# =============================================================================
# Result Type
# =============================================================================


@dataclass
class EditResult:
    """Outcome of one edit attempt: an image data URL or a failure message."""

    image_url: str | None = None
    error: str | None = None
    category: FailureCategory | None = None

    @property
    def ok(self) -> bool:
        return self.image_url is not None

    @classmethod
    def success(cls, image_url: str) -> EditResult:
        return cls(image_url=image_url)

    @classmethod
    def failure(cls, category: FailureCategory, error: str) -> EditResult:
        return cls(error=error, category=category)


# =============================================================================
# Helpers
# =============================================================================


def _enum_value(value: Any) -> str:
    """Render SDK enums by value ("SAFETY", not "FinishReason.SAFETY")."""
    return str(getattr(value, "value", value))


def _first_candidate(response) -> Any | None:
    candidates = getattr(response, "candidates", None)
    if not candidates:
        return None
    return candidates[0]


def _candidate_parts(candidate) -> list:
    if candidate is None or not candidate.content:
        return []
    return list(candidate.content.parts or [])


def _image_data_url(part) -> str | None:
    inline_data = getattr(part, "inline_data", None)
    if not inline_data or not inline_data.data:
        return None

    mime_type = inline_data.mime_type or "image/png"
    data = inline_data.data

    # The SDK may hand back raw bytes or an already-encoded string
    if isinstance(data, bytes):
        data = base64.b64encode(data).decode("utf-8")

    return f"data:{mime_type};base64,{data}"


def _response_text(parts: list) -> str:
    text = ""
    for part in parts:
        if getattr(part, "thought", None):
            continue
        if getattr(part, "text", None):
            text += part.text
    return text.strip()


# =============================================================================
# Interpreter
# =============================================================================


def interpret_response(response) -> EditResult:
    """Map a raw GenerateContentResponse to an EditResult."""
    feedback = getattr(response, "prompt_feedback", None)
    if feedback is not None and feedback.block_reason:
        reason = _enum_value(feedback.block_reason)
        message = f"Request was blocked. Reason: {reason}. {feedback.block_reason_message or ''}"
        return EditResult.failure("blocked", message.rstrip())

    candidate = _first_candidate(response)
    parts = _candidate_parts(candidate)

    for part in parts:
        image_url = _image_data_url(part)
        if image_url:
            return EditResult.success(image_url)

    finish_reason = getattr(candidate, "finish_reason", None) if candidate else None
    if finish_reason and _enum_value(finish_reason) != NORMAL_FINISH_REASON:
        return EditResult.failure(
            "stopped",
            f"Image generation stopped unexpectedly. Reason: {_enum_value(finish_reason)}. "
            "This often relates to safety settings.",
        )

    text_feedback = _response_text(parts)
    if text_feedback:
        detail = f'The model responded with text: "{text_feedback}"'
    else:
        detail = NO_IMAGE_HINT
    return EditResult.failure(
        "no_image", f"The AI model did not return an image. {detail}"
    )
