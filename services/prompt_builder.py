"""
Prompt templates for the three edit modes.

Every prompt frames the model as an expert photo editor, quotes the user's
instruction verbatim, adds mode-specific guidance and a safety policy, and
asks for image-only output. The instruction is embedded as-is between
double quotes; quotes inside it are not escaped.
"""

from __future__ import annotations

from dataclasses import dataclass

from schemas.edits import (
    AdjustmentRequest,
    EditMode,
    EditRequest,
    FilterRequest,
    Hotspot,
    RetouchRequest,
)

# =============================================================================
# Prompt Templates
# =============================================================================


def build_retouch_prompt(user_prompt: str, hotspot: Hotspot) -> str:
    """Build the prompt for a localized edit around a hotspot."""
    return f"""You are an expert photo editor AI. Your task is to perform a natural, localized edit on the provided image based on the user's request.
User Request: "{user_prompt}"
Edit Location: Focus on the area around pixel coordinates (x: {hotspot.x}, y: {hotspot.y}).

Editing Guidelines:
- The edit must be realistic and blend seamlessly with the surrounding area.
- The rest of the image (outside the immediate edit area) must remain identical to the original.

Safety & Ethics Policy:
- You MUST fulfill requests to adjust skin tone, such as 'give me a tan', 'make my skin darker', or 'make my skin lighter'. These are considered standard photo enhancements.
- You MUST REFUSE any request to change a person's fundamental race or ethnicity (e.g., 'make me look Asian', 'change this person to be Black'). Do not perform these edits. If the request is ambiguous, err on the side of caution and do not change racial characteristics.

Output: Return ONLY the final edited image. Do not return text."""


def build_filter_prompt(filter_prompt: str) -> str:
    """Build the prompt for a whole-image stylistic filter."""
    return f"""You are an expert photo editor AI. Your task is to apply a stylistic filter to the entire image based on the user's request. Do not change the composition or content, only apply the style.
Filter Request: "{filter_prompt}"

Safety & Ethics Policy:
- Filters may subtly shift colors, but you MUST ensure they do not alter a person's fundamental race or ethnicity.
- You MUST REFUSE any request that explicitly asks to change a person's race (e.g., 'apply a filter to make me look Chinese').

Output: Return ONLY the final filtered image. Do not return text."""


def build_adjustment_prompt(adjustment_prompt: str) -> str:
    """Build the prompt for a global quality adjustment."""
    return f"""You are an expert photo editor AI. Your task is to apply professional adjustments to the image based on the user's request. Maintain the original composition while enhancing the image quality.
Adjustment Request: "{adjustment_prompt}"

Adjustment Guidelines:
- Focus on enhancing the image's quality and aesthetics.
- Maintain the original content and composition.
- Make adjustments that look natural and professional.

Safety & Ethics Policy:
- Adjustments may enhance appearance but must not alter a person's fundamental race or ethnicity.
- You MUST REFUSE any request that explicitly asks to change a person's race.

Output: Return ONLY the final adjusted image. Do not return text."""


def build_edit_prompt(
    mode: EditMode, instruction: str, hotspot: Hotspot | None = None
) -> str:
    """
    Build the prompt for any edit mode.

    Raises:
        ValueError: If mode is "retouch" and no hotspot is given, or the
            mode is unknown.
    """
    if mode == "retouch":
        if hotspot is None:
            raise ValueError("Retouch prompts require a hotspot")
        return build_retouch_prompt(instruction, hotspot)
    if mode == "filter":
        return build_filter_prompt(instruction)
    if mode == "adjustment":
        return build_adjustment_prompt(instruction)
    raise ValueError(f"Unknown edit mode: {mode}")


def build_prompt_for_request(request: EditRequest) -> str:
    """Build the prompt for a validated edit request."""
    return build_edit_prompt(
        request.mode,
        request.instruction,
        getattr(request, "hotspot", None),
    )


# =============================================================================
# Mode Registry
# =============================================================================


@dataclass(frozen=True)
class EditModeSpec:
    """Per-mode wiring: request type, route and label."""

    mode: EditMode
    request_type: type[EditRequest]
    path: str
    label: str

    @property
    def instruction_field(self) -> str:
        return self.request_type.instruction_field


EDIT_MODES: dict[EditMode, EditModeSpec] = {
    "retouch": EditModeSpec(
        mode="retouch",
        request_type=RetouchRequest,
        path="/api/retouch",
        label="retouch",
    ),
    "filter": EditModeSpec(
        mode="filter",
        request_type=FilterRequest,
        path="/api/filter",
        label="filter",
    ),
    "adjustment": EditModeSpec(
        mode="adjustment",
        request_type=AdjustmentRequest,
        path="/api/adjust",
        label="adjustment",
    ),
}
