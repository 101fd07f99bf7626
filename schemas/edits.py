"""
Pydantic schemas for the photo edit endpoints.

Request fields keep the camelCase names the browser client sends. Required
fields are declared Optional so a missing field is reported as
"Missing required fields" (400) by the endpoint instead of a framework 422.
"""

from typing import ClassVar, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Edit Modes
# =============================================================================

EditMode = Literal["retouch", "filter", "adjustment"]

EditStatus = Literal["success", "error"]


# =============================================================================
# Request Schemas
# =============================================================================


class Hotspot(BaseModel):
    """Pixel coordinate marking the focal point of a localized edit."""

    x: int = Field(..., ge=0, description="X coordinate in pixels")
    y: int = Field(..., ge=0, description="Y coordinate in pixels")


class EditRequest(BaseModel):
    """Fields shared by every edit request."""

    mode: ClassVar[EditMode]
    required_fields: ClassVar[tuple[str, ...]]
    instruction_field: ClassVar[str]

    imageData: Optional[str] = Field(
        None, description="Image as data URL or '<mime>;<base64>' string"
    )

    @property
    def instruction(self) -> str:
        """The free-text instruction held in this mode's prompt field."""
        return getattr(self, self.instruction_field) or ""

    def missing_fields(self) -> list[str]:
        """Return the required fields that are absent or empty."""
        return [name for name in self.required_fields if not getattr(self, name)]


class RetouchRequest(EditRequest):
    """Request body for POST /api/retouch."""

    mode: ClassVar[EditMode] = "retouch"
    required_fields: ClassVar[tuple[str, ...]] = ("imageData", "userPrompt", "hotspot")
    instruction_field: ClassVar[str] = "userPrompt"

    userPrompt: Optional[str] = Field(None, description="Localized edit instruction")
    hotspot: Optional[Hotspot] = Field(None, description="Focal point of the edit")


class FilterRequest(EditRequest):
    """Request body for POST /api/filter."""

    mode: ClassVar[EditMode] = "filter"
    required_fields: ClassVar[tuple[str, ...]] = ("imageData", "filterPrompt")
    instruction_field: ClassVar[str] = "filterPrompt"

    filterPrompt: Optional[str] = Field(None, description="Stylistic filter instruction")


class AdjustmentRequest(EditRequest):
    """Request body for POST /api/adjust."""

    mode: ClassVar[EditMode] = "adjustment"
    required_fields: ClassVar[tuple[str, ...]] = ("imageData", "adjustmentPrompt")
    instruction_field: ClassVar[str] = "adjustmentPrompt"

    adjustmentPrompt: Optional[str] = Field(None, description="Global adjustment instruction")


# =============================================================================
# Response Schemas
# =============================================================================


class EditImageResponse(BaseModel):
    """Successful edit: the resulting image as a base64 data URL."""

    imageUrl: str = Field(..., description="Edited image as base64 data URL")


class ErrorResponse(BaseModel):
    """Failed edit or rejected request."""

    error: str = Field(..., description="Human-readable error message")


# =============================================================================
# Edit History
# =============================================================================


class HistoryEntry(BaseModel):
    """
    One recorded edit attempt.

    Entries are immutable once created and serialize to the same JSON shape
    the browser client keeps in local storage.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    timestamp: int = Field(..., description="Creation time in epoch milliseconds")
    type: EditMode
    prompt: str
    status: EditStatus
    error: Optional[str] = None
    imageUrl: Optional[str] = None
