"""Schemas and configuration for the photo edit server."""

from .config import (
    AI_MODELS,
    DEFAULT_API_BASE_URL,
    DEFAULT_HISTORY_PATH,
    HISTORY_KEY,
    MAX_HISTORY_ENTRIES,
    NORMAL_FINISH_REASON,
)
from .edits import (
    AdjustmentRequest,
    EditImageResponse,
    EditMode,
    EditRequest,
    EditStatus,
    ErrorResponse,
    FilterRequest,
    HistoryEntry,
    Hotspot,
    RetouchRequest,
)

__all__ = [
    # Config
    "AI_MODELS",
    "DEFAULT_API_BASE_URL",
    "DEFAULT_HISTORY_PATH",
    "HISTORY_KEY",
    "MAX_HISTORY_ENTRIES",
    "NORMAL_FINISH_REASON",
    # Edit Types
    "EditMode",
    "EditStatus",
    "Hotspot",
    "EditRequest",
    "RetouchRequest",
    "FilterRequest",
    "AdjustmentRequest",
    "EditImageResponse",
    "ErrorResponse",
    # History Types
    "HistoryEntry",
]
