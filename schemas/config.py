"""
AI model and configuration constants.

PROVIDER CONFIGURATION:
This file contains the only provider-specific configuration in the codebase.
To switch AI providers, update the model identifiers below.
"""

import os
from typing import Final

# =============================================================================
# Model Identifiers
# =============================================================================
# Currently configured for Google Gemini. Change these values to switch providers.

AI_MODELS: Final[dict[str, str]] = {
    # Image editing (must be an image-capable model variant)
    "IMAGE_EDIT": os.getenv("IMAGE_EDIT_MODEL", "gemini-2.5-flash-image-preview"),
}

# Finish reason reported by the model on normal completion
NORMAL_FINISH_REASON: Final[str] = "STOP"

# =============================================================================
# Edit History Configuration
# =============================================================================

MAX_HISTORY_ENTRIES: Final[int] = 50
HISTORY_KEY: Final[str] = "photo-edit-history"
DEFAULT_HISTORY_PATH: Final[str] = "~/.photo-edit/history.json"

# =============================================================================
# Client Configuration
# =============================================================================

DEFAULT_API_BASE_URL: Final[str] = "http://localhost:8000"
