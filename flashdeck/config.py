"""Runtime configuration for flashdeck.

Values come from the environment so the builder, the data API and the
Streamlit slideshow can be pointed at different folders without code edits.

Environment variables:
    FLASHDECK_REPO_ROOT: Folder holding the note roots. Default: '.'.
    FLASHDECK_SOURCES: CSV of root folder names. Default: 'notes,practice'.
    FLASHDECK_BUILD_DIR: Where the dataset artifacts are written.
        Default: 'static/web/build'.
    FLASHDECK_DATA_URL: URL the slideshow fetches a fresh dataset from.
    FLASHDECK_DISPLAY_SECONDS: How long a card stays visible. Default: 10.
    FLASHDECK_TRANSITION_SECONDS: Fade-out duration. Default: 0.6.
    FLASHDECK_FETCH_TIMEOUT: Optional timeout (seconds) for the dataset fetch.
    FLASHDECK_CORS_ORIGINS: Optional CSV of allowed origins for the data API.
"""

import os
from pathlib import Path
from typing import List, Optional


def _csv(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def _optional_float(value: str) -> Optional[float]:
    value = value.strip()
    return float(value) if value else None


REPO_ROOT: Path = Path(os.getenv("FLASHDECK_REPO_ROOT", "."))
CONTENT_SOURCES: List[str] = _csv(os.getenv("FLASHDECK_SOURCES", "notes,practice"))
BUILD_DIR: Path = Path(os.getenv("FLASHDECK_BUILD_DIR", "static/web/build"))

DATA_SCRIPT_NAME = "flash-card-data.js"
DATA_JSON_NAME = "flash-card-data.json"
DATA_VARIABLE = "window.FLASH_CARD_DATA"

DATA_URL: str = os.getenv("FLASHDECK_DATA_URL", f"http://localhost:8000/{DATA_JSON_NAME}")
FETCH_TIMEOUT: Optional[float] = _optional_float(os.getenv("FLASHDECK_FETCH_TIMEOUT", ""))

DISPLAY_DURATION: float = float(os.getenv("FLASHDECK_DISPLAY_SECONDS", "10"))
TRANSITION_DURATION: float = float(os.getenv("FLASHDECK_TRANSITION_SECONDS", "0.6"))

CORS_ORIGINS: List[str] = _csv(os.getenv("FLASHDECK_CORS_ORIGINS", ""))

# Extraction defaults
DEFAULT_LANGUAGE = "csharp"
DEFAULT_TOPIC = "General"
MARKER_LOOKBACK = 5
